"""
GameState entity - a snapshot of the arena at a point in time.
"""

from typing import List, Tuple, Dict, Optional


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        round_number: which round we are in (0-based)
        snake_positions: dict of snake_id -> list of (x, y), head first
        alive: dict of snake_id -> bool
        scores: dict of snake_id -> int
        board_size: the board is board_size x board_size, coordinates 1..board_size
        apples: list of (x, y) positions of all apples on the board
        move_history: list of dicts (one per round), each mapping snake_id -> move
        max_rounds: optional upper limit on total rounds
    """

    def __init__(
        self,
        round_number: int,
        snake_positions: Dict[str, List[Tuple[int, int]]],
        alive: Dict[str, bool],
        scores: Dict[str, int],
        board_size: int,
        apples: List[Tuple[int, int]],
        move_history: List[Dict[str, str]],
        max_rounds: Optional[int] = None
    ):
        self.round_number = round_number
        self.snake_positions = snake_positions
        self.alive = alive
        self.scores = scores
        self.board_size = board_size
        self.apples = apples
        self.move_history = move_history
        self.max_rounds = max_rounds

    def opponents_of(self, snake_id: str) -> List[str]:
        """Snake ids other than ``snake_id``, in insertion order (dead ones included)."""
        return [sid for sid in self.snake_positions if sid != snake_id]

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        A = apple
        T = snake body
        0,1,2... = snake head (showing player number)
        (1,1) is at the bottom left with x-axis labels at the bottom.
        """
        n = self.board_size
        board = [['.' for _ in range(n)] for _ in range(n)]

        for ax, ay in self.apples:
            board[ay - 1][ax - 1] = 'A'

        for i, (snake_id, positions) in enumerate(self.snake_positions.items(), start=0):
            if not self.alive[snake_id]:
                continue

            for pos_idx, (x, y) in enumerate(positions):
                if pos_idx == 0:
                    board[y - 1][x - 1] = str(i)
                else:
                    board[y - 1][x - 1] = 'T'

        result = []
        # Print rows in reverse order (top row first)
        for y in range(n, 0, -1):
            result.append(f"{y:2d} {' '.join(board[y - 1])}")

        result.append("   " + " ".join(str(i) for i in range(1, n + 1)))

        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState round={self.round_number}, apples={self.apples}, "
            f"snakes={len(self.snake_positions)}, scores={self.scores}>"
        )
