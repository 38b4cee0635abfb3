"""
Random player implementation - picks random safe moves.
"""

from typing import Dict, List

from domain.board import in_bounds, step
from domain.constants import DIRECTION_ORDER, VALID_MOVES
from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a valid direction that avoids walls and self-collisions.
    """

    def get_move(self, game_state: GameState) -> Dict[str, str]:
        snake_positions = game_state.snake_positions[self.snake_id]
        head = snake_positions[0]

        # Filter out moves that:
        # 1. Hit walls
        # 2. Hit own body (except tail, which will move)
        valid_moves: List[str] = []
        for move in DIRECTION_ORDER:
            nxt = step(head, move)
            if not in_bounds(nxt, game_state.board_size):
                continue
            if nxt in snake_positions[:-1]:
                continue
            valid_moves.append(move)

        # If no valid moves, just return a random move (we'll die anyway)
        if not valid_moves:
            direction = self.rng.choice(sorted(VALID_MOVES))
            return {"direction": direction, "rationale": "No safe move available."}

        direction = self.rng.choice(valid_moves)
        return {"direction": direction, "rationale": f"Random pick among {valid_moves}."}
