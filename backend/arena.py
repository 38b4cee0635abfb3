"""
Arena engine: runs a multi-snake game between bot players.

Rules:
  - All snakes move simultaneously, once per round
  - Leaving the board, a head-to-head meeting, or running into any body kills
  - Snakes spawn as SPAWN_LENGTH connected free cells
  - Eating an apple scores a point and grows the snake, up to MAX_SEGMENTS
  - The apple count is kept constant
  - The game ends at the round limit or when at most one snake is alive
"""

import argparse
import json
import logging
import os
import random
import time
import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from domain.board import in_bounds, neighbors, step
from domain.constants import MAX_SEGMENTS, VALID_MOVES
from domain.game_state import GameState
from domain.snake import Snake
from players.base import Player
from players.variant_registry import get_player_class, AVAILABLE_VARIANTS

load_dotenv()

logger = logging.getLogger(__name__)

# Presets for the two supported formats
GAME_MODES: Dict[str, Dict[str, int]] = {
    "1v1": {"board_size": 5, "num_snakes": 2, "num_apples": 5, "max_rounds": 50},
    "4p": {"board_size": 8, "num_snakes": 4, "num_apples": 10, "max_rounds": 100},
}
DEFAULT_MODE = "1v1"

# Snakes spawn at full length so consecutive bodies overlap in 3 cells.
SPAWN_LENGTH = MAX_SEGMENTS


class SnakeGame:
    """
    Manages:
      - Board (board_size x board_size, 1-indexed)
      - Snakes
      - Players
      - Multiple apples
      - Scores
      - Rounds
      - Decision time per player
      - History for replay
    """
    def __init__(
        self,
        board_size: int,
        max_rounds: int = 50,
        num_apples: int = 5,
        game_id: Optional[str] = None,
        seed: Optional[int] = None,
    ):
        self.board_size = board_size
        self.snakes: Dict[str, Snake] = {}
        self.players: Dict[str, Player] = {}
        self.scores: Dict[str, int] = {}
        self.player_time: Dict[str, float] = {}
        self.round_number = 0
        self.max_rounds = max_rounds
        self.game_over = False
        self.start_time = time.time()
        self.game_result: Optional[Dict[str, str]] = None
        self.seed = seed
        self.rng = random.Random(seed)

        self.game_id = game_id or str(uuid.uuid4())

        # Store how many apples we want to keep on the board at all times
        self.num_apples = num_apples
        self.apples: List[Tuple[int, int]] = []

        self.move_history: List[Dict[str, Dict[str, Any]]] = []
        self.history: List[GameState] = []

        for _ in range(self.num_apples):
            cell = self._random_free_cell()
            if cell is None:
                break
            self.apples.append(cell)

    def add_snake(self, snake_id: str, player: Player):
        if snake_id in self.snakes:
            raise ValueError(f"Snake with id {snake_id} already exists.")

        body = self._random_free_body(SPAWN_LENGTH)
        if body is None:
            raise ValueError(f"No room left to place snake {snake_id}.")

        self.snakes[snake_id] = Snake(body)
        self.players[snake_id] = player
        self.scores[snake_id] = 0
        self.player_time[snake_id] = 0.0

        logger.info("Added snake '%s' (%s) at %s.", snake_id, player.name, body)

    def set_apples(self, apple_positions: List[Tuple[int, int]]):
        """
        Replace the apples on the board with the given positions.
        """
        for apple in apple_positions:
            if not in_bounds(apple, self.board_size):
                raise ValueError(f"Apple out of bounds at {apple}.")
        self.apples = list(apple_positions)

    def _free_cells(self) -> List[Tuple[int, int]]:
        """Cells not occupied by any living snake or apple, in board order."""
        occupied = set(self.apples)
        for snake in self.snakes.values():
            if snake.alive:
                occupied.update(snake.positions)
        return [
            (x, y)
            for x in range(1, self.board_size + 1)
            for y in range(1, self.board_size + 1)
            if (x, y) not in occupied
        ]

    def _random_free_cell(self) -> Optional[Tuple[int, int]]:
        """
        Return a random cell (x, y) not occupied by any snake or apple, or
        None when the board is full.
        """
        free = self._free_cells()
        if not free:
            return None
        return self.rng.choice(free)

    def _random_free_body(self, length: int) -> Optional[List[Tuple[int, int]]]:
        """
        Lay out a body of ``length`` distinct, 4-connected free cells, head
        first, by a random walk from a random free cell. Returns None when
        no head has room for a full body.
        """
        free = self._free_cells()
        available = set(free)
        self.rng.shuffle(free)

        for head in free:
            body = [head]
            while len(body) < length:
                options = [
                    cell for _, cell in neighbors(body[-1], self.board_size)
                    if cell in available and cell not in body
                ]
                if not options:
                    break
                body.append(self.rng.choice(options))
            if len(body) == length:
                return body
        return None

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        snake_positions = {}
        alive_dict = {}
        for sid, snake in self.snakes.items():
            snake_positions[sid] = list(snake.positions)
            alive_dict[sid] = snake.alive

        return GameState(
            round_number=self.round_number,
            snake_positions=snake_positions,
            alive=alive_dict,
            scores=self.scores.copy(),
            board_size=self.board_size,
            apples=self.apples.copy(),
            move_history=list(self.move_history),
            max_rounds=self.max_rounds,
        )

    def gather_moves(self) -> Dict[str, Dict[str, Any]]:
        """
        Ask every living snake's player for a move, one at a time, timing each call.

        A player that raises gets a random move so the game can continue.
        """
        round_moves = {}
        state_snapshot = self.get_current_state()

        for snake_id, snake in self.snakes.items():
            if not snake.alive:
                continue
            player = self.players[snake_id]
            started = time.perf_counter()
            try:
                move_data = player.get_move(state_snapshot)
            except Exception as exc:  # noqa: BLE001 - ensure the game continues
                logger.error("Player %s (%s) failed: %s. Falling back to a random move.",
                             snake_id, player.name, exc)
                move_data = {
                    "direction": self.rng.choice(sorted(VALID_MOVES)),
                    "rationale": f"Player error: {exc}.",
                }
            elapsed = time.perf_counter() - started
            self.player_time[snake_id] += elapsed

            round_moves[snake_id] = {
                "move": move_data["direction"],
                "rationale": move_data.get("rationale", ""),
                "time": elapsed,
            }
            logger.debug("Player %s (%s) chose move: %s", snake_id, player.name, move_data["direction"])

        return round_moves

    def run_round(self):
        """
        Execute one round:
          1) If game is over, do nothing
          2) Ask each alive snake for their move
          3) Apply moves simultaneously
          4) Handle apple-eating (grow + score)
          5) Check collisions
          6) Possibly end game if round limit reached or 1 snake left, etc.
        """
        if self.game_over:
            logger.info("Game is already over. No more rounds.")
            return

        round_moves = self.gather_moves()
        self.move_history.append(round_moves)
        self.record_history()

        # Compute the intended new head for every snake
        new_heads: Dict[str, Optional[Tuple[int, int]]] = {}
        for sid, snake in self.snakes.items():
            move_data = round_moves.get(sid)
            if not snake.alive or move_data is None:
                new_heads[sid] = None
                continue
            new_heads[sid] = step(snake.head, move_data["move"])

        # Build the *proposed* board after every snake moves
        eats_apple: Dict[str, bool] = {}
        proposed_bodies: Dict[str, List[Tuple[int, int]]] = {}

        for sid, snake in self.snakes.items():
            head = new_heads.get(sid)
            alive_and_moved = snake.alive and head is not None
            eats_apple[sid] = alive_and_moved and head in self.apples

            if not alive_and_moved:
                proposed_bodies[sid] = list(snake.positions)
                continue

            original_body = list(snake.positions)
            if eats_apple[sid] and len(original_body) < MAX_SEGMENTS:
                # grow: keep the tail
                new_body = [head] + original_body
            else:
                # normal move: drop the tail
                new_body = [head] + original_body[:-1]

            proposed_bodies[sid] = new_body

        # a) wall collisions
        for sid, head in new_heads.items():
            snake = self.snakes[sid]
            if not snake.alive or head is None:
                continue
            if not in_bounds(head, self.board_size):
                self._kill(snake, "wall")

        # b) head-to-head collisions
        head_counts: Dict[Tuple[int, int], List[str]] = {}
        for sid, head in new_heads.items():
            if head is not None and self.snakes[sid].alive:
                head_counts.setdefault(head, []).append(sid)

        for same_cell_snakes in head_counts.values():
            if len(same_cell_snakes) > 1:
                for sid in same_cell_snakes:
                    self._kill(self.snakes[sid], "head_collision")

        # c) head-into-body collisions
        body_cells = set()
        for sid, body in proposed_bodies.items():
            if self.snakes[sid].alive:
                body_cells.update(body[1:])   # exclude each snake's head

        for sid, head in new_heads.items():
            snake = self.snakes[sid]
            if not snake.alive or head is None:
                continue
            if head in body_cells:
                self._kill(snake, "body_collision")

        snakes_died_this_round = [
            sid for sid, s in self.snakes.items()
            if not s.alive and s.death_round == self.round_number
        ]

        # If exactly two snakes total, handle immediate win / tie logic
        if snakes_died_this_round and len(self.snakes) == 2:
            if len(snakes_died_this_round) == 1:
                survivor = [sid for sid in self.snakes if self.snakes[sid].alive][0]
                self.game_result = {snakes_died_this_round[0]: "lost", survivor: "won"}
            else:
                self.game_result = {sid: "tied" for sid in self.snakes}
            self.game_over = True
            logger.info("Game %s over in round %d: %s", self.game_id, self.round_number, self.game_result)
            self.round_number += 1
            self.record_history()
            return

        # Commit the moves & handle apples for the survivors
        for sid, snake in self.snakes.items():
            if not snake.alive or new_heads.get(sid) is None:
                continue

            snake.positions = deque(proposed_bodies[sid])

            if eats_apple[sid]:
                self.scores[sid] += 1
                self.apples.remove(new_heads[sid])

        # keep apple count constant
        while len(self.apples) < self.num_apples:
            cell = self._random_free_cell()
            if cell is None:
                break
            self.apples.append(cell)

        # End-of-round bookkeeping (round limit / last snake)
        self.round_number += 1
        alive_snakes = [sid for sid, s in self.snakes.items() if s.alive]

        if self.round_number >= self.max_rounds:
            self.end_game("Reached max rounds.")
        elif len(alive_snakes) <= 1:
            self.end_game("All but one snake are dead.")

        logger.debug("Finished round %d. Alive: %s, Scores: %s", self.round_number, alive_snakes, self.scores)

    def _kill(self, snake: Snake, reason: str):
        if not snake.alive:
            return
        snake.alive = False
        snake.death_reason = reason
        snake.death_round = self.round_number

    def end_game(self, reason: str):
        self.game_over = True
        # Decide winner by highest score
        top_score = max(self.scores.values()) if self.scores else 0
        winners = [sid for sid, sc in self.scores.items() if sc == top_score]

        self.game_result = {}
        for sid in self.scores:
            if sid in winners:
                self.game_result[sid] = "tied" if len(winners) > 1 else "won"
            else:
                self.game_result[sid] = "lost"

        logger.info("Game %s over: %s Result: %s", self.game_id, reason, self.game_result)

    def record_history(self):
        self.history.append(self.get_current_state())

    def serialize_history(self, history: List[GameState]) -> List[Dict[str, Any]]:
        """
        Convert the list of GameState objects to a JSON-serializable list of dicts.
        Tuples come out as lists.
        """
        output = []
        for state in history:
            output.append({
                "round_number": state.round_number,
                "snake_positions": state.snake_positions,
                "alive": state.alive,
                "scores": state.scores,
                "board_size": state.board_size,
                "apples": state.apples,
                "move_history": state.move_history[-1:] if state.move_history else [],
            })
        return output

    def build_metadata(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "seed": self.seed,
            "start_time": datetime.fromtimestamp(self.start_time, tz=timezone.utc).isoformat(),
            "end_time": datetime.now(timezone.utc).isoformat(),
            "players": {sid: player.name for sid, player in self.players.items()},
            "game_result": self.game_result,
            "final_scores": self.scores,
            "player_time": self.player_time,
            "death_info": {
                sid: {"reason": snake.death_reason, "round": snake.death_round}
                for sid, snake in self.snakes.items()
                if not snake.alive
            },
            "max_rounds": self.max_rounds,
            "actual_rounds": self.round_number,
        }

    def save_history_to_json(self, directory: str, filename: Optional[str] = None) -> str:
        if filename is None:
            filename = f"snake_game_{self.game_id}.json"

        data = {
            "metadata": self.build_metadata(),
            "rounds": self.serialize_history(self.history),
        }

        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, filename)
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
        logger.info("Saved replay to %s", path)
        return path

    def print_board(self) -> str:
        return self.get_current_state().print_board()


# -------------------------------
# Simulation Function
# -------------------------------

def create_player(variant: str, snake_id: str, rng: random.Random, shuffle_slots: bool = False) -> Player:
    player = get_player_class(variant)(snake_id, rng=rng)
    if shuffle_slots and hasattr(player, "shuffle_slots"):
        player.shuffle_slots = True
    return player


def run_simulation(
    variants: List[str],
    board_size: int,
    max_rounds: int,
    num_apples: int,
    seed: Optional[int] = None,
    shuffle_slots: bool = False,
    replay_dir: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Runs a single game between the given player variants.

    Args:
        variants: Player variant key per snake; snake ids are "0", "1", ...
        board_size, max_rounds, num_apples: Game settings
        seed: Seed for the board and the players' random choices
        shuffle_slots: Reshuffle opponent order for players that support it
        replay_dir: Write a JSON replay here when given

    Returns:
        A dictionary summarizing the game results.
    """
    game = SnakeGame(
        board_size=board_size,
        max_rounds=max_rounds,
        num_apples=num_apples,
        seed=seed,
    )

    for i, variant in enumerate(variants):
        snake_id = str(i)
        player_rng = random.Random(None if seed is None else seed * 1000 + i)
        game.add_snake(snake_id, create_player(variant, snake_id, player_rng, shuffle_slots))

    while not game.game_over:
        game.run_round()

    replay_path = game.save_history_to_json(replay_dir) if replay_dir else None

    return {
        "game_id": game.game_id,
        "players": {sid: variants[int(sid)] for sid in game.players},
        "final_scores": game.scores,
        "game_result": game.game_result,
        "player_time": game.player_time,
        "rounds": game.round_number,
        "replay_path": replay_path,
    }


def configure_logging():
    logging.basicConfig(
        level=os.getenv("SNAKE_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_variants(raw: Optional[str], num_snakes: int) -> List[str]:
    """
    Parse a comma-separated variant list. The first snake defaults to the
    heuristic player and the rest to random players.
    """
    if not raw:
        return ["heuristic"] + ["random"] * (num_snakes - 1)
    variants = [v.strip() for v in raw.split(",") if v.strip()]
    if len(variants) != num_snakes:
        raise ValueError(f"Expected {num_snakes} player variants, got {len(variants)}.")
    return variants


# -------------------------------
# Example Usage (Main Entry Point)
# -------------------------------
def main():
    parser = argparse.ArgumentParser(description="Run one arena game between bot players.")
    parser.add_argument("--mode", choices=sorted(GAME_MODES), default=os.getenv("SNAKE_ARENA_MODE", DEFAULT_MODE),
                        help="Game format preset")
    parser.add_argument("--players", type=str, default=os.getenv("SNAKE_ARENA_PLAYERS"),
                        help=f"Comma-separated variants, one per snake ({', '.join(AVAILABLE_VARIANTS)})")
    parser.add_argument("--seed", type=int, default=os.getenv("SNAKE_ARENA_SEED"),
                        help="Random seed for the game")
    parser.add_argument("--shuffle-slots", action="store_true",
                        help="Reshuffle opponent slots every round")
    parser.add_argument("--replay-dir", type=str, default=os.getenv("SNAKE_ARENA_REPLAY_DIR"),
                        help="Directory for the JSON replay")
    args = parser.parse_args()

    configure_logging()

    preset = GAME_MODES[args.mode]
    variants = parse_variants(args.players, preset["num_snakes"])

    result = run_simulation(
        variants,
        board_size=preset["board_size"],
        max_rounds=preset["max_rounds"],
        num_apples=preset["num_apples"],
        seed=args.seed,
        shuffle_slots=args.shuffle_slots,
        replay_dir=args.replay_dir,
    )

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
