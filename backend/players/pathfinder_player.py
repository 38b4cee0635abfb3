"""
Pathfinder player - shortest path to the nearest apple, nothing else.
"""

from typing import Dict, Set

from domain.board import Coordinate, manhattan
from domain.constants import UP
from domain.game_state import GameState
from strategy.pathfinding import body_obstacles, first_free_direction, first_step
from .base import Player


class PathfinderPlayer(Player):
    """
    Walks a BFS shortest path toward the closest apple.

    Its own body minus head and tail is an obstacle, and so is every other
    living snake, treated as a static barrier for the round.
    """

    def get_move(self, game_state: GameState) -> Dict[str, str]:
        body = game_state.snake_positions[self.snake_id]
        head = body[0]
        n = game_state.board_size

        obstacles: Set[Coordinate] = body_obstacles(body)
        for sid in game_state.opponents_of(self.snake_id):
            if game_state.alive[sid]:
                obstacles.update(game_state.snake_positions[sid])

        if game_state.apples:
            target = min(game_state.apples, key=lambda apple: manhattan(head, apple))
            direction = first_step(head, target, obstacles, n)
            if direction is not None:
                return {"direction": direction, "rationale": f"Shortest path to apple {target}."}

        direction = first_free_direction(head, obstacles, n) or UP
        return {"direction": direction, "rationale": "No path to an apple; first free direction."}
