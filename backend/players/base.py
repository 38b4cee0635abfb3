"""
Base player interface for the arena engine.
"""

import random
from typing import Dict, Optional

from domain.game_state import GameState


class Player:
    """
    Base class/interface for player logic.

    Each player is responsible for returning a move for its snake_id
    given the current game state. A player instance lives for one game, so
    it may keep state between rounds.
    """

    def __init__(self, snake_id: str, rng: Optional[random.Random] = None):
        self.snake_id = snake_id
        self.rng = rng or random.Random()

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def get_move(self, game_state: GameState) -> Dict[str, str]:
        """
        Return a move given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            Dict with 'direction' (one of "UP", "LEFT", "DOWN", "RIGHT")
            and a short 'rationale'.
        """
        raise NotImplementedError
