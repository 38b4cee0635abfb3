"""
Domain entities for the snake decision engine.

This module contains the board model, the wire format and the arena
entities. Nothing here depends on the strategy or the players.
"""

from .constants import (
    UP, LEFT, DOWN, RIGHT, VALID_MOVES, DIRECTION_ORDER, MOVE_CODES, CODE_MOVES,
)
from .board import Coordinate, in_bounds, manhattan, step
from .snake import Snake
from .game_state import GameState
from .wire import RoundSnapshot, decode_round

__all__ = [
    'UP', 'LEFT', 'DOWN', 'RIGHT', 'VALID_MOVES', 'DIRECTION_ORDER',
    'MOVE_CODES', 'CODE_MOVES',
    'Coordinate', 'in_bounds', 'manhattan', 'step',
    'Snake',
    'GameState',
    'RoundSnapshot', 'decode_round',
]
