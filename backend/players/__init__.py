"""
Player implementations for the snake arena.

This module contains the player abstraction and the bots that control
snake movement decisions.
"""

from .base import Player
from .random_player import RandomPlayer
from .heuristic_player import HeuristicPlayer
from .pathfinder_player import PathfinderPlayer
from .variant_registry import get_player_class, list_variants, AVAILABLE_VARIANTS

__all__ = [
    'Player',
    'RandomPlayer',
    'HeuristicPlayer',
    'PathfinderPlayer',
    'get_player_class',
    'list_variants',
    'AVAILABLE_VARIANTS',
]
