"""
Heuristic move selection for multi-snake games.

The entry points are :func:`select_move` (decoded snapshot in, direction
out) and :func:`greedy_snake_step` (the host's flat integer arrays in, move
code out). Both thread a caller-owned :class:`Session` through every round.
"""

from .session import Session, SessionPhase
from .selector import select_move, greedy_snake_step
from .pathfinding import first_step, greedy_snake_move, greedy_snake_move_barriers

__all__ = [
    'Session',
    'SessionPhase',
    'select_move',
    'greedy_snake_step',
    'first_step',
    'greedy_snake_move',
    'greedy_snake_move_barriers',
]
