"""
Danger map for one round.
"""

from typing import List, Sequence

import numpy as np

from domain.board import Coordinate, empty_bitmap, mark_cells


def build_danger_map(
    my_body: Sequence[Coordinate],
    opponent_bodies: List[Sequence[Coordinate]],
    n: int,
) -> np.ndarray:
    """
    Mark every cell occupied by any segment of any snake.

    Tails are marked too; whether our own tail is safe to step on is decided
    by the legality check, not here.
    """
    dangerous = empty_bitmap(n)
    for body in opponent_bodies:
        mark_cells(dangerous, body, n)
    mark_cells(dangerous, my_body, n)
    return dangerous
