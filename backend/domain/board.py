"""
Board addressing helpers.

Boards are square, ``n x n``, with 1-indexed coordinates in ``[1, n]``.
Occupancy bitmaps are numpy boolean arrays of shape ``(n, n)`` addressed
as ``bitmap[y - 1, x - 1]``; use the helpers here rather than indexing
directly so the off-by-one lives in one place.
"""

from typing import Iterable, Iterator, Tuple

import numpy as np

from .constants import DIRECTION_ORDER, OFFSETS

Coordinate = Tuple[int, int]


def in_bounds(cell: Coordinate, n: int) -> bool:
    """Check if a cell lies inside the ``[1, n] x [1, n]`` board."""
    x, y = cell
    return 1 <= x <= n and 1 <= y <= n


def manhattan(a: Coordinate, b: Coordinate) -> int:
    """Manhattan distance between two cells."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def step(cell: Coordinate, direction: str) -> Coordinate:
    """Return the cell reached by moving one square in ``direction``."""
    dx, dy = OFFSETS[direction]
    return (cell[0] + dx, cell[1] + dy)


def neighbors(cell: Coordinate, n: int) -> Iterator[Tuple[str, Coordinate]]:
    """Yield ``(direction, cell)`` for in-bounds neighbours in evaluation order."""
    for direction in DIRECTION_ORDER:
        nxt = step(cell, direction)
        if in_bounds(nxt, n):
            yield direction, nxt


def empty_bitmap(n: int) -> np.ndarray:
    return np.zeros((n, n), dtype=bool)


def is_marked(bitmap: np.ndarray, cell: Coordinate) -> bool:
    x, y = cell
    return bool(bitmap[y - 1, x - 1])


def mark(bitmap: np.ndarray, cell: Coordinate, value: bool = True) -> None:
    x, y = cell
    bitmap[y - 1, x - 1] = value


def mark_cells(bitmap: np.ndarray, cells: Iterable[Coordinate], n: int) -> np.ndarray:
    """Mark every in-bounds cell of ``cells``; out-of-range cells are ignored."""
    for cell in cells:
        if in_bounds(cell, n):
            mark(bitmap, cell)
    return bitmap
