"""
Reachable-area analysis.

One routine serves both callers: the survival check (seeded at our
candidate head) and the trap probe (seeded at an opponent head). Callers
build the obstacle bitmap; this module only walks it.
"""

from collections import deque

import numpy as np

from domain.board import Coordinate, in_bounds, is_marked, mark, neighbors


def reachable_area(seed: Coordinate, obstacles: np.ndarray, n: int) -> int:
    """
    Count cells reachable from ``seed`` through 4-connected moves.

    Args:
        seed: Starting cell, counted when it is free
        obstacles: ``(n, n)`` boolean bitmap, True for blocked cells
        n: Board size

    Returns:
        Number of reachable cells including the seed, or 0 when the seed is
        off the board or itself blocked.
    """
    if not in_bounds(seed, n) or is_marked(obstacles, seed):
        return 0

    visited = np.zeros_like(obstacles, dtype=bool)
    mark(visited, seed)
    queue = deque([seed])
    area = 0

    while queue:
        cell = queue.popleft()
        area += 1
        for _, nxt in neighbors(cell, n):
            if is_marked(visited, nxt) or is_marked(obstacles, nxt):
                continue
            mark(visited, nxt)
            queue.append(nxt)

    return area
