"""
Single-target shortest-path primitive.

Breadth-first search from the head to one food, expanding neighbours in
Up, Left, Down, Right order, over a static obstacle set. The snake's tail
is never an obstacle since it moves away this turn.
"""

from collections import deque
from typing import Dict, Iterable, Optional, Sequence, Set

from domain.board import Coordinate, in_bounds, neighbors, step
from domain.constants import (
    DIRECTION_ORDER, MOVE_CODES, PATHFINDING_BOARD_SIZE, UNREACHABLE, UP,
)
from domain.wire import parse_body, parse_foods


def first_step(
    head: Coordinate,
    food: Coordinate,
    obstacles: Set[Coordinate],
    n: int = PATHFINDING_BOARD_SIZE,
) -> Optional[str]:
    """
    First direction of a shortest obstacle-free path from ``head`` to ``food``.

    Returns:
        The direction, UP when the head already sits on the food, or None
        when the food cannot be reached.
    """
    if head == food:
        return UP

    first: Dict[Coordinate, Optional[str]] = {head: None}
    queue = deque([head])
    while queue:
        cell = queue.popleft()
        for direction, nxt in neighbors(cell, n):
            if nxt in first or nxt in obstacles:
                continue
            first[nxt] = direction if cell == head else first[cell]
            if nxt == food:
                return first[nxt]
            queue.append(nxt)
    return None


def body_obstacles(body: Sequence[Coordinate]) -> Set[Coordinate]:
    """Segments between head and tail; both ends are passable."""
    return set(body[1:-1])


def first_free_direction(head: Coordinate, obstacles: Set[Coordinate], n: int) -> Optional[str]:
    for direction in DIRECTION_ORDER:
        nxt = step(head, direction)
        if in_bounds(nxt, n) and nxt not in obstacles:
            return direction
    return None


def greedy_snake_move(snake: Sequence[int], food: Sequence[int]) -> int:
    """
    Move code toward ``food`` with the body (minus tail) as obstacles.

    When the food is unreachable, falls back to the first direction that
    stays on the board and off the body, or Up if there is none. A dead
    (empty) snake gets Up.
    """
    body = parse_body(snake)
    if not body:
        return MOVE_CODES[UP]
    target = (food[0], food[1])
    obstacles = body_obstacles(body)

    direction = first_step(body[0], target, obstacles)
    if direction is None:
        direction = first_free_direction(body[0], obstacles, PATHFINDING_BOARD_SIZE) or UP
    return MOVE_CODES[direction]


def greedy_snake_move_barriers(
    snake: Sequence[int],
    food: Sequence[int],
    barriers: Iterable[int],
) -> int:
    """
    Like :func:`greedy_snake_move` with extra static barriers; pairs holding
    a component below 1 are padding. Returns -1 when the food is unreachable
    or the snake is dead (empty).
    """
    body = parse_body(snake)
    if not body:
        return UNREACHABLE
    target = (food[0], food[1])
    obstacles = body_obstacles(body) | set(parse_foods(list(barriers)))

    direction = first_step(body[0], target, obstacles)
    if direction is None:
        return UNREACHABLE
    return MOVE_CODES[direction]
