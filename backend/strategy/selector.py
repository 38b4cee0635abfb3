"""
Round driver: one call per round, one move out.

Per call:
  1) Latch the game mode on the first live round
  2) Match opponent bodies to stable ids
  3) Update trajectories and food scores
  4) Predict contested food and build the danger map
  5) Score each legal direction in Up, Left, Down, Right order
  6) Remember this round's foods for the next call
"""

import logging
import math
from typing import Optional, Sequence

import numpy as np

from domain.board import Coordinate, in_bounds, is_marked, step
from domain.constants import DIRECTION_ORDER, MOVE_CODES, UP
from domain.wire import RoundSnapshot, decode_round
from .danger import build_danger_map
from .prediction import predict_contested_food
from .scoring import score_move, simulate_move, weights_for
from .session import Session

logger = logging.getLogger(__name__)


def is_legal(
    new_head: Coordinate,
    my_body: Sequence[Coordinate],
    foods: Sequence[Coordinate],
    dangerous: np.ndarray,
    n: int,
) -> bool:
    """
    A move is legal when it stays on the board and avoids marked cells. Our
    own tail is the exception: it moves away on a non-growing step.
    """
    if not in_bounds(new_head, n):
        return False
    if not is_marked(dangerous, new_head):
        return True
    return (
        new_head == my_body[-1]
        and new_head not in foods
        and len(my_body) > 1
    )


def select_move(session: Session, snapshot: RoundSnapshot) -> str:
    """
    Pick a direction for this round and update ``session``.

    Returns:
        One of UP, LEFT, DOWN, RIGHT. UP when our snake is dead (the session
        is left untouched) or when no direction is legal.
    """
    if snapshot.is_dead:
        logger.debug("Own snake is dead, returning %s", UP)
        return UP

    session.latch_mode(snapshot.opponent_count)
    n = snapshot.board_size
    my_body = snapshot.my_body
    foods = snapshot.foods

    logger.debug(
        "Round %d: board %d, body %s, opponents %s, foods %s",
        snapshot.round_number, n, my_body, snapshot.opponent_bodies, foods,
    )

    live_bodies = [body for body in snapshot.opponent_bodies if body]
    ids = session.assign_ids(live_bodies)

    last_foods = session.foods_for_scoring(foods)
    session.ledger.record_round(dict(zip(ids, live_bodies)), last_foods)
    my_score = session.ledger.record_own(my_body[0], last_foods)
    opponents = [session.ledger.records[oid] for oid in ids]

    forecast = predict_contested_food(foods, opponents)
    dangerous = build_danger_map(my_body, live_bodies, n)
    weights = weights_for(session.mode, snapshot.opponent_count)

    best_move = UP
    best_score = -math.inf
    for direction in DIRECTION_ORDER:
        new_head = step(my_body[0], direction)
        if not is_legal(new_head, my_body, foods, dangerous, n):
            logger.debug("%s skipped: %s is blocked", direction, new_head)
            continue

        new_body = simulate_move(my_body, new_head, foods)
        breakdown = score_move(
            new_head, new_body, foods, forecast, opponents, my_score,
            dangerous, n, session.mode, weights,
        )
        logger.debug(
            "%s -> %s: food=%.2f survival=%.2f aggression=%.2f total=%.2f",
            direction, new_head, breakdown.food, breakdown.survival,
            breakdown.aggression, breakdown.total,
        )
        if breakdown.total > best_score:
            best_score = breakdown.total
            best_move = direction

    session.finish_round(foods)
    logger.debug("Chose %s (score %s)", best_move, best_score)
    return best_move


def greedy_snake_step(
    session: Session,
    n: int,
    my_snake: Sequence[int],
    snake_num: int,
    other_snakes: Sequence[int],
    food_num: Optional[int],
    foods: Sequence[int],
    round_number: int = 0,
) -> int:
    """
    Flat-integer entry point matching the host call.

    ``food_num`` is accepted for signature compatibility; the food count is
    taken from ``foods`` itself.

    Returns:
        0=Up, 1=Left, 2=Down, 3=Right
    """
    snapshot = decode_round(n, my_snake, snake_num, other_snakes, foods, round_number)
    return MOVE_CODES[select_move(session, snapshot)]
