"""
Per-move scoring.

Each candidate move gets three sub-scores that are combined with
mode-dependent weights:

- food: pull toward reachable food, pushed away from food an opponent is
  predicted to win
- survival: room left to move after the step, from a flood fill
- aggression: rewards for closing in on opponents we out-score (trade) and
  for squeezing an opponent's free space (trap)
"""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from domain.board import Coordinate, empty_bitmap, is_marked, manhattan, mark, mark_cells
from .flood_fill import reachable_area
from .ledger import OpponentRecord
from .prediction import FoodForecast
from .session import FOUR_SNAKE_MODE

# Food
EAT_SCORE = 100.0
CENTER_BONUS = 10.0
CENTER_RADIUS = 1.5
CONTESTED_PENALTY = 3.0
DUEL_CENTER = (2.5, 2.5)
FOUR_SNAKE_CENTER = (4.5, 4.5)

# Survival
TRAPPED_SCORE = -100.0
SPACE_SCALE = 50.0

# Aggression
ENGAGE_DISTANCE = 2
TRADE_BONUS_DUEL = 1000.0
TRADE_BONUS_FOUR_SNAKE = 100.0
TRAP_THRESHOLD = 3

# Weights
FOOD_WEIGHT = 1.0
SURVIVAL_WEIGHT = 3.0
SURVIVAL_WEIGHT_FOUR_SNAKE = 10.0
AGGRESSION_WEIGHT = 1.0
AGGRESSION_WEIGHT_BOOSTED = 3.0
AGGRESSION_BOOST_OPPONENTS = 2


@dataclass(frozen=True)
class Weights:
    food: float
    survival: float
    aggression: float


@dataclass
class ScoreBreakdown:
    food: float
    survival: float
    aggression: float
    total: float


def weights_for(mode: int, opponent_count: int) -> Weights:
    """
    Survival weight follows the latched mode; the aggression weight follows
    the opponent count reported on the current call.
    """
    survival = SURVIVAL_WEIGHT_FOUR_SNAKE if mode == FOUR_SNAKE_MODE else SURVIVAL_WEIGHT
    if opponent_count == AGGRESSION_BOOST_OPPONENTS:
        aggression = AGGRESSION_WEIGHT_BOOSTED
    else:
        aggression = AGGRESSION_WEIGHT
    return Weights(food=FOOD_WEIGHT, survival=survival, aggression=aggression)


def board_center(mode: int) -> Tuple[float, float]:
    return FOUR_SNAKE_CENTER if mode == FOUR_SNAKE_MODE else DUEL_CENTER


def simulate_move(
    body: Sequence[Coordinate],
    new_head: Coordinate,
    foods: Sequence[Coordinate],
) -> List[Coordinate]:
    """Body after moving to ``new_head``: grows on food, otherwise drops the tail."""
    if new_head in foods:
        return [new_head] + list(body)
    return [new_head] + list(body[:-1])


def food_subscore(
    new_head: Coordinate,
    foods: Sequence[Coordinate],
    forecast: FoodForecast,
    center: Tuple[float, float],
) -> float:
    """
    Flat EAT_SCORE when the move eats. Otherwise, per food: a contested food
    costs three times its distance, a food the nearest predicted opponent
    reaches first costs its distance, and central foods earn a bonus on
    either penalty. The nearest food's distance is always subtracted once.
    """
    if new_head in foods:
        return EAT_SCORE

    score = 0.0
    min_dist = None
    for i, food in enumerate(foods):
        dist = manhattan(new_head, food)
        center_dist = abs(food[0] - center[0]) + abs(food[1] - center[1])
        bonus = CENTER_BONUS if center_dist < CENTER_RADIUS else 0.0

        if forecast.contested[i]:
            score += -CONTESTED_PENALTY * dist + bonus
        elif forecast.enemy_distance[i] < dist:
            score += -dist + bonus

        if min_dist is None or dist < min_dist:
            min_dist = dist

    if min_dist is not None:
        score -= min_dist
    return score


def survival_subscore(
    new_head: Coordinate,
    new_body: Sequence[Coordinate],
    opponent_bodies: Sequence[Sequence[Coordinate]],
    n: int,
) -> float:
    """
    Flood fill from the new head with every opponent body and the rest of
    our simulated body blocked. Less room than our length means we are boxed
    in.
    """
    obstacles = empty_bitmap(n)
    for body in opponent_bodies:
        mark_cells(obstacles, body, n)
    mark_cells(obstacles, new_body, n)
    mark(obstacles, new_head, False)

    space = reachable_area(new_head, obstacles, n)
    if space < len(new_body):
        return TRAPPED_SCORE
    return SPACE_SCALE * math.sqrt(space)


def aggression_subscore(
    new_head: Coordinate,
    opponents: Sequence[OpponentRecord],
    my_score: float,
    dangerous: np.ndarray,
    n: int,
    mode: int,
) -> float:
    score = 0.0
    trade_bonus = TRADE_BONUS_FOUR_SNAKE if mode == FOUR_SNAKE_MODE else TRADE_BONUS_DUEL
    head_unsafe = is_marked(dangerous, new_head)

    for opponent in opponents:
        dist = manhattan(new_head, opponent.head)
        if dist > ENGAGE_DISTANCE:
            continue

        # Trade: a head-on collision still leaves us ahead on points.
        if my_score > opponent.score and not head_unsafe:
            score += trade_bonus

        # Trap: the opponent's head is itself marked in the danger map, so the
        # probe reports no room and the term reduces to TRAP_THRESHOLD / dist.
        obstacles = dangerous.copy()
        mark(obstacles, new_head)
        space = reachable_area(opponent.head, obstacles, n)
        if space < TRAP_THRESHOLD:
            score += (TRAP_THRESHOLD - space) / max(dist, 1)

    return score


def score_move(
    new_head: Coordinate,
    new_body: Sequence[Coordinate],
    foods: Sequence[Coordinate],
    forecast: FoodForecast,
    opponents: Sequence[OpponentRecord],
    my_score: float,
    dangerous: np.ndarray,
    n: int,
    mode: int,
    weights: Weights,
) -> ScoreBreakdown:
    food = food_subscore(new_head, foods, forecast, board_center(mode))
    survival = survival_subscore(new_head, new_body, [o.body for o in opponents], n)
    aggression = aggression_subscore(new_head, opponents, my_score, dangerous, n, mode)
    total = (
        food * weights.food
        + survival * weights.survival
        + aggression * weights.aggression
    )
    return ScoreBreakdown(food=food, survival=survival, aggression=aggression, total=total)
