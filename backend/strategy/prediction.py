"""
Contested-food prediction from opponent trajectories.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from domain.board import Coordinate, manhattan
from .ledger import OpponentRecord

logger = logging.getLogger(__name__)

CONTEST_RADIUS = 2


@dataclass
class FoodForecast:
    """
    Attributes:
        contested: per food, True when some opponent is predicted within reach
        enemy_distance: per food, the smallest predicted opponent distance
            (``math.inf`` when no opponent could be predicted)
    """

    contested: List[bool]
    enemy_distance: List[float]


def predict_position(record: OpponentRecord) -> Optional[Coordinate]:
    """
    Extrapolate one step ahead as head + (newest - oldest sample).

    Returns None with fewer than two samples.
    """
    if len(record.trajectory) < 2:
        return None
    first, last = record.trajectory[0], record.trajectory[-1]
    hx, hy = record.head
    return (hx + last[0] - first[0], hy + last[1] - first[1])


def predict_contested_food(
    foods: Sequence[Coordinate],
    records: Iterable[OpponentRecord],
) -> FoodForecast:
    contested = [False] * len(foods)
    enemy_distance = [math.inf] * len(foods)

    for record in records:
        predicted = predict_position(record)
        if predicted is None:
            continue
        for i, food in enumerate(foods):
            dist = manhattan(predicted, food)
            if dist < enemy_distance[i]:
                enemy_distance[i] = dist
            if dist <= CONTEST_RADIUS:
                contested[i] = True

    logger.debug("Contested foods %s, enemy distances %s", contested, enemy_distance)
    return FoodForecast(contested=contested, enemy_distance=enemy_distance)
