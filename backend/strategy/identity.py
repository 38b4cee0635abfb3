"""
Opponent identity tracking.

The host reorders opponent slots freely between rounds, so ids have to be
recovered from the bodies themselves. Consecutive bodies of one snake share
most of their cells (a non-growing snake of length 4 keeps 3), which is what
the overlap threshold relies on.
"""

import logging
from typing import Dict, List, Sequence, Tuple

from domain.board import Coordinate

logger = logging.getLogger(__name__)

MATCH_THRESHOLD = 3


def overlap(current: Sequence[Coordinate], previous: Sequence[Coordinate]) -> int:
    """Number of cells of ``current`` that also appear in ``previous``."""
    remembered = set(previous)
    return sum(1 for cell in current if cell in remembered)


class GreedyOverlapMatcher:
    """
    Greedy, order-dependent matcher.

    Opponents are assigned in slot order. Each one takes the unused previous
    id with the largest overlap, provided the overlap reaches the threshold;
    ties go to the id remembered first. Anything left unmatched gets a fresh
    id. This is not an optimal assignment: an early opponent can take an id
    that a later one fits better.
    """

    def __init__(self, threshold: int = MATCH_THRESHOLD):
        self.threshold = threshold

    def match(
        self,
        current: List[List[Coordinate]],
        previous: Dict[int, List[Coordinate]],
        next_id: int,
    ) -> Tuple[List[int], int]:
        """
        Assign a stable id to every body in ``current``.

        Args:
            current: This round's opponent bodies, in slot order
            previous: Last round's stable id -> body, in insertion order
            next_id: First id that has never been issued

        Returns:
            (ids aligned with ``current``, updated next_id)
        """
        assigned: List[int] = []
        used = set()

        for body in current:
            best_id = None
            best_count = 0
            for prev_id, prev_body in previous.items():
                if prev_id in used:
                    continue
                count = overlap(body, prev_body)
                if count >= self.threshold and count > best_count:
                    best_id = prev_id
                    best_count = count

            if best_id is None:
                best_id = next_id
                next_id += 1
                logger.debug("New opponent id %d for body %s", best_id, body)
            else:
                logger.debug("Matched body %s to id %d (overlap %d)", body, best_id, best_count)

            used.add(best_id)
            assigned.append(best_id)

        return assigned, next_id
