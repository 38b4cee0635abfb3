"""
Session state carried between rounds of one game.

A Session replaces the process-wide globals of a host binding: the caller
creates one per game and passes it to every call. Calls for one session
must be made sequentially, in round order.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

from domain.board import Coordinate
from .identity import GreedyOverlapMatcher
from .ledger import TrajectoryLedger

logger = logging.getLogger(__name__)

# Opponent counts reported by the host for the two known formats.
DUEL_MODE = 1
FOUR_SNAKE_MODE = 3


class SessionPhase(Enum):
    PENDING = "pending"
    LATCHED = "latched"


class Session:
    """
    Mutable state of one game session.

    Attributes:
        ledger: opponent records and cumulative food scores
        previous_bodies: stable id -> body from the last round, used for matching
        next_opponent_id: first id never issued in this session
        last_foods: food cells seen last round
        matcher: identity matching strategy
    """

    def __init__(self, matcher: Optional[GreedyOverlapMatcher] = None):
        self.phase = SessionPhase.PENDING
        self._mode: Optional[int] = None
        self.ledger = TrajectoryLedger()
        self.previous_bodies: Dict[int, List[Coordinate]] = {}
        self.next_opponent_id = 0
        self.last_foods: List[Coordinate] = []
        self.matcher = matcher or GreedyOverlapMatcher()
        self.rounds_played = 0

    def latch_mode(self, opponent_count: int) -> None:
        """
        Fix the game mode on the first round. Later calls are no-ops, even if
        the host reports a different opponent count.
        """
        if self.phase is SessionPhase.LATCHED:
            return
        self._mode = opponent_count
        self.phase = SessionPhase.LATCHED
        logger.debug("Session mode latched to %d opponents", opponent_count)

    @property
    def mode(self) -> int:
        if self.phase is SessionPhase.PENDING:
            raise RuntimeError("Session mode read before the first round.")
        return self._mode

    @property
    def is_four_snake(self) -> bool:
        return self.mode == FOUR_SNAKE_MODE

    def assign_ids(self, bodies: List[List[Coordinate]]) -> List[int]:
        """
        Match this round's opponent bodies to stable ids and remember them
        for the next round. The remembered mapping is replaced wholesale.
        """
        ids, self.next_opponent_id = self.matcher.match(
            bodies, self.previous_bodies, self.next_opponent_id
        )
        self.previous_bodies = {oid: list(body) for oid, body in zip(ids, bodies)}
        return ids

    def foods_for_scoring(self, current_foods: List[Coordinate]) -> List[Coordinate]:
        """Last round's foods, or the current ones before any round was seen."""
        return self.last_foods if self.last_foods else list(current_foods)

    def finish_round(self, foods: List[Coordinate]) -> None:
        self.last_foods = list(foods)
        self.rounds_played += 1
