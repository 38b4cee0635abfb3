"""
Per-opponent trajectory and food-score bookkeeping.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterable, List, Sequence

from domain.board import Coordinate

TRAJECTORY_LENGTH = 5


def food_score(head: Coordinate, last_foods: Iterable[Coordinate]) -> float:
    """1.0 when the head sits on a cell that held food last round, else 0.0."""
    return 1.0 if head in set(last_foods) else 0.0


@dataclass
class OpponentRecord:
    """Everything remembered about one opponent, keyed by its stable id."""

    opponent_id: int
    body: List[Coordinate] = field(default_factory=list)
    trajectory: Deque[Coordinate] = field(
        default_factory=lambda: deque(maxlen=TRAJECTORY_LENGTH)
    )
    score: float = 0.0

    @property
    def head(self) -> Coordinate:
        return self.body[0]


class TrajectoryLedger:
    """
    Opponent records plus our own cumulative food score.

    Records exist only for opponents seen in the latest round. An opponent
    that disappears is forgotten; if it shows up again it is a new id.
    """

    def __init__(self):
        self.records: Dict[int, OpponentRecord] = {}
        self.my_score: float = 0.0

    def record_round(
        self,
        bodies: Dict[int, List[Coordinate]],
        last_foods: Sequence[Coordinate],
    ) -> None:
        """
        Fold one round of opponent bodies into the ledger.

        Args:
            bodies: stable id -> this round's body (non-empty)
            last_foods: food cells from the previous round
        """
        for gone in [oid for oid in self.records if oid not in bodies]:
            del self.records[gone]

        for opponent_id, body in bodies.items():
            record = self.records.get(opponent_id)
            if record is None:
                record = OpponentRecord(opponent_id=opponent_id)
                self.records[opponent_id] = record
            record.body = list(body)
            record.trajectory.append(body[0])
            record.score += food_score(body[0], last_foods)

    def record_own(self, head: Coordinate, last_foods: Sequence[Coordinate]) -> float:
        self.my_score += food_score(head, last_foods)
        return self.my_score

    def score_of(self, opponent_id: int) -> float:
        record = self.records.get(opponent_id)
        return record.score if record else 0.0

    def __contains__(self, opponent_id: int) -> bool:
        return opponent_id in self.records
