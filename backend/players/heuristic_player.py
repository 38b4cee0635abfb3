"""
Heuristic player - drives the stateful decision engine from arena snapshots.
"""

import random
from typing import Dict, List, Optional

from domain.board import Coordinate
from domain.constants import MAX_SEGMENTS
from domain.game_state import GameState
from domain.wire import RoundSnapshot
from strategy.selector import select_move
from strategy.session import Session
from .base import Player


class HeuristicPlayer(Player):
    """
    Scores every direction on food, survival and aggression and plays the best.

    The player owns one :class:`Session` for the whole game. With
    ``shuffle_slots`` the opponent order is reshuffled every round, the way
    a host that does not keep slot indices stable would send them.
    """

    def __init__(
        self,
        snake_id: str,
        rng: Optional[random.Random] = None,
        shuffle_slots: bool = False,
    ):
        super().__init__(snake_id, rng)
        self.session = Session()
        self.shuffle_slots = shuffle_slots

    def build_snapshot(self, game_state: GameState) -> RoundSnapshot:
        my_body: List[Coordinate] = []
        if game_state.alive.get(self.snake_id, False):
            my_body = list(game_state.snake_positions[self.snake_id])[:MAX_SEGMENTS]

        opponents = game_state.opponents_of(self.snake_id)
        if self.shuffle_slots:
            self.rng.shuffle(opponents)

        # Dead opponents keep their slot with an empty body.
        bodies = [
            list(game_state.snake_positions[sid])[:MAX_SEGMENTS] if game_state.alive[sid] else []
            for sid in opponents
        ]

        return RoundSnapshot(
            board_size=game_state.board_size,
            my_body=my_body,
            opponent_count=len(opponents),
            opponent_bodies=bodies,
            foods=list(game_state.apples),
            round_number=game_state.round_number,
        )

    def get_move(self, game_state: GameState) -> Dict[str, str]:
        snapshot = self.build_snapshot(game_state)
        direction = select_move(self.session, snapshot)
        ledger = self.session.ledger
        rationale = (
            f"Best weighted score on round {game_state.round_number} "
            f"(own food score {ledger.my_score:.0f}, tracking {len(ledger.records)} opponents)."
        )
        return {"direction": direction, "rationale": rationale}
