from __future__ import annotations

"""
TrueSkill rating engine wrapper.

Encapsulates the TrueSkill environment and keeps an in-memory rating per
player variant and snake slot, updated after every arena game from its
per-snake results.
"""

import logging
from dataclasses import dataclass
from typing import List, Dict, Any

from trueskill import TrueSkill, Rating

logger = logging.getLogger(__name__)

# Fixed configuration (keep in code, not env vars)
DEFAULT_MU = 25.0
DEFAULT_SIGMA = DEFAULT_MU / 3.0  # ~8.333
DEFAULT_BETA = DEFAULT_MU / 6.0
DEFAULT_TAU = 0.5
DEFAULT_DRAW_PROBABILITY = 0.1
DISPLAY_MULTIPLIER = 50.0  # Scales conservative rating into a friendlier number

# Result ranking (lower is better)
RESULT_RANK = {"won": 0, "tied": 1, "lost": 2}


def rating_key(player_name: str, snake_id: str) -> str:
    return f"{player_name}#{snake_id}"


@dataclass
class ParticipantState:
    player_name: str
    snake_id: str
    rating_key: str
    result: str
    score: int
    rating: Rating


class TrueSkillEngine:
    """
    Wraps the TrueSkill environment and provides helpers for conservative
    rating and display scaling.

    Ratings are keyed by variant and snake slot (see :func:`rating_key`), so
    several snakes of one variant in a game each keep their own rating.
    """

    def __init__(self, env: TrueSkill | None = None) -> None:
        self.env = env or TrueSkill(
            mu=DEFAULT_MU,
            sigma=DEFAULT_SIGMA,
            beta=DEFAULT_BETA,
            tau=DEFAULT_TAU,
            draw_probability=DEFAULT_DRAW_PROBABILITY,
        )
        self.ratings: Dict[str, Rating] = {}

    def rating_for(self, key: str) -> Rating:
        if key not in self.ratings:
            self.ratings[key] = self.env.create_rating()
        return self.ratings[key]

    def conservative_rating(self, rating: Rating) -> float:
        return rating.mu - 3.0 * rating.sigma

    def display_score(self, rating: Rating) -> float:
        return self.conservative_rating(rating) * DISPLAY_MULTIPLIER

    def _rank_from_result(self, result: str) -> int:
        """
        Map result strings to TrueSkill ranks (0 is best). Defaults to tie.
        """
        return RESULT_RANK.get(result or "tied", RESULT_RANK["tied"])

    def _load_participants(self, game: Dict[str, Any]) -> List[ParticipantState]:
        results = game.get("game_result") or {}
        scores = game.get("final_scores") or {}
        return [
            ParticipantState(
                player_name=player_name,
                snake_id=snake_id,
                rating_key=rating_key(player_name, snake_id),
                result=results.get(snake_id, "tied"),
                score=scores.get(snake_id, 0),
                rating=self.rating_for(rating_key(player_name, snake_id)),
            )
            for snake_id, player_name in game["players"].items()
        ]

    def _compute_updates(self, participants: List[ParticipantState]) -> List[Dict[str, Any]]:
        """
        Compute TrueSkill updates for a set of participants.
        """
        teams = [[p.rating] for p in participants]
        ranks = [self._rank_from_result(p.result) for p in participants]

        rated_teams = self.env.rate(teams, ranks=ranks)

        updates = []
        for participant, rated_team in zip(participants, rated_teams):
            pre_rating = participant.rating
            new_rating = rated_team[0]

            updates.append(
                {
                    "player_name": participant.player_name,
                    "snake_id": participant.snake_id,
                    "rating_key": participant.rating_key,
                    "score": participant.score,
                    "result": participant.result,
                    "pre_mu": pre_rating.mu,
                    "pre_sigma": pre_rating.sigma,
                    "mu": new_rating.mu,
                    "sigma": new_rating.sigma,
                    "exposed": self.conservative_rating(new_rating),
                    "display_rating": self.display_score(new_rating),
                    "delta_mu": new_rating.mu - pre_rating.mu,
                }
            )
            self.ratings[participant.rating_key] = new_rating

        return updates

    def rate_game(self, game: Dict[str, Any], log: bool = True) -> List[Dict[str, Any]]:
        """
        Run TrueSkill updates for one arena result (as returned by
        ``arena.run_simulation``) and store the new ratings.
        """
        participants = self._load_participants(game)

        if len(participants) < 2:
            logger.warning("Game %s has fewer than 2 participants; skipping TrueSkill update.",
                           game.get("game_id"))
            return []

        updates = self._compute_updates(participants)

        if log:
            for u in updates:
                logger.debug(
                    "Updated TrueSkill for %s (mu=%.3f, sigma=%.3f, exposed=%.3f, display=%.1f)",
                    u["rating_key"], u["mu"], u["sigma"], u["exposed"], u["display_rating"],
                )

        return updates

    def leaderboard(self) -> List[Dict[str, Any]]:
        """Ratings per variant and slot, sorted by conservative exposure, best first."""
        rows = [
            {
                "rating_key": key,
                "player_name": key.rsplit("#", 1)[0],
                "mu": rating.mu,
                "sigma": rating.sigma,
                "exposed": self.conservative_rating(rating),
                "display_rating": self.display_score(rating),
            }
            for key, rating in self.ratings.items()
        ]
        rows.sort(key=lambda row: row["exposed"], reverse=True)
        return rows
