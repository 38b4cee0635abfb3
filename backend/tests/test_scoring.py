"""
Tests for the per-move sub-scores and their weighting.
"""

import math
import sys
import os

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from strategy.danger import build_danger_map
from strategy.ledger import OpponentRecord
from strategy.prediction import FoodForecast
from strategy.scoring import (
    DUEL_CENTER,
    FOUR_SNAKE_CENTER,
    EAT_SCORE,
    TRAPPED_SCORE,
    aggression_subscore,
    board_center,
    food_subscore,
    score_move,
    simulate_move,
    survival_subscore,
    weights_for,
)
from strategy.session import DUEL_MODE, FOUR_SNAKE_MODE


def quiet_forecast(count):
    return FoodForecast(contested=[False] * count, enemy_distance=[math.inf] * count)


class TestWeights:
    """Tests for weights_for() and board_center()."""

    def test_four_snake_weights(self):
        weights = weights_for(FOUR_SNAKE_MODE, 3)
        assert (weights.food, weights.survival, weights.aggression) == (1.0, 10.0, 1.0)

    def test_duel_weights(self):
        weights = weights_for(DUEL_MODE, 1)
        assert (weights.food, weights.survival, weights.aggression) == (1.0, 3.0, 1.0)

    def test_aggression_boost_follows_current_count(self):
        """Two opponents on this call boost aggression regardless of the latched mode."""
        assert weights_for(DUEL_MODE, 2).aggression == 3.0
        assert weights_for(FOUR_SNAKE_MODE, 2).aggression == 3.0
        assert weights_for(FOUR_SNAKE_MODE, 2).survival == 10.0

    def test_board_center(self):
        assert board_center(FOUR_SNAKE_MODE) == FOUR_SNAKE_CENTER == (4.5, 4.5)
        assert board_center(DUEL_MODE) == DUEL_CENTER == (2.5, 2.5)
        assert board_center(0) == DUEL_CENTER


class TestSimulateMove:
    def test_grows_on_food(self):
        assert simulate_move([(2, 2), (2, 1)], (2, 3), [(2, 3)]) == [(2, 3), (2, 2), (2, 1)]

    def test_drops_tail_otherwise(self):
        assert simulate_move([(2, 2), (2, 1)], (2, 3), []) == [(2, 3), (2, 2)]
        assert simulate_move([(2, 2)], (2, 3), []) == [(2, 3)]


class TestFoodSubscore:
    """Tests for food_subscore()."""

    def test_eating_scores_exactly_eat_score(self):
        """Other foods do not change the score of an eating move."""
        forecast = FoodForecast(contested=[True, True], enemy_distance=[0, 0])
        score = food_subscore((2, 2), [(2, 2), (5, 5)], forecast, DUEL_CENTER)
        assert score == EAT_SCORE == 100.0

    def test_uncontested_food_costs_nearest_distance(self):
        score = food_subscore((1, 1), [(1, 3)], quiet_forecast(1), DUEL_CENTER)
        assert score == -2.0

    def test_contested_central_food(self):
        """Contested: -3 * dist plus the centre bonus, then the nearest distance."""
        forecast = FoodForecast(contested=[True], enemy_distance=[1])
        score = food_subscore((1, 1), [(3, 3)], forecast, DUEL_CENTER)
        assert score == pytest.approx(-12 + 10 - 4)

    def test_enemy_closer_to_food(self):
        forecast = FoodForecast(contested=[False], enemy_distance=[1])
        score = food_subscore((5, 5), [(5, 1)], forecast, DUEL_CENTER)
        assert score == pytest.approx(-4 - 4)

    def test_enemy_farther_is_ignored(self):
        forecast = FoodForecast(contested=[False], enemy_distance=[9])
        score = food_subscore((5, 5), [(5, 1)], forecast, DUEL_CENTER)
        assert score == -4.0

    def test_nearest_food_over_all_foods(self):
        forecast = FoodForecast(contested=[True, False], enemy_distance=[0, math.inf])
        score = food_subscore((1, 1), [(1, 2), (1, 5)], forecast, FOUR_SNAKE_CENTER)
        # contested food at distance 1, not central: -3; nearest is that same food: -1
        assert score == pytest.approx(-4)

    def test_no_foods(self):
        assert food_subscore((1, 1), [], quiet_forecast(0), DUEL_CENTER) == 0.0


class TestSurvivalSubscore:
    """Tests for survival_subscore()."""

    def test_open_space(self):
        score = survival_subscore((2, 2), [(2, 2)], [], 3)
        assert score == pytest.approx(50 * 3)

    def test_boxed_in(self):
        """Less room than our length scores TRAPPED_SCORE."""
        score = survival_subscore((1, 1), [(1, 1), (2, 1), (2, 2)], [], 2)
        assert score == TRAPPED_SCORE == -100.0

    def test_opponent_bodies_block(self):
        opponents = [[(2, 1), (2, 2), (2, 3)]]
        score = survival_subscore((1, 1), [(1, 1)], opponents, 3)
        assert score == pytest.approx(50 * math.sqrt(3))

    def test_room_equal_to_length_is_not_trapped(self):
        score = survival_subscore((1, 1), [(1, 1), (2, 1)], [[(2, 2)]], 2)
        assert score == pytest.approx(50 * math.sqrt(2))


class TestAggressionSubscore:
    """Tests for aggression_subscore()."""

    def _opponent(self, body, score=0.0):
        return OpponentRecord(opponent_id=0, body=body, score=score)

    def test_trade_bonus_duel(self):
        """Ahead on points and close: trade bonus plus the trap term 3 / dist."""
        opponent = self._opponent([(3, 3), (3, 4)])
        dangerous = build_danger_map([(2, 1)], [opponent.body], 5)

        score = aggression_subscore((2, 2), [opponent], 1.0, dangerous, 5, DUEL_MODE)
        assert score == pytest.approx(1000 + 1.5)

    def test_trade_bonus_four_snake(self):
        opponent = self._opponent([(3, 3), (3, 4)])
        dangerous = build_danger_map([(2, 1)], [opponent.body], 8)

        score = aggression_subscore((2, 2), [opponent], 1.0, dangerous, 8, FOUR_SNAKE_MODE)
        assert score == pytest.approx(100 + 1.5)

    def test_no_trade_when_not_ahead(self):
        opponent = self._opponent([(3, 3), (3, 4)], score=1.0)
        dangerous = build_danger_map([(2, 1)], [opponent.body], 5)

        score = aggression_subscore((2, 2), [opponent], 1.0, dangerous, 5, DUEL_MODE)
        assert score == pytest.approx(1.5)

    def test_out_of_range(self):
        opponent = self._opponent([(5, 5)])
        dangerous = build_danger_map([(1, 1)], [opponent.body], 5)

        assert aggression_subscore((1, 2), [opponent], 5.0, dangerous, 5, DUEL_MODE) == 0.0

    def test_zero_distance_is_clamped(self):
        """A move onto the opponent's head is unsafe (no trade) and divides by 1."""
        opponent = self._opponent([(3, 3)])
        dangerous = build_danger_map([(3, 2)], [opponent.body], 5)

        score = aggression_subscore((3, 3), [opponent], 1.0, dangerous, 5, DUEL_MODE)
        assert score == pytest.approx(3.0)

    def test_terms_sum_over_opponents(self):
        first = self._opponent([(3, 3)])
        second = self._opponent([(1, 2)])
        dangerous = build_danger_map([(2, 1)], [first.body, second.body], 5)

        score = aggression_subscore((2, 2), [first, second], 0.0, dangerous, 5, DUEL_MODE)
        assert score == pytest.approx(3 / 2 + 3 / 1)


class TestScoreMove:
    def test_weighted_total(self):
        breakdown = score_move(
            (2, 2), [(2, 2)], [], quiet_forecast(0), [], 0.0,
            build_danger_map([(2, 1)], [], 3), 3, DUEL_MODE, weights_for(DUEL_MODE, 1),
        )

        assert breakdown.food == 0.0
        assert breakdown.survival == pytest.approx(150)
        assert breakdown.aggression == 0.0
        assert breakdown.total == pytest.approx(450)
