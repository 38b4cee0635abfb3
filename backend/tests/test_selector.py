"""
Tests for the round driver: legality, move choice and session updates.
"""

import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.board import empty_bitmap
from domain.constants import UP, LEFT, RIGHT
from domain.wire import RoundSnapshot
from strategy.danger import build_danger_map
from strategy.selector import greedy_snake_step, is_legal, select_move
from strategy.session import Session, SessionPhase


def snapshot(n, my_body, opponents=None, foods=None, opponent_count=None, round_number=0):
    opponents = opponents or []
    return RoundSnapshot(
        board_size=n,
        my_body=my_body,
        opponent_count=len(opponents) if opponent_count is None else opponent_count,
        opponent_bodies=opponents,
        foods=foods or [],
        round_number=round_number,
    )


def column(x, top, length=4):
    return [(x, top - i) for i in range(length)]


class TestIsLegal:
    """Tests for is_legal()."""

    def test_off_board(self):
        assert not is_legal((0, 1), [(1, 1)], [], empty_bitmap(3), 3)

    def test_free_cell(self):
        assert is_legal((1, 2), [(1, 1)], [], empty_bitmap(3), 3)

    def test_own_tail_is_legal(self):
        body = [(2, 2), (2, 1), (1, 1), (1, 2)]
        dangerous = build_danger_map(body, [], 2)
        assert is_legal((1, 2), body, [], dangerous, 2)

    def test_own_tail_on_food_is_not_legal(self):
        body = [(2, 2), (2, 1), (1, 1), (1, 2)]
        dangerous = build_danger_map(body, [], 2)
        assert not is_legal((1, 2), body, [(1, 2)], dangerous, 2)

    def test_single_segment_has_no_tail_exception(self):
        dangerous = build_danger_map([(1, 1)], [], 2)
        assert not is_legal((1, 1), [(1, 1)], [], dangerous, 2)

    def test_opponent_tail_is_not_legal(self):
        opponent = [(3, 3), (3, 2)]
        dangerous = build_danger_map([(2, 2)], [opponent], 3)
        assert not is_legal((3, 2), [(2, 2)], [], dangerous, 3)


class TestSelectMove:
    """Tests for select_move()."""

    def test_dead_snake_returns_up_and_leaves_session(self):
        session = Session()
        move = select_move(session, snapshot(5, [], [[(1, 1)]], [(2, 2)]))

        assert move == UP
        assert session.phase is SessionPhase.PENDING
        assert session.rounds_played == 0
        assert session.next_opponent_id == 0
        assert session.last_foods == []

    def test_no_legal_move_returns_up(self):
        session = Session()
        assert select_move(session, snapshot(1, [(1, 1)])) == UP
        assert session.rounds_played == 1

    def test_eats_adjacent_food(self):
        """Eating (100) plus room beats every non-eating move."""
        session = Session()
        move = select_move(session, snapshot(5, [(3, 3)], foods=[(4, 3)]))
        assert move == RIGHT

    def test_ties_go_to_earliest_direction(self):
        """A lone snake in the middle of an empty board scores all moves equally."""
        session = Session()
        assert select_move(session, snapshot(3, [(2, 2)])) == UP

    def test_follows_own_tail(self):
        """The tail is the only free cell and is accepted."""
        session = Session()
        body = [(2, 2), (2, 1), (1, 1), (1, 2)]
        assert select_move(session, snapshot(2, body)) == LEFT

    def test_tail_with_food_rejected(self):
        session = Session()
        body = [(2, 2), (2, 1), (1, 1), (1, 2)]
        assert select_move(session, snapshot(2, body, foods=[(1, 2)])) == UP

    def test_avoids_walls_and_bodies(self):
        """In a corner with the neck above, only RIGHT stays alive."""
        session = Session()
        move = select_move(session, snapshot(5, [(1, 1), (1, 2), (1, 3)], [[(3, 3)]]))
        assert move == RIGHT

    def test_mode_latched_on_first_round(self):
        session = Session()
        select_move(session, snapshot(5, [(3, 3)], [[(1, 1)]]))
        select_move(session, snapshot(5, [(3, 4)], [[(1, 2)], [(5, 5)], [(5, 1)]]))

        assert session.mode == 1
        assert session.rounds_played == 2

    def test_dead_opponent_slots_are_skipped(self):
        session = Session()
        select_move(session, snapshot(5, [(3, 3)], [[], [(1, 1)]]))

        assert session.next_opponent_id == 1
        assert list(session.ledger.records) == [0]

    def test_trajectories_capped_across_rounds(self):
        session = Session()
        for k in range(8):
            select_move(session, snapshot(12, [(8, 8)], [column(1, 4 + k)], round_number=k))

        record = session.ledger.records[0]
        assert list(session.ledger.records) == [0]
        assert len(record.trajectory) == 5
        assert record.trajectory[-1] == (1, 11)

    def test_ids_follow_bodies_when_slots_swap(self):
        session = Session()
        select_move(session, snapshot(8, [(8, 8)], [column(1, 4), column(5, 4)]))
        select_move(session, snapshot(8, [(8, 7)], [column(5, 5), column(1, 5)]))

        assert session.previous_bodies[0] == column(1, 5)
        assert session.previous_bodies[1] == column(5, 5)
        assert session.next_opponent_id == 2

    def test_food_scores_use_previous_round_foods(self):
        session = Session()
        select_move(session, snapshot(5, [(1, 1)], [[(5, 1)]], [(5, 5), (3, 3)]))
        select_move(session, snapshot(5, [(5, 5)], [[(3, 3)]], []))

        assert session.ledger.my_score == 1.0
        scores = [record.score for record in session.ledger.records.values()]
        assert scores == [1.0]

    def test_last_foods_remembered(self):
        session = Session()
        select_move(session, snapshot(5, [(1, 1)], foods=[(4, 4)]))
        assert session.last_foods == [(4, 4)]


class TestGreedySnakeStep:
    """Tests for the flat integer entry point."""

    def test_returns_move_code(self):
        session = Session()
        code = greedy_snake_step(
            session,
            5,
            [3, 3, -1, -1, -1, -1, -1, -1],
            1,
            [-1] * 8,
            1,
            [4, 3],
        )
        assert code == 3

    def test_dead_snake(self):
        session = Session()
        code = greedy_snake_step(session, 5, [-1] * 8, 1, [1, 1, -1, -1, -1, -1, -1, -1], 0, [])
        assert code == 0
        assert session.phase is SessionPhase.PENDING

    def test_session_carried_between_calls(self):
        session = Session()
        opponent = [1, 4, 1, 3, 1, 2, 1, 1]
        greedy_snake_step(session, 5, [5, 5, -1, -1, -1, -1, -1, -1], 1, opponent, 0, [])
        greedy_snake_step(session, 5, [5, 4, -1, -1, -1, -1, -1, -1], 1, [1, 5, 1, 4, 1, 3, 1, 2], 0, [])

        assert list(session.ledger.records) == [0]
        assert list(session.ledger.records[0].trajectory) == [(1, 4), (1, 5)]
        assert session.rounds_played == 2
