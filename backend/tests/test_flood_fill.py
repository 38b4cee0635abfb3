"""
Tests for the reachable-area flood fill and the danger map.
"""

import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.board import empty_bitmap, is_marked, mark_cells
from strategy.danger import build_danger_map
from strategy.flood_fill import reachable_area


class TestReachableArea:
    """Tests for reachable_area()."""

    def test_open_board(self):
        """Every cell of an empty board is reachable."""
        assert reachable_area((2, 2), empty_bitmap(3), 3) == 9
        assert reachable_area((1, 1), empty_bitmap(5), 5) == 25

    def test_seed_off_board(self):
        assert reachable_area((0, 1), empty_bitmap(3), 3) == 0
        assert reachable_area((4, 4), empty_bitmap(3), 3) == 0

    def test_seed_blocked(self):
        obstacles = mark_cells(empty_bitmap(3), [(2, 2)], 3)
        assert reachable_area((2, 2), obstacles, 3) == 0

    def test_wall_splits_board(self):
        """A full column of obstacles cuts the board in two."""
        obstacles = mark_cells(empty_bitmap(3), [(2, 1), (2, 2), (2, 3)], 3)
        assert reachable_area((1, 1), obstacles, 3) == 3
        assert reachable_area((3, 2), obstacles, 3) == 3

    def test_no_diagonal_moves(self):
        """Only 4-connected moves count."""
        obstacles = mark_cells(empty_bitmap(2), [(2, 1), (1, 2)], 2)
        assert reachable_area((1, 1), obstacles, 2) == 1

    def test_does_not_modify_obstacles(self):
        obstacles = mark_cells(empty_bitmap(3), [(2, 2)], 3)
        reachable_area((1, 1), obstacles, 3)
        assert obstacles.sum() == 1


class TestDangerMap:
    """Tests for build_danger_map()."""

    def test_marks_every_segment(self):
        """Heads, bodies and tails of all snakes are marked."""
        dangerous = build_danger_map(
            [(3, 3), (3, 2)],
            [[(1, 1), (1, 2), (1, 3)], [(5, 5)]],
            5,
        )

        for cell in [(3, 3), (3, 2), (1, 1), (1, 2), (1, 3), (5, 5)]:
            assert is_marked(dangerous, cell)
        assert dangerous.sum() == 6

    def test_empty_opponent_bodies(self):
        dangerous = build_danger_map([(2, 2)], [[]], 3)
        assert dangerous.sum() == 1

    def test_shape(self):
        assert build_danger_map([(1, 1)], [], 4).shape == (4, 4)
