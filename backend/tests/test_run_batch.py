"""
Tests for run_batch.py - batch arena runs and their summary.
"""

import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from run_batch import print_report, rank_snakes, run_batch, summarize


def fake_result(scores, times, players=None):
    return {
        "game_id": "g",
        "players": players or {sid: "random" for sid in scores},
        "final_scores": scores,
        "game_result": {},
        "player_time": times,
        "rounds": 10,
        "replay_path": None,
    }


class TestRankSnakes:
    def test_higher_score_first(self):
        result = fake_result({"0": 1, "1": 3}, {"0": 0.1, "1": 0.5})
        assert rank_snakes(result) == ["1", "0"]

    def test_faster_snake_wins_tie(self):
        result = fake_result({"0": 2, "1": 2}, {"0": 0.5, "1": 0.1})
        assert rank_snakes(result) == ["1", "0"]


class TestSummarize:
    def test_empty(self):
        assert summarize([]) == {}

    def test_averages_and_wins(self):
        players = {"0": "heuristic", "1": "random"}
        results = [
            fake_result({"0": 3, "1": 1}, {"0": 0.002, "1": 0.001}, players),
            fake_result({"0": 1, "1": 1}, {"0": 0.002, "1": 0.001}, players),
        ]

        summary = summarize(results)

        assert summary["0"]["player"] == "heuristic"
        assert summary["0"]["wins"] == 1
        assert summary["1"]["wins"] == 1
        assert summary["0"]["avg_score"] == 2.0
        assert summary["1"]["avg_score"] == 1.0
        assert abs(summary["0"]["avg_time_ms"] - 2.0) < 1e-9


class TestRunBatch:
    def test_plays_and_rates_every_game(self):
        report = run_batch(["heuristic", "random"], mode="1v1", games=3, seed=1)

        assert report["games"] == 3
        assert sum(row["wins"] for row in report["summary"].values()) == 3
        assert {row["rating_key"] for row in report["ratings"]} == {"heuristic#0", "random#1"}
        assert {row["player_name"] for row in report["ratings"]} == {"heuristic", "random"}

    def test_shared_variant_rated_per_slot(self):
        """Snakes of the same variant each get their own rating."""
        report = run_batch(
            ["heuristic", "random", "random", "random"], mode="4p", games=2, seed=5
        )

        keys = {row["rating_key"] for row in report["ratings"]}
        assert keys == {"heuristic#0", "random#1", "random#2", "random#3"}

    def test_parallel_workers_give_same_scores(self):
        sequential = run_batch(["heuristic", "pathfinder"], mode="1v1", games=4, seed=3)
        parallel = run_batch(["heuristic", "pathfinder"], mode="1v1", games=4, seed=3, max_workers=2)

        for sid in ("0", "1"):
            assert sequential["summary"][sid]["avg_score"] == parallel["summary"][sid]["avg_score"]

    def test_print_report(self, capsys):
        report = run_batch(["heuristic", "random"], mode="1v1", games=2, seed=0)
        print_report(report)

        out = capsys.readouterr().out
        assert "=== 2 GAMES SUMMARY ===" in out
        assert "Snake 0 (heuristic)" in out
        assert "TrueSkill ratings:" in out
        assert "heuristic#0: mu=" in out
