"""
Run many seeded arena games and summarize how each bot did.

For every game the snakes are ranked by score, then by total decision time
(faster wins the tie); the top snake is credited with the win. The summary
reports wins, average score and average decision time per snake slot, and
TrueSkill ratings per player variant and snake slot.

Usage:
    python backend/run_batch.py --mode 4p --games 200 --players heuristic,random,random,pathfinder
"""

import argparse
import concurrent.futures
import logging
import os
from typing import Any, Dict, List

from dotenv import load_dotenv

from arena import GAME_MODES, DEFAULT_MODE, configure_logging, parse_variants, run_simulation
from services.trueskill_engine import TrueSkillEngine

load_dotenv()

logger = logging.getLogger(__name__)


def rank_snakes(result: Dict[str, Any]) -> List[str]:
    """Snake ids ordered by score (high first), then decision time (low first)."""
    scores = result["final_scores"]
    times = result["player_time"]
    return sorted(scores, key=lambda sid: (-scores[sid], times.get(sid, 0.0)))


def summarize(results: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """
    Aggregate per-slot statistics across games.

    Returns:
        snake id -> {'player', 'wins', 'avg_score', 'avg_time_ms'}
    """
    summary: Dict[str, Dict[str, Any]] = {}
    if not results:
        return summary

    total_games = len(results)
    for result in results:
        winner = rank_snakes(result)[0]
        for sid, player in result["players"].items():
            row = summary.setdefault(sid, {"player": player, "wins": 0, "total_score": 0, "total_time": 0.0})
            row["total_score"] += result["final_scores"].get(sid, 0)
            row["total_time"] += result["player_time"].get(sid, 0.0)
            if sid == winner:
                row["wins"] += 1

    for row in summary.values():
        row["avg_score"] = row.pop("total_score") / total_games
        row["avg_time_ms"] = row.pop("total_time") / total_games * 1000.0

    return summary


def run_batch(
    variants: List[str],
    mode: str,
    games: int,
    seed: int,
    shuffle_slots: bool = False,
    max_workers: int = 1,
    replay_dir: str = None,
) -> Dict[str, Any]:
    """
    Play ``games`` games with seeds ``seed``, ``seed + 1``, ... and rate them.

    Ratings are applied in seed order so the outcome does not depend on
    which worker finished first.
    """
    preset = GAME_MODES[mode]
    results: Dict[int, Dict[str, Any]] = {}

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(
                run_simulation,
                variants,
                board_size=preset["board_size"],
                max_rounds=preset["max_rounds"],
                num_apples=preset["num_apples"],
                seed=seed + i,
                shuffle_slots=shuffle_slots,
                replay_dir=replay_dir,
            ): i
            for i in range(games)
        }
        for future in concurrent.futures.as_completed(futures):
            index = futures[future]
            try:
                results[index] = future.result()
            except Exception as exc:
                logger.error("Game with seed %d raised an exception: %s", seed + index, exc)
                continue
            logger.info("Completed game %d/%d. Final scores: %s",
                        len(results), games, results[index]["final_scores"])

    ordered = [results[i] for i in sorted(results)]
    engine = TrueSkillEngine()
    for result in ordered:
        engine.rate_game(result)

    return {
        "games": len(ordered),
        "summary": summarize(ordered),
        "ratings": engine.leaderboard(),
    }


def print_report(report: Dict[str, Any]):
    games = report["games"]
    print(f"\n=== {games} GAMES SUMMARY ===")
    print("Total wins:")
    rows = sorted(report["summary"].items(), key=lambda item: item[1]["wins"], reverse=True)
    for sid, row in rows:
        print(
            f"Snake {sid} ({row['player']}): {row['wins']} wins"
            f" (avg score: {row['avg_score']:.2f}, avg time: {row['avg_time_ms']:.3f}ms)"
        )

    print("\nTrueSkill ratings:")
    for row in report["ratings"]:
        print(
            f"{row['rating_key']}: mu={row['mu']:.3f} sigma={row['sigma']:.3f} "
            f"exposed={row['exposed']:.3f} display={row['display_rating']:.1f}"
        )


def run_batch_simulations():
    parser = argparse.ArgumentParser(
        description="Run batch arena games and summarize wins, scores, time and ratings."
    )
    parser.add_argument("--mode", choices=sorted(GAME_MODES), default=os.getenv("SNAKE_ARENA_MODE", DEFAULT_MODE),
                        help="Game format preset")
    parser.add_argument("--players", type=str, default=os.getenv("SNAKE_ARENA_PLAYERS"),
                        help="Comma-separated variants, one per snake")
    parser.add_argument("--games", type=int, default=os.getenv("SNAKE_ARENA_GAMES", "100"),
                        help="Number of games to play")
    parser.add_argument("--seed", type=int, default=os.getenv("SNAKE_ARENA_SEED", "0"),
                        help="Seed of the first game; game i uses seed + i")
    parser.add_argument("--shuffle-slots", action="store_true",
                        help="Reshuffle opponent slots every round")
    parser.add_argument("--max-workers", type=int, default=1,
                        help="Maximum number of parallel games (threads)")
    parser.add_argument("--replay-dir", type=str, default=os.getenv("SNAKE_ARENA_REPLAY_DIR"),
                        help="Directory for JSON replays")
    args = parser.parse_args()

    configure_logging()

    variants = parse_variants(args.players, GAME_MODES[args.mode]["num_snakes"])
    report = run_batch(
        variants,
        mode=args.mode,
        games=args.games,
        seed=args.seed,
        shuffle_slots=args.shuffle_slots,
        max_workers=args.max_workers,
        replay_dir=args.replay_dir,
    )
    print_report(report)


if __name__ == "__main__":
    run_batch_simulations()
