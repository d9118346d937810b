# scripts/simulate_races.py
import argparse
import sys
from pathlib import Path

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.config import settings  # noqa: E402
from src.core.profile_registry import load_registry  # noqa: E402
from src.core.race_stats import (  # noqa: E402
    build_profile_comparison,
    simulate_outcomes,
    summarise_tally,
)
from src.core.random_source import RandomSource  # noqa: E402
from src.data.miners_prod import CHALLENGER  # noqa: E402


def print_comparison(trials: int, seed: int | None) -> None:
    """Print simulated vs expected challenger rate for every profile."""
    registry = load_registry()
    df = build_profile_comparison(registry, CHALLENGER, trials, RandomSource(seed))

    print(f"\n=== {CHALLENGER.label} ({CHALLENGER.win_chance:.3%}) vs catalogue ===")
    print(f"Rounds per miner: {trials:,}")
    print("-" * 96)
    print(
        f"{'Miner':26}  {'TH/s':>6}  {'Win %':>7}  "
        f"{'PWC exp.':>9}  {'PWC sim.':>9}  {'Trad. sim.':>10}  {'None sim.':>9}"
    )
    print("-" * 96)
    for row in df.itertuples(index=False):
        print(
            f"{row.label:26}  {row.throughput_th:6g}  {row.profile_win_chance:7.3%}  "
            f"{row.expected_challenger_rate:9.4%}  {row.challenger_rate:9.4%}  "
            f"{row.profile_rate:10.4%}  {row.no_winner_rate:9.4%}"
        )


def print_profile(key: str, trials: int, seed: int | None) -> None:
    registry = load_registry()
    profile = registry.get(key)
    tally = simulate_outcomes(
        CHALLENGER.win_chance, profile.win_chance, trials, RandomSource(seed)
    )
    df = summarise_tally(tally, CHALLENGER.win_chance, profile.win_chance)

    print(f"\n=== {CHALLENGER.label} vs {profile.label} ({trials:,} rounds) ===")
    print(df.to_string(index=False, float_format=lambda v: f"{v:.5f}"))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Simulate block rounds without the race animation."
    )
    parser.add_argument("--trials", type=int, default=settings.STATS_DEFAULT_TRIALS)
    parser.add_argument("--seed", type=int, default=settings.RACE_SEED)
    parser.add_argument(
        "--profile",
        help="Profile key to break down in detail (default: compare all)",
    )
    args = parser.parse_args(argv)

    if args.trials <= 0:
        parser.error("--trials must be positive")

    if args.profile:
        print_profile(args.profile, args.trials, args.seed)
    else:
        print_comparison(args.trials, args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
