"""Rank candidate upgrade actions for a progress snapshot stored as JSON."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from upgrade_core import (  # noqa: E402
    RankingResult,
    best_action,
    describe_action,
    load_configs,
    load_snapshot,
    make_config,
    rank_actions,
)


def format_ranking(result: RankingResult) -> list[str]:
    """Return the printable table rows for a ranking."""

    lines = [f"{'Action':<32}{'Cost':>8}{'Points':>10}{'Ratio':>10}  Note"]
    for item in result.evaluations:
        lines.append(
            f"{describe_action(item.action):<32}{item.cost:>8g}{item.point_gain:>10.1f}"
            f"{item.ratio:>10.3f}  {item.reason or ''}"
        )
    return lines


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank upgrade actions by expected points per Starcoin.")
    parser.add_argument("snapshot", type=Path, help="JSON file describing the progress snapshot.")
    parser.add_argument(
        "--preset",
        default=None,
        help="Name of a configuration preset to use instead of the defaults.",
    )
    parser.add_argument(
        "--presets-file",
        type=Path,
        default=None,
        help="Alternative JSON file holding configuration presets.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.preset is None:
        config = make_config()
    else:
        configs = load_configs(args.presets_file)
        if args.preset not in configs:
            raise SystemExit(f"Unknown preset '{args.preset}'. Available: {', '.join(sorted(configs))}")
        config = configs[args.preset]

    try:
        snapshot = load_snapshot(args.snapshot)
        result = rank_actions(snapshot, config=config)
    except ValueError as exc:
        raise SystemExit(f"Error: {exc}") from exc

    for line in format_ranking(result):
        print(line)
    top = best_action(result)
    if top is None:
        print("No affordable action right now.")
    else:
        print(f"Recommended: {describe_action(top.action)} ({top.ratio:.3f} points per Starcoin)")


if __name__ == "__main__":
    main()
