"""Run the built-in container benchmarks.

Usage:
  python -m vessel                       # all modules
  python -m vessel outcome --iterations 5000
  python -m vessel option --json --seed 7

Settings not given on the command line fall back to ``VESSEL_BENCH_*``
environment variables (see ``vessel.config``).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import TYPE_CHECKING

from vessel.bench import run_module
from vessel.benchmarks import BUILTIN_MODULES
from vessel.config import resolve_bench_settings
from vessel.errors import BenchmarkError, ConfigurationError

if TYPE_CHECKING:  # pragma: no cover - typing-only import at runtime
    from collections.abc import Sequence

logger = logging.getLogger("vessel.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m vessel", description="Benchmark vessel containers"
    )
    parser.add_argument(
        "modules",
        nargs="*",
        metavar="MODULE",
        help=f"Modules to run (default: all of {', '.join(sorted(BUILTIN_MODULES))})",
    )
    parser.add_argument("--iterations", type=int, help="Recorded iterations")
    parser.add_argument("--warmup", type=int, help="Unrecorded warmup iterations")
    parser.add_argument("--seed", type=int, help="Seed for parameter generation")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON document instead of summary lines",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry: run the requested benchmark modules and print the reports."""
    args = build_parser().parse_args(argv)

    try:
        settings = resolve_bench_settings(
            iterations=args.iterations,
            warmup=args.warmup,
            seed=args.seed,
            log_level=args.log_level,
        )
    except ConfigurationError as exc:
        logging.basicConfig(format="%(levelname)s: %(message)s")
        logger.error("%s (%s)", exc, exc.hint)
        return 2

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(levelname)s: %(name)s: %(message)s",
    )

    names = args.modules or sorted(BUILTIN_MODULES)
    unknown = [n for n in names if n not in BUILTIN_MODULES]
    if unknown:
        logger.error(
            "Unknown module(s): %s; choose from %s",
            ", ".join(unknown),
            ", ".join(sorted(BUILTIN_MODULES)),
        )
        return 2

    reports = []
    for name in names:
        try:
            reports.append(run_module(BUILTIN_MODULES[name], settings, name=name))
        except BenchmarkError as exc:
            logger.error("Benchmark %s failed: %s", name, exc)
            return 1
        except Exception:
            logger.exception("Benchmark %s raised", name)
            return 1

    if args.json:
        print(json.dumps([r.to_dict() for r in reports], indent=2))
    else:
        for report in reports:
            print(report.summary())
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
