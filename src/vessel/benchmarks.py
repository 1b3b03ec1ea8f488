"""Built-in benchmark modules for the Option and Outcome containers."""

from __future__ import annotations

import random

from vessel import option, outcome
from vessel.bench import BenchModule, Profiler


def _random_int() -> int:
    return random.randint(0, 1_000_000)  # noqa: S311


def _raise_value_error() -> int:
    raise ValueError("benchmark fault")


# --- Option ---


def _option_construct(profiler: Profiler, n: int) -> None:
    profiler.start("some")
    option.some(n)
    profiler.stop()
    profiler.start("none")
    option.none()
    profiler.stop()


def _option_map_chain(profiler: Profiler, n: int) -> None:
    opt = option.some(n)
    profiler.start("map_x3")
    opt.map(lambda v: v + 1).map(lambda v: v * 2).map(str)
    profiler.stop()
    profiler.start("map_or_absent")
    option.none().map_or(lambda v: v + 1, n)
    profiler.stop()


def _option_match(profiler: Profiler, n: int) -> None:
    opt: option.Option[int] = option.some(n) if n % 2 else option.none()
    profiler.start("match")
    opt.match(lambda v: v, lambda: 0)
    profiler.stop()


def _option_capture(profiler: Profiler, n: int) -> None:
    profiler.start("capture_value")
    option.capture(lambda: n)
    profiler.stop()
    profiler.start("capture_fault")
    option.capture(_raise_value_error)
    profiler.stop()


OPTION_BENCH: BenchModule[int] = BenchModule(
    functions={
        "construct": _option_construct,
        "map_chain": _option_map_chain,
        "match": _option_match,
        "capture": _option_capture,
    },
    parameter_generator=_random_int,
)


# --- Outcome ---


def _outcome_construct(profiler: Profiler, n: int) -> None:
    profiler.start("success")
    outcome.success(n)
    profiler.stop()
    profiler.start("failure")
    outcome.failure("error")
    profiler.stop()


def _outcome_map(profiler: Profiler, n: int) -> None:
    ok = outcome.success(n)
    err = outcome.failure("network down")
    profiler.start("map")
    ok.map(lambda v: v + 1)
    profiler.stop()
    profiler.start("map_failure")
    err.map_failure(lambda e: e + "!")
    profiler.stop()


def _outcome_match(profiler: Profiler, n: int) -> None:
    res: outcome.Outcome[int, str] = (
        outcome.success(n) if n % 2 else outcome.failure("even")
    )
    profiler.start("match")
    res.match(lambda v: v, len)
    profiler.stop()


def _outcome_capture(profiler: Profiler, n: int) -> None:
    profiler.start("capture_value")
    outcome.capture(lambda: n)
    profiler.stop()
    profiler.start("capture_fault")
    outcome.capture(_raise_value_error)
    profiler.stop()


OUTCOME_BENCH: BenchModule[int] = BenchModule(
    functions={
        "construct": _outcome_construct,
        "map": _outcome_map,
        "match": _outcome_match,
        "capture": _outcome_capture,
    },
    parameter_generator=_random_int,
)


BUILTIN_MODULES: dict[str, BenchModule[int]] = {
    "option": OPTION_BENCH,
    "outcome": OUTCOME_BENCH,
}

__all__ = ["BUILTIN_MODULES", "OPTION_BENCH", "OUTCOME_BENCH"]
