"""Micro-benchmark harness for container operations.

A ``BenchModule`` bundles named benchmark functions with optional lifecycle
hooks. Each function receives a fresh ``Profiler`` and a generated parameter
per iteration; it brackets the code of interest with ``profiler.start(label)``
and ``profiler.stop()``. Functions that never touch the profiler are timed as
a whole under the ``"total"`` label.

Example:
    def bench_map(profiler, n):
        opt = some(n)
        profiler.start("map")
        opt.map(lambda v: v + 1)
        profiler.stop()

    module = BenchModule(functions={"map": bench_map}, parameter_generator=lambda: 1)
    report = run_module(module, resolve_bench_settings(iterations=100))
    print(report.summary())
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import dataclasses
import importlib.metadata as importlib_metadata
import logging
import math
import os
import platform
import random
import sys
import time
from typing import TYPE_CHECKING, Any

from vessel.errors import BenchmarkError

if TYPE_CHECKING:
    from vessel.config import BenchSettings

logger = logging.getLogger(__name__)

TOTAL_LABEL = "total"


class Profiler:
    """Labelled span timer handed to each benchmark function call.

    Spans do not nest: ``start`` while a span is open is an error, as is
    ``stop`` with none open.
    """

    def __init__(self) -> None:
        self._spans: list[tuple[str, float]] = []
        self._open: tuple[str, float] | None = None

    @property
    def spans(self) -> tuple[tuple[str, float], ...]:
        return tuple(self._spans)

    @property
    def is_open(self) -> bool:
        return self._open is not None

    def start(self, label: str) -> None:
        if self._open is not None:
            raise BenchmarkError(
                f"Profiler span {label!r} started while {self._open[0]!r} is open",
                hint="Call profiler.stop() before starting another span.",
            )
        self._open = (label, time.perf_counter())

    def stop(self, t: float | None = None) -> None:
        """Close the open span.

        Args:
            t: Optional duration in seconds to record instead of the measured
                wall time, for functions that time themselves.
        """
        end = time.perf_counter()
        if self._open is None:
            raise BenchmarkError(
                "Profiler stopped with no open span",
                hint="Call profiler.start(label) first.",
            )
        label, began = self._open
        self._open = None
        if t is not None and t < 0:
            raise BenchmarkError(f"Negative duration {t!r} for span {label!r}")
        self._spans.append((label, float(t) if t is not None else end - began))


type BenchFunction[P] = Callable[[Profiler, P], None]
type Hook = Callable[[], None]


@dataclasses.dataclass(frozen=True)
class BenchModule[P]:
    """A set of benchmark functions sharing lifecycle hooks."""

    functions: Mapping[str, BenchFunction[P]]
    parameter_generator: Callable[[], P] | None = None
    before_all: Hook | None = None
    after_all: Hook | None = None
    before_each: Hook | None = None
    after_each: Hook | None = None

    def __post_init__(self) -> None:
        if not self.functions:
            raise BenchmarkError(
                "BenchModule requires at least one function",
                hint="Pass functions={'name': fn, ...}.",
            )
        for name, fn in self.functions.items():
            if not callable(fn):
                raise BenchmarkError(f"Benchmark function {name!r} is not callable")


@dataclasses.dataclass(frozen=True, slots=True)
class LabelStats:
    """Aggregated timings for one label of one benchmark function."""

    function: str
    label: str
    count: int
    mean_s: float
    p95_s: float
    min_s: float
    max_s: float

    @classmethod
    def from_samples(cls, function: str, label: str, xs: list[float]) -> LabelStats:
        ys = sorted(xs)
        return cls(
            function=function,
            label=label,
            count=len(ys),
            mean_s=math.fsum(ys) / len(ys),
            p95_s=ys[int(0.95 * (len(ys) - 1))],
            min_s=ys[0],
            max_s=ys[-1],
        )


@dataclasses.dataclass(frozen=True)
class BenchReport:
    """Result of running one ``BenchModule``."""

    name: str
    stats: tuple[LabelStats, ...]
    iterations: int
    warmup: int
    env: dict[str, Any] = dataclasses.field(default_factory=dict)
    schema_version: int = 1

    def summary(self) -> str:
        """Return one human-readable line per function/label pair."""
        lines = [f"{self.name}: {self.iterations} iterations ({self.warmup} warmup)"]
        for s in self.stats:
            lines.append(
                f"  {s.function}/{s.label}: mean {s.mean_s * 1e6:.2f}us, "
                f"p95 {s.p95_s * 1e6:.2f}us, n={s.count}"
            )
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-logging-friendly dict representation."""
        return {
            "schema_version": self.schema_version,
            "name": self.name,
            "iterations": self.iterations,
            "warmup": self.warmup,
            "env": dict(self.env),
            "stats": [dataclasses.asdict(s) for s in self.stats],
        }


def _call(hook: Hook | None) -> None:
    if hook is not None:
        hook()


def _run_once[P](
    module: BenchModule[P], fn: BenchFunction[P], name: str
) -> tuple[tuple[str, float], ...]:
    _call(module.before_each)
    gen = module.parameter_generator
    parameter = gen() if gen is not None else None
    profiler = Profiler()
    began = time.perf_counter()
    fn(profiler, parameter)  # type: ignore[arg-type]
    elapsed = time.perf_counter() - began
    if profiler.is_open:
        raise BenchmarkError(
            f"Benchmark function {name!r} returned with an open profiler span",
            hint="Every profiler.start(label) needs a matching profiler.stop().",
        )
    _call(module.after_each)
    return profiler.spans or ((TOTAL_LABEL, elapsed),)


def _env_info() -> dict[str, Any]:
    try:
        version = importlib_metadata.version("vessel")
    except importlib_metadata.PackageNotFoundError:  # pragma: no cover - dev
        version = "development"
    return {
        "version": version,
        "python_version": sys.version.split(" ")[0],
        "python_impl": platform.python_implementation(),
        "platform": platform.platform(aliased=False, terse=True),
        "cpu_count": os.cpu_count(),
    }


def run_module[P](
    module: BenchModule[P], settings: BenchSettings, *, name: str = "bench"
) -> BenchReport:
    """Run every function of ``module`` and aggregate its spans.

    ``before_all`` runs once up front and ``after_all`` runs once at the end,
    even when a benchmark function raises. Warmup iterations run the full
    per-iteration lifecycle but are not recorded.

    When ``settings.seed`` is set, the global ``random`` generator is seeded
    for the run and its previous state is restored afterwards.
    """
    saved_state = random.getstate() if settings.seed is not None else None
    if settings.seed is not None:
        random.seed(settings.seed)

    total = settings.warmup + settings.iterations
    stats: list[LabelStats] = []

    try:
        _call(module.before_all)
        try:
            for fn_name, fn in module.functions.items():
                logger.info("Running %s/%s (%d iterations)", name, fn_name, total)
                samples: dict[str, list[float]] = {}
                for i in range(total):
                    spans = _run_once(module, fn, fn_name)
                    if i < settings.warmup:
                        continue
                    for label, duration in spans:
                        samples.setdefault(label, []).append(duration)
                stats.extend(
                    LabelStats.from_samples(fn_name, label, xs)
                    for label, xs in samples.items()
                )
        finally:
            _call(module.after_all)
    finally:
        if saved_state is not None:
            random.setstate(saved_state)

    report = BenchReport(
        name=name,
        stats=tuple(stats),
        iterations=settings.iterations,
        warmup=settings.warmup,
        env=_env_info(),
    )
    logger.debug("Benchmark %s finished: %d label(s)", name, len(report.stats))
    return report


__all__ = [
    "TOTAL_LABEL",
    "BenchFunction",
    "BenchModule",
    "BenchReport",
    "LabelStats",
    "Profiler",
    "run_module",
]
