"""Exception hierarchy for vessel."""

from __future__ import annotations


class VesselError(Exception):
    """Base exception for all vessel errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class IllegalUnwrapError(VesselError):
    """A container was unwrapped in a state that does not hold the payload.

    Raised by ``unwrap``, ``unwrap_failure`` and ``expect``.
    """


class ConfigurationError(VesselError):
    """Benchmark configuration validation or resolution failed."""


class BenchmarkError(VesselError):
    """A benchmark module is malformed or a profiler was misused."""
