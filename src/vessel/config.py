"""Benchmark configuration: a frozen pydantic schema fed from env and overrides.

Resolution order (lowest to highest precedence):

1. ``BenchSettings`` defaults
2. ``VESSEL_BENCH_*`` environment variables (a project ``.env`` is loaded first)
3. Explicit keyword overrides passed to ``resolve_bench_settings``

The containers in ``vessel.option`` and ``vessel.outcome`` read no
configuration; only the benchmark runner does.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from vessel.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "VESSEL_BENCH_"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class BenchSettings(BaseModel):
    """Validated settings for a benchmark run."""

    iterations: int = Field(default=1000, ge=1)
    warmup: int = Field(default=10, ge=0)
    #: Seeds ``random`` before parameter generation when set.
    seed: int | None = Field(default=None)
    log_level: LogLevel = Field(default="WARNING")

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("seed", mode="before")
    @classmethod
    def normalize_seed(cls, v: Any) -> Any:
        """Map empty strings (e.g. ``VESSEL_BENCH_SEED=``) to no seed."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


def load_env() -> dict[str, str]:
    """Return ``VESSEL_BENCH_*`` variables keyed by lower-cased field name.

    Values stay strings; pydantic coerces them against the schema.
    """
    config: dict[str, str] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        if field_name not in BenchSettings.model_fields:
            logger.debug("Ignoring unknown benchmark setting %s", key)
            continue
        config[field_name] = value
    return config


def resolve_bench_settings(**overrides: Any) -> BenchSettings:
    """Resolve benchmark settings from ``.env``, the environment and overrides.

    ``None`` overrides are ignored so CLI flags that were not given fall
    through to the environment.

    Raises:
        ConfigurationError: When a value fails validation or an override
            names an unknown setting.
    """
    load_dotenv()
    merged: dict[str, Any] = dict(load_env())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        settings = BenchSettings.model_validate(merged)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = str(first["loc"][0]) if first.get("loc") else "?"
        raise ConfigurationError(
            f"Invalid benchmark setting {field!r}: {first['msg']}",
            hint=f"Check {ENV_PREFIX}{field.upper()} or the matching option.",
        ) from exc

    logger.debug("Resolved benchmark settings: %s", settings)
    return settings


__all__ = ["ENV_PREFIX", "BenchSettings", "load_env", "resolve_bench_settings"]
