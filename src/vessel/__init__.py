"""vessel: immutable Option and Outcome value containers.

Public API:
    - some(), none(): Option constructors (Present / Absent)
    - success(), failure(): Outcome constructors (Success / Failure)
    - capture(): run a fallible callable into an Outcome
    - is_option(), is_outcome(): runtime type predicates
    - IllegalUnwrapError: raised when unwrapping the wrong variant

``vessel.option.capture`` is the Option flavour of ``capture``: it folds
``None`` results and raised faults into ``Absent``.
"""

from __future__ import annotations

import logging

from vessel.errors import (
    BenchmarkError,
    ConfigurationError,
    IllegalUnwrapError,
    VesselError,
)
from vessel.option import Absent, Option, Present, is_option, none, some
from vessel.outcome import (
    Failure,
    Outcome,
    Success,
    capture,
    failure,
    is_outcome,
    success,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("vessel")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("vessel").addHandler(logging.NullHandler())

__all__ = [
    "Absent",
    "BenchmarkError",
    "ConfigurationError",
    "Failure",
    "IllegalUnwrapError",
    "Option",
    "Outcome",
    "Present",
    "Success",
    "VesselError",
    "capture",
    "failure",
    "is_option",
    "is_outcome",
    "none",
    "some",
    "success",
]
