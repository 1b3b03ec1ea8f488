"""Outcome: success with a value or failure with a reason.

Implements the success/failure container used at fallible boundaries so
callers branch on data instead of wrapping every call in try/except.
``Outcome[V, E]`` is the union of two frozen variants, ``Success[V]`` and
``Failure[E]``; a success never carries an error and a failure never carries
a value.

``capture`` is the bridge from raising code::

    outcome = capture(lambda: client.set_rank(user_id, rank))
    rank = outcome.unwrap_or(previous_rank)
"""

from __future__ import annotations

import dataclasses
import logging
import traceback
from typing import TYPE_CHECKING, Any, NoReturn, TypeGuard

from vessel.errors import IllegalUnwrapError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

_NOT_ERROR_MESSAGE = "result is not error"


@dataclasses.dataclass(frozen=True, slots=True)
class Success[V]:
    """A successful outcome holding a value."""

    value: V

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def inspect(self, fn: Callable[[V], object]) -> Success[V]:
        """Call ``fn`` with the value for its side effect and return self."""
        fn(self.value)
        return self

    def inspect_failure(self, fn: Callable[[Any], object]) -> Success[V]:
        return self

    def match[O](
        self, on_success: Callable[[V], O], on_failure: Callable[[Any], O]
    ) -> O:
        return on_success(self.value)

    def map[U](self, fn: Callable[[V], U]) -> Success[U]:
        return Success(fn(self.value))

    def map_failure(self, fn: Callable[[Any], Any]) -> Success[V]:
        return self

    def map_or[U](self, fn: Callable[[V], U], default: U) -> Success[U]:
        return Success(fn(self.value))

    def map_or_else[U](
        self, fn: Callable[[V], U], fallback: Callable[[], U]
    ) -> Success[U]:
        return Success(fn(self.value))

    def unwrap(self) -> V:
        return self.value

    def unwrap_failure(self) -> NoReturn:
        raise IllegalUnwrapError(
            _NOT_ERROR_MESSAGE,
            hint="Check is_failure() first, or use match().",
        )

    def unwrap_or(self, default: V) -> V:
        return self.value

    def unwrap_or_else(self, fallback: Callable[[], V]) -> V:
        return self.value

    def expect(self, message: str) -> V:
        return self.value

    def __str__(self) -> str:
        return f"Success<{self.value}>"


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E]:
    """A failed outcome holding an error."""

    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def inspect(self, fn: Callable[[Any], object]) -> Failure[E]:
        return self

    def inspect_failure(self, fn: Callable[[E], object]) -> Failure[E]:
        """Call ``fn`` with the error for its side effect and return self."""
        fn(self.error)
        return self

    def match[O](
        self, on_success: Callable[[Any], O], on_failure: Callable[[E], O]
    ) -> O:
        return on_failure(self.error)

    def map(self, fn: Callable[[Any], Any]) -> Failure[E]:
        return self

    def map_failure[F](self, fn: Callable[[E], F]) -> Failure[F]:
        return Failure(fn(self.error))

    def map_or[U](self, fn: Callable[[Any], U], default: U) -> Success[U]:
        """Return ``Success(default)``.

        The failure is discarded and promoted to a success, so the caller
        always ends up holding a value.
        """
        return Success(default)

    def map_or_else[U](
        self, fn: Callable[[Any], U], fallback: Callable[[], U]
    ) -> Success[U]:
        """Return ``Success(fallback())``; ``fallback`` runs only here."""
        return Success(fallback())

    def unwrap(self) -> NoReturn:
        raise IllegalUnwrapError(_stringify(self.error)) from self._cause()

    def unwrap_failure(self) -> E:
        return self.error

    def unwrap_or[V](self, default: V) -> V:
        return default

    def unwrap_or_else[V](self, fallback: Callable[[], V]) -> V:
        return fallback()

    def expect(self, message: str) -> NoReturn:
        raise IllegalUnwrapError(message) from self._cause()

    def _cause(self) -> BaseException | None:
        # Chain the original exception when the error payload is one.
        return self.error if isinstance(self.error, BaseException) else None

    def __str__(self) -> str:
        return f"Failure<{_stringify(self.error)}>"


type Outcome[V, E] = Success[V] | Failure[E]


def success[V](value: V) -> Success[V]:
    return Success(value)


def failure[E](error: E) -> Failure[E]:
    return Failure(error)


def capture[V](fn: Callable[[], V]) -> Outcome[V, str]:
    """Run ``fn`` and capture either its return value or the fault it raised.

    Any ``Exception`` raised by ``fn`` becomes ``Failure`` carrying the
    one-line description ``"<ExceptionType>: <message>"``. Interpreter exits
    (``KeyboardInterrupt``, ``SystemExit``) are not captured.
    """
    try:
        result = fn()
    except Exception as exc:
        description = _describe(exc)
        logger.debug("outcome.capture: captured fault %s", description)
        return Failure(description)
    return Success(result)


def _describe(exc: BaseException) -> str:
    lines = traceback.format_exception_only(exc)
    if not lines:  # pragma: no cover - stdlib always yields at least one line
        return type(exc).__name__
    return "".join(lines).strip()


def _stringify(error: object) -> str:
    """Return ``str(error)``, degrading instead of raising for unprintable payloads."""
    try:
        return str(error)
    except Exception:
        if isinstance(error, BaseException):
            return _describe(error)
        return f"<unprintable {type(error).__name__}>"


def is_outcome(value: object) -> TypeGuard[Success[Any] | Failure[Any]]:
    """Return True when ``value`` is a ``Success`` or a ``Failure``."""
    return isinstance(value, (Success, Failure))


__all__ = [
    "Failure",
    "Outcome",
    "Success",
    "capture",
    "failure",
    "is_outcome",
    "success",
]
