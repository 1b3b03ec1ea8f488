"""Option: presence or absence of a value.

``Option[V]`` is a closed union of two frozen variants, ``Present[V]`` and
``Absent``. Both variants implement the same vocabulary of inspection,
transformation and extraction methods, so callers can either dispatch on the
methods or use structural pattern matching::

    match lookup(user_id):
        case Present(rank):
            ...
        case Absent():
            ...

Every transformation returns a new instance; nothing mutates ``self``.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, NoReturn, TypeGuard

from vessel.errors import IllegalUnwrapError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

_NONE_MESSAGE = "Option is none"


@dataclasses.dataclass(frozen=True, slots=True)
class Present[V]:
    """An option holding a value."""

    value: V

    def is_present(self) -> bool:
        return True

    def is_absent(self) -> bool:
        return False

    def inspect(self, fn: Callable[[V], object]) -> Present[V]:
        """Call ``fn`` with the value for its side effect and return self."""
        fn(self.value)
        return self

    def match[O](self, on_present: Callable[[V], O], on_absent: Callable[[], O]) -> O:
        return on_present(self.value)

    def map[U](self, fn: Callable[[V], U]) -> Present[U]:
        return Present(fn(self.value))

    def map_or[U](self, fn: Callable[[V], U], default: U) -> Present[U]:
        return Present(fn(self.value))

    def map_or_else[U](
        self, fn: Callable[[V], U], fallback: Callable[[], U]
    ) -> Present[U]:
        return Present(fn(self.value))

    def unwrap(self) -> V:
        return self.value

    def unwrap_or(self, default: V) -> V:
        return self.value

    def unwrap_or_else(self, fallback: Callable[[], V]) -> V:
        return self.value

    def expect(self, message: str) -> V:
        return self.value

    def __str__(self) -> str:
        return f"Present<{self.value}>"


@dataclasses.dataclass(frozen=True, slots=True)
class Absent:
    """An option holding nothing. All instances compare equal."""

    def is_present(self) -> bool:
        return False

    def is_absent(self) -> bool:
        return True

    def inspect(self, fn: Callable[[Any], object]) -> Absent:
        return self

    def match[O](
        self, on_present: Callable[[Any], O], on_absent: Callable[[], O]
    ) -> O:
        return on_absent()

    def map(self, fn: Callable[[Any], Any]) -> Absent:
        return self

    def map_or[U](self, fn: Callable[[Any], U], default: U) -> Present[U]:
        """Return ``Present(default)``.

        Unlike ``map``, the absent case is promoted to a present value so the
        caller always gets something to unwrap.
        """
        return Present(default)

    def map_or_else[U](
        self, fn: Callable[[Any], U], fallback: Callable[[], U]
    ) -> Present[U]:
        """Return ``Present(fallback())``; ``fallback`` runs only here."""
        return Present(fallback())

    def unwrap(self) -> NoReturn:
        raise IllegalUnwrapError(
            _NONE_MESSAGE,
            hint="Check is_present() first, or use unwrap_or()/match().",
        )

    def unwrap_or[V](self, default: V) -> V:
        return default

    def unwrap_or_else[V](self, fallback: Callable[[], V]) -> V:
        return fallback()

    def expect(self, message: str) -> NoReturn:
        raise IllegalUnwrapError(message)

    def __str__(self) -> str:
        return "Absent"


type Option[V] = Present[V] | Absent


def some[V](value: V) -> Present[V]:
    """Wrap ``value`` as a present option. ``some(None)`` is still present."""
    return Present(value)


def none() -> Absent:
    return Absent()


def capture[V](fn: Callable[[], V | None]) -> Option[V]:
    """Run ``fn`` and wrap its result.

    A ``None`` result becomes ``Absent``, anything else ``Present``. An
    ``Exception`` raised by ``fn`` is also folded into ``Absent``; use
    ``vessel.outcome.capture`` when the reason matters.
    """
    try:
        result = fn()
    except Exception as exc:
        logger.debug(
            "option.capture: %s folded into Absent", type(exc).__name__, exc_info=True
        )
        return Absent()
    if result is None:
        return Absent()
    return Present(result)


def is_option(value: object) -> TypeGuard[Present[Any] | Absent]:
    """Return True when ``value`` is a ``Present`` or an ``Absent``."""
    return isinstance(value, (Present, Absent))


__all__ = [
    "Absent",
    "Option",
    "Present",
    "capture",
    "is_option",
    "none",
    "some",
]
