"""Result type: a value that is either Success(value) or Failure(error).

Implements a discriminated union for expected failures with monadic operations:
- Functor: map, map_error
- Monad: and_then (flat_map)
- Bifunctor: bimap
- Exhaustive case analysis: match

Instances are immutable and slotted. The discriminant is exposed as an
Outcome; payloads are only reachable through the narrowing helpers, which
raise IllegalAccessError on the wrong variant.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Generic, NoReturn, TypeVar

from .errors import IllegalAccessError

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type
F = TypeVar("F")  # Mapped error type


class Outcome(Enum):
    """Discriminant of a Result."""
    SUCCESS = "success"
    FAILURE = "failure"


_SUCCESS = Outcome.SUCCESS
_FAILURE = Outcome.FAILURE


class Result(Generic[T, E]):
    """Discriminated union representing Success or Failure.

    Build with success() or failure(), never by calling the class directly.

    Examples:
        >>> success(21).map(lambda x: x * 2).value
        42
        >>> failure("missing").map(lambda x: x * 2).error
        'missing'
        >>> success(5).and_then(lambda x: success(x) if x > 0 else failure("neg")).get_or_else(0)
        5

    Narrowing:
        >>> r = failure("not found")
        >>> r.match(success=lambda v: f"got {v}", failure=lambda e: f"error: {e}")
        'error: not found'
    """

    __slots__ = ("_payload", "_kind")
    __match_args__ = ("kind",)

    def __init__(self, payload: T | E, kind: Outcome) -> None:
        if not isinstance(kind, Outcome):
            raise TypeError(f"kind must be an Outcome, got {kind!r}")
        object.__setattr__(self, "_payload", payload)
        object.__setattr__(self, "_kind", kind)

    def __setattr__(self, name: str, value: object) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ─── Narrowing ───────────────────────────────────────────────────

    @property
    def kind(self) -> Outcome:
        """Which variant this Result is."""
        return self._kind

    def is_success(self) -> bool:
        return self._kind is _SUCCESS

    def is_failure(self) -> bool:
        return self._kind is _FAILURE

    @property
    def value(self) -> T:
        """Success value. Raises IllegalAccessError on Failure."""
        if self._kind is _SUCCESS:
            return self._payload  # type: ignore[return-value]
        raise IllegalAccessError(f"value read from Failure: {self._payload!r}")

    @property
    def error(self) -> E:
        """Failure payload. Raises IllegalAccessError on Success."""
        if self._kind is _FAILURE:
            return self._payload  # type: ignore[return-value]
        raise IllegalAccessError(f"error read from Success: {self._payload!r}")

    def unwrap(self) -> T:
        """Extract Success value. Raises IllegalAccessError on Failure."""
        return self.value

    def unwrap_error(self) -> E:
        """Extract Failure payload. Raises IllegalAccessError on Success."""
        return self.error

    def expect(self, msg: str) -> T:
        """Extract Success value with custom error message."""
        if self._kind is _SUCCESS:
            return self._payload  # type: ignore[return-value]
        raise IllegalAccessError(f"{msg}: {self._payload!r}")

    def expect_error(self, msg: str) -> E:
        """Extract Failure payload with custom error message."""
        if self._kind is _FAILURE:
            return self._payload  # type: ignore[return-value]
        raise IllegalAccessError(f"{msg}: {self._payload!r}")

    def success_or_none(self) -> T | None:
        return self._payload if self._kind is _SUCCESS else None  # type: ignore[return-value]

    def failure_or_none(self) -> E | None:
        return self._payload if self._kind is _FAILURE else None  # type: ignore[return-value]

    def match(self, *, success: Callable[[T], U], failure: Callable[[E], U]) -> U:
        """Exhaustive case analysis. Both handlers are required."""
        return success(self._payload) if self._kind is _SUCCESS else failure(self._payload)  # type: ignore[arg-type]

    # ─── Value Extraction ──────────────────────────────────────────────

    def get_or_else(self, default: T) -> T:
        """Success value, or default (evaluated eagerly by the caller)."""
        return self._payload if self._kind is _SUCCESS else default  # type: ignore[return-value]

    def get_or_else_get(self, f: Callable[[E], T]) -> T:
        """Success value, or f(error) computed only on Failure."""
        return self._payload if self._kind is _SUCCESS else f(self._payload)  # type: ignore[return-value,arg-type]

    unwrap_or = get_or_else
    unwrap_or_else = get_or_else_get

    # ─── Functor Operations ────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to Success value. Failure passes through, f not called."""
        return Result(f(self._payload), _SUCCESS) if self._kind is _SUCCESS else self  # type: ignore[arg-type,return-value]

    def map_error(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to Failure payload. Success passes through, f not called."""
        return Result(f(self._payload), _FAILURE) if self._kind is _FAILURE else self  # type: ignore[arg-type,return-value]

    def bimap(self, success_fn: Callable[[T], U], failure_fn: Callable[[E], F]) -> Result[U, F]:
        """Apply success_fn if Success, failure_fn if Failure."""
        if self._kind is _SUCCESS:
            return Result(success_fn(self._payload), _SUCCESS)  # type: ignore[arg-type]
        return Result(failure_fn(self._payload), _FAILURE)  # type: ignore[arg-type]

    # ─── Monad Operations ──────────────────────────────────────────────

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain an operation that can fail. Short-circuits on Failure.

        Example:
            >>> def parse(s: str) -> Result[int, str]:
            ...     return success(int(s)) if s.isdigit() else failure(f"not a number: {s}")
            >>> success("42").and_then(parse).and_then(lambda n: success(n + 1)).value
            43
            >>> failure("no input").and_then(parse).error
            'no input'
        """
        return f(self._payload) if self._kind is _SUCCESS else self  # type: ignore[arg-type,return-value]

    flat_map = and_then

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """On Failure, apply f to recover. On Success, pass through."""
        return f(self._payload) if self._kind is _FAILURE else self  # type: ignore[arg-type,return-value]

    # ─── Inspection ────────────────────────────────────────────────────

    def inspect(self, f: Callable[[T], object]) -> Result[T, E]:
        """Call f with Success value for side effects, return self."""
        if self._kind is _SUCCESS:
            f(self._payload)  # type: ignore[arg-type]
        return self

    def inspect_error(self, f: Callable[[E], object]) -> Result[T, E]:
        """Call f with Failure payload for side effects, return self."""
        if self._kind is _FAILURE:
            f(self._payload)  # type: ignore[arg-type]
        return self

    # ─── Conversion ────────────────────────────────────────────────────

    def to_tuple(self) -> tuple[T | None, E | None]:
        """(value, None) for Success, (None, error) for Failure."""
        return (self._payload, None) if self._kind is _SUCCESS else (None, self._payload)  # type: ignore[return-value]

    def flatten(self: Result[Result[T, E], E]) -> Result[T, E]:
        """Result[Result[T,E],E] → Result[T,E]. Raises TypeError if a Success holds a non-Result."""
        if self._kind is not _SUCCESS:
            return self  # type: ignore[return-value]
        if not isinstance(self._payload, Result):
            raise TypeError(f"flatten() on Success of non-Result: {self._payload!r}")
        return self._payload

    # ─── Dunder Methods ──────────────────────────────────────────────────

    def __bool__(self) -> NoReturn:
        raise TypeError("Result has no truth value; use is_success() or match()")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._kind is other._kind and self._payload == other._payload

    def __hash__(self) -> int:
        return hash((self._kind, self._payload))

    def __repr__(self) -> str:
        return f"{'Success' if self._kind is _SUCCESS else 'Failure'}({self._payload!r})"

    __str__ = __repr__

    def __iter__(self) -> Iterator[T]:
        """Yields the value if Success, nothing if Failure."""
        if self._kind is _SUCCESS:
            yield self._payload  # type: ignore[misc]

    def __copy__(self) -> Result[T, E]:
        return self

    def __reduce__(self) -> tuple[object, ...]:
        return (Result, (self._payload, self._kind))


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def success(value: T) -> Result[T, E]:
    """Construct Success variant."""
    return Result(value, _SUCCESS)


def failure(error: E) -> Result[T, E]:
    """Construct Failure variant."""
    return Result(error, _FAILURE)
