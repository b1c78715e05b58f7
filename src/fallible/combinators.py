"""Free-function forms of the Result combinators.

Each function takes the result first and delegates to the method of the same
name, so both styles compose identically:

    >>> from fallible import combinators as rc
    >>> rc.get_or_else(rc.map(success(2), lambda x: x + 1), 0)
    3

Useful where a plain function is wanted, e.g. functools.partial or map() over
a list of results. Note that this module's map shadows the builtin; import the
module rather than its names.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from .result import Result, success

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")

__all__ = [
    "map",
    "map_error",
    "bimap",
    "and_then",
    "or_else",
    "get_or_else",
    "get_or_else_get",
    "match",
    "flatten",
    "compose",
]


def map(result: Result[T, E], fn: Callable[[T], U]) -> Result[U, E]:  # noqa: A001
    """Success(v) → Success(fn(v)); Failure passes through untouched."""
    return result.map(fn)


def map_error(result: Result[T, E], fn: Callable[[E], F]) -> Result[T, F]:
    """Failure(e) → Failure(fn(e)); Success passes through untouched."""
    return result.map_error(fn)


def bimap(result: Result[T, E], success_fn: Callable[[T], U], failure_fn: Callable[[E], F]) -> Result[U, F]:
    return result.bimap(success_fn, failure_fn)


def and_then(result: Result[T, E], fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
    """Success(v) → fn(v); Failure short-circuits without calling fn."""
    return result.and_then(fn)


def or_else(result: Result[T, E], fn: Callable[[E], Result[T, F]]) -> Result[T, F]:
    return result.or_else(fn)


def get_or_else(result: Result[T, E], default: T) -> T:
    return result.get_or_else(default)


def get_or_else_get(result: Result[T, E], fn: Callable[[E], T]) -> T:
    return result.get_or_else_get(fn)


def match(result: Result[T, E], *, success: Callable[[T], U], failure: Callable[[E], U]) -> U:
    return result.match(success=success, failure=failure)


def flatten(result: Result[Result[T, E], E]) -> Result[T, E]:
    return result.flatten()


def compose(*fns: Callable[[object], Result[object, E]]) -> Callable[[object], Result[object, E]]:
    """Kleisli composition: chain Result-returning functions left to right.

    Example:
        >>> parse = lambda s: success(int(s)) if s.isdigit() else failure("nan")
        >>> positive = lambda n: success(n) if n > 0 else failure("not positive")
        >>> compose(parse, positive)("7")
        Success(7)
    """
    def composed(value: object) -> Result[object, E]:
        result: Result[object, E] = success(value)
        for fn in fns:
            result = result.and_then(fn)
        return result
    return composed
