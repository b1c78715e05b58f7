"""Aggregation over collections of Results.

combine is first-error-wins: scanning stops at the leftmost Failure, which is
returned unchanged. Later elements are neither inspected nor consumed, so a
lazy iterable is only advanced as far as that Failure. collect_all is the
accumulating alternative when every error is wanted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, TypeVar

from .result import Outcome, Result

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")

_SUCCESS = Outcome.SUCCESS


def combine(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Iterable[Result[T,E]] → Result[list[T], E]. Fail-fast on first Failure.

    Example:
        >>> combine([success(1), success(2), success(3)])
        Success([1, 2, 3])
        >>> combine([success(1), failure("A"), success(2), failure("B")])
        Failure('A')
        >>> combine([])
        Success([])
    """
    values: list[T] = []
    for r in results:
        if r._kind is not _SUCCESS:
            return r  # type: ignore[return-value]
        values.append(r._payload)  # type: ignore[arg-type]
    return Result(values, _SUCCESS)


def traverse(items: Iterable[T], f: Callable[[T], Result[U, E]]) -> Result[list[U], E]:
    """Map f over items and combine. f is not called after the first Failure."""
    return combine(f(item) for item in items)


def collect_all(results: Iterable[Result[T, E]]) -> Result[list[T], list[E]]:
    """Collect every Result, accumulating ALL errors (not fail-fast).

    Example:
        >>> collect_all([success(1), failure("e1"), success(3), failure("e2")])
        Failure(['e1', 'e2'])
    """
    values, errors = partition(results)
    return Result(values, _SUCCESS) if not errors else Result(errors, Outcome.FAILURE)


def partition(results: Iterable[Result[T, E]]) -> tuple[list[T], list[E]]:
    """Split into (success values, failure payloads), each in input order."""
    values: list[T] = []
    errors: list[E] = []
    for r in results:
        (values if r._kind is _SUCCESS else errors).append(r._payload)  # type: ignore[arg-type]
    return values, errors
