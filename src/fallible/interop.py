"""Adapters from raising code to Result-returning code.

Provides:
- from_throwing: run a callable, convert expected exceptions to Failure
- from_throwing_async: same contract for coroutines and other awaitables
- catching: decorator form of both
- ExpectedFailure: policy deciding which exceptions count as expected

Which exceptions are "expected" is domain-specific, so every adapter takes an
`expected` argument: an ExpectedFailure, an exception type or tuple of types,
or a predicate. Exceptions outside the policy are re-raised untouched.
KeyboardInterrupt, SystemExit, GeneratorExit and asyncio.CancelledError always
propagate, whatever the policy says.

Example:
    >>> def load(path: str) -> str:
    ...     with open(path) as fh:
    ...         return fh.read()
    >>> r = from_throwing(lambda: load("/nonexistent"), expected=OSError)
    >>> r.error.code
    <ErrorCode.NOT_FOUND: 'NOT_FOUND'>
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field, replace
from functools import partial, wraps
from typing import TYPE_CHECKING, Callable, ParamSpec, TypeAlias, TypeVar, cast, overload

from .config import get_settings
from .errors import ErrorInfo, IllegalAccessError
from .result import Result, failure, success

if TYPE_CHECKING:
    from collections.abc import Awaitable

T = TypeVar("T")
E = TypeVar("E")
P = ParamSpec("P")

logger = logging.getLogger("fallible.interop")

# Programming errors and resource exhaustion: never converted by default
DEFAULT_UNEXPECTED: tuple[type[BaseException], ...] = (
    AssertionError,
    MemoryError,
    RecursionError,
    SystemError,
    IllegalAccessError,
)

# Control-flow signals, never converted under any policy
_ALWAYS_PROPAGATE: tuple[type[BaseException], ...] = (
    KeyboardInterrupt,
    SystemExit,
    GeneratorExit,
    asyncio.CancelledError,
)


@dataclass(frozen=True, slots=True)
class ExpectedFailure:
    """Classifies exceptions as expected (convert to Failure) or unexpected (re-raise).

    An exception is expected when it is an instance of `catch`, not an instance
    of `never`, and `predicate` (if given) returns True for it.

    Example:
        >>> policy = ExpectedFailure.of(KeyError, ValueError)
        >>> policy(KeyError("id")), policy(TypeError("x"))
        (True, False)
        >>> http_4xx = ExpectedFailure(predicate=lambda e: 400 <= getattr(e, "status", 0) < 500)
    """

    catch: tuple[type[BaseException], ...] = (Exception,)
    never: tuple[type[BaseException], ...] = DEFAULT_UNEXPECTED
    predicate: Callable[[BaseException], bool] | None = field(default=None, compare=False)

    @classmethod
    def of(cls, *types: type[BaseException]) -> ExpectedFailure:
        """Policy catching exactly the given exception types.

        Types named here are not filtered through DEFAULT_UNEXPECTED, so
        ExpectedFailure.of(AssertionError) does convert assertions.
        """
        return cls(catch=types, never=())

    def excluding(self, *types: type[BaseException]) -> ExpectedFailure:
        """New policy that additionally re-raises the given types."""
        return replace(self, never=(*self.never, *types))

    def __call__(self, exc: BaseException) -> bool:
        if isinstance(exc, _ALWAYS_PROPAGATE) or isinstance(exc, self.never):
            return False
        if not isinstance(exc, self.catch):
            return False
        return self.predicate is None or bool(self.predicate(exc))


DEFAULT_POLICY = ExpectedFailure()

Expected: TypeAlias = (
    "ExpectedFailure | type[BaseException] | tuple[type[BaseException], ...] | Callable[[BaseException], bool] | None"
)


def _as_policy(expected: Expected) -> Callable[[BaseException], bool]:
    if expected is None:
        return DEFAULT_POLICY
    if isinstance(expected, ExpectedFailure):
        return expected
    if isinstance(expected, type) and issubclass(expected, BaseException):
        return ExpectedFailure.of(expected)
    if isinstance(expected, tuple):
        return ExpectedFailure.of(*expected)
    if callable(expected):
        return ExpectedFailure(predicate=expected)
    raise TypeError(f"expected must be a policy, exception type(s) or predicate, got {expected!r}")


def _identity(info: ErrorInfo) -> ErrorInfo:
    return info


def _error_info(exc: BaseException, operation: str) -> ErrorInfo:
    settings = get_settings()
    return ErrorInfo.from_exception(
        exc,
        operation=operation,
        classify=settings.classify_errors,
        include_traceback=settings.capture_traceback,
    )


def _label(operation: str) -> str:
    return f"[{operation}] " if operation else ""


# ─────────────────────────────────────────────────────────────────────────────
# Sync
# ─────────────────────────────────────────────────────────────────────────────

@overload
def from_throwing(fn: Callable[[], T], *, expected: Expected = ..., operation: str = ...) -> Result[T, ErrorInfo]: ...

@overload
def from_throwing(
    fn: Callable[[], T],
    map_error: Callable[[ErrorInfo], E],
    *,
    expected: Expected = ...,
    operation: str = ...,
) -> Result[T, E]: ...


def from_throwing(
    fn: Callable[[], T],
    map_error: Callable[[ErrorInfo], E] = _identity,  # type: ignore[assignment]
    *,
    expected: Expected = None,
    operation: str = "",
) -> Result[T, E]:
    """Call fn(); Success with its return value, Failure(map_error(info)) if it raises.

    Args:
        fn: Zero-argument callable to run (use functools.partial or a lambda for arguments)
        map_error: Converts the ErrorInfo of an expected exception to the Failure payload
        expected: Which exceptions to convert; others are re-raised (default DEFAULT_POLICY)
        operation: Recorded as the first context of the ErrorInfo

    Example:
        >>> from_throwing(lambda: 42)
        Success(42)
        >>> from_throwing(lambda: {}["user"], lambda info: info.code).error
        <ErrorCode.NOT_FOUND: 'NOT_FOUND'>
    """
    policy = _as_policy(expected)
    try:
        value = fn()
    except BaseException as exc:
        if not policy(exc):
            logger.debug(f"{_label(operation)}re-raising unexpected {type(exc).__name__}: {exc}")
            raise
        logger.debug(f"{_label(operation)}{type(exc).__name__} converted to Failure: {exc}")
        return failure(map_error(_error_info(exc, operation)))
    return success(value)


# ─────────────────────────────────────────────────────────────────────────────
# Async
# ─────────────────────────────────────────────────────────────────────────────

async def _complete(fn: Callable[[], Awaitable[T]] | Callable[[], T] | Awaitable[T]) -> T:
    """Await an awaitable, a coroutine function, or a sync callable (run in a thread)."""
    if inspect.isawaitable(fn):
        return await fn
    if inspect.iscoroutinefunction(fn):
        return await fn()
    value = await asyncio.to_thread(fn)  # type: ignore[arg-type]
    if inspect.isawaitable(value):
        return await value
    return cast(T, value)


async def from_throwing_async(
    fn: Callable[[], Awaitable[T]] | Callable[[], T] | Awaitable[T],
    map_error: Callable[[ErrorInfo], E] = _identity,  # type: ignore[assignment]
    *,
    expected: Expected = None,
    operation: str = "",
) -> Result[T, E]:
    """Async version of from_throwing. Same conversion rule, observed on completion.

    fn may be a coroutine function, a coroutine or other awaitable, or a sync
    callable (offloaded with asyncio.to_thread). Cancellation always propagates.

    Example:
        >>> async def fetch() -> int:
        ...     return 42
        >>> await from_throwing_async(fetch)
        Success(42)
    """
    policy = _as_policy(expected)
    try:
        value = await _complete(fn)
    except BaseException as exc:
        if not policy(exc):
            logger.debug(f"{_label(operation)}re-raising unexpected {type(exc).__name__}: {exc}")
            raise
        logger.debug(f"{_label(operation)}{type(exc).__name__} converted to Failure: {exc}")
        return failure(map_error(_error_info(exc, operation)))
    return success(value)


# ─────────────────────────────────────────────────────────────────────────────
# Decorator
# ─────────────────────────────────────────────────────────────────────────────

def catching(
    map_error: Callable[[ErrorInfo], E] = _identity,  # type: ignore[assignment]
    *,
    expected: Expected = None,
    operation: str | None = None,
) -> Callable[[Callable[P, T]], Callable[P, Result[T, E]]]:
    """Decorator turning a raising function (sync or async) into a Result-returning one.

    The operation name defaults to the function's qualified name.

    Example:
        >>> @catching(lambda info: info.message, expected=KeyError)
        ... def lookup(key: str) -> int:
        ...     return {"a": 1}[key]
        >>> lookup("a"), lookup("b")
        (Success(1), Failure("'b'"))
    """
    def decorator(fn: Callable[P, T]) -> Callable[P, Result[T, E]]:
        op = fn.__qualname__ if operation is None else operation

        if inspect.iscoroutinefunction(fn):
            @wraps(fn)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, E]:
                call = cast("Callable[[], Awaitable[T]]", partial(fn, *args, **kwargs))
                return await from_throwing_async(call, map_error, expected=expected, operation=op)
            return async_wrapper  # type: ignore[return-value]

        @wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, E]:
            return from_throwing(partial(fn, *args, **kwargs), map_error, expected=expected, operation=op)
        return wrapper

    return decorator
