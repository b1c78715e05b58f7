"""Structured error information for Failure payloads.

- ErrorCode: Standard codes for expected failure modes
- ErrorContext/ErrorInfo: Immutable error description with operation provenance
- classify_exception: Map an exception to an ErrorCode
- IllegalAccessError: Raised when reading the wrong payload of a Result
"""

from __future__ import annotations

import traceback
from enum import StrEnum
from functools import lru_cache
from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer

JsonDict = dict[str, Any]


class ErrorCode(StrEnum):
    """Standard codes for expected failure modes."""
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    TIMEOUT = "TIMEOUT"
    NETWORK = "NETWORK"
    PARSE = "PARSE"
    CONFLICT = "CONFLICT"
    UNAVAILABLE = "UNAVAILABLE"
    UNKNOWN = "UNKNOWN"


# Ordered: first matching pattern wins
_PATTERN_CODES: dict[str, ErrorCode] = {
    "timeout": ErrorCode.TIMEOUT,
    "notfound": ErrorCode.NOT_FOUND,
    "not found": ErrorCode.NOT_FOUND,
    "missing": ErrorCode.NOT_FOUND,
    "keyerror": ErrorCode.NOT_FOUND,
    "lookup": ErrorCode.NOT_FOUND,
    "permission": ErrorCode.PERMISSION_DENIED,
    "forbidden": ErrorCode.PERMISSION_DENIED,
    "unauthorized": ErrorCode.PERMISSION_DENIED,
    "connection": ErrorCode.NETWORK,
    "network": ErrorCode.NETWORK,
    "json": ErrorCode.PARSE,
    "decode": ErrorCode.PARSE,
    "parse": ErrorCode.PARSE,
    "conflict": ErrorCode.CONFLICT,
    "exists": ErrorCode.CONFLICT,
    "unavailable": ErrorCode.UNAVAILABLE,
    "validation": ErrorCode.VALIDATION,
    "invalid": ErrorCode.VALIDATION,
    "value": ErrorCode.VALIDATION,
    "type": ErrorCode.VALIDATION,
}
_PATTERN_KEYS = tuple(_PATTERN_CODES)


@lru_cache(maxsize=256)
def _classify_cached(exc_key: str) -> ErrorCode:
    haystack = exc_key.lower()
    for pattern in _PATTERN_KEYS:
        if pattern in haystack:
            return _PATTERN_CODES[pattern]
    return ErrorCode.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCode:
    """Map exception to error code via pattern matching on name/message."""
    return _classify_cached(f"{type(exc).__name__} {exc}")


class IllegalAccessError(RuntimeError):
    """Success value read from a Failure, or error read from a Success.

    A programming error, never an expected failure: the default interop
    policy re-raises it instead of converting it.
    """


# ═══════════════════════════════════════════════════════════════════════════════
# Error Context & Provenance
# ═══════════════════════════════════════════════════════════════════════════════

_EMPTY_META: JsonDict = {}


class ErrorContext(BaseModel):
    """Operation in which an error was observed, with optional location and metadata."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="forbid")

    operation: Annotated[str, Field(min_length=1)]
    location: str = Field(default="", repr=False)
    metadata: JsonDict = Field(default_factory=dict, repr=False)

    def __str__(self) -> str:
        loc = f" at {self.location}" if self.location else ""
        meta = f" ({', '.join(f'{k}={v}' for k, v in self.metadata.items())})" if self.metadata else ""
        return f"{self.operation}{loc}{meta}"

    def __hash__(self) -> int:
        # metadata values may be unhashable
        return hash((self.operation, self.location))


_EMPTY_CONTEXTS: tuple[ErrorContext, ...] = ()


class ErrorInfo(BaseModel):
    """Description of a caught exception, used as the default Failure payload.

    Immutable. The with_* helpers return new instances so an ErrorInfo can be
    enriched as it travels up a chain of operations.

    Example:
        >>> info = ErrorInfo(message="user 7 missing", code=ErrorCode.NOT_FOUND)
        >>> info.with_operation("load_user", user_id=7).format()
        'user 7 missing [NOT_FOUND]\\nContext trace:\\n  - load_user (user_id=7)'
    """

    model_config = ConfigDict(frozen=True, validate_default=True, extra="forbid")

    message: str
    exception_type: str | None = None
    code: ErrorCode = ErrorCode.UNKNOWN
    contexts: tuple[ErrorContext, ...] = _EMPTY_CONTEXTS
    details: str | None = Field(default=None, repr=False)

    @field_serializer("contexts")
    def _serialize_contexts(self, v: tuple[ErrorContext, ...]) -> list[JsonDict]:
        return [ctx.model_dump() for ctx in v]

    @computed_field
    @property
    def root_operation(self) -> str | None:
        """First operation recorded (origin of the error)."""
        return self.contexts[0].operation if self.contexts else None

    def __hash__(self) -> int:
        return hash((self.message, self.exception_type, self.code, self.contexts))

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        *,
        operation: str = "",
        classify: bool = True,
        include_traceback: bool = False,
    ) -> Self:
        """Build from an exception, optionally classifying it and keeping its traceback."""
        details = "".join(traceback.format_exception(exc)) if include_traceback else None
        info = cls(
            message=str(exc) or type(exc).__name__,
            exception_type=type(exc).__name__,
            code=classify_exception(exc) if classify else ErrorCode.UNKNOWN,
            details=details,
        )
        return info.with_operation(operation) if operation else info

    def with_context(self, ctx: ErrorContext) -> ErrorInfo:
        """Add context (returns new info)."""
        return self.model_copy(update={"contexts": (*self.contexts, ctx)})

    def with_operation(self, operation: str, location: str = "", **metadata: Any) -> ErrorInfo:
        """Add context with operation info."""
        return self.with_context(ErrorContext(operation=operation, location=location, metadata=metadata or _EMPTY_META))

    def with_code(self, code: ErrorCode) -> ErrorInfo:
        """Return new info with error code set."""
        return self.model_copy(update={"code": code})

    def format(self, *, include_details: bool = False) -> str:
        """Format as human-readable string."""
        parts = [self.message]
        if self.code is not ErrorCode.UNKNOWN:
            parts.append(f" [{self.code}]")
        if self.contexts:
            parts.append("\nContext trace:\n" + "\n".join(f"  - {ctx}" for ctx in self.contexts))
        if include_details and self.details:
            parts.append(f"\nDetails:\n{self.details}")
        return "".join(parts)

    __str__ = format
