"""Result type for expected failures, with combinators and exception interop.

A Result is either Success(value) or Failure(error). Producers return one
instead of raising for expected failure modes (not found, validation,
permission denied, ...); callers narrow it or chain it through combinators.

Example:
    >>> from fallible import Result, success, failure, combine
    >>>
    >>> def find_user(user_id: int) -> Result[dict, str]:
    ...     users = {1: {"name": "ada"}}
    ...     return success(users[user_id]) if user_id in users else failure("user not found")
    >>>
    >>> find_user(1).map(lambda u: u["name"]).get_or_else("anonymous")
    'ada'
    >>> find_user(2).map(lambda u: u["name"]).get_or_else("anonymous")
    'anonymous'
    >>> combine([find_user(1), find_user(2)])
    Failure('user not found')
"""

import logging

from . import combinators
from .aggregation import collect_all, combine, partition, traverse
from .config import FallibleSettings, clear_settings_cache, configure_logging, get_settings
from .errors import ErrorCode, ErrorContext, ErrorInfo, IllegalAccessError, classify_exception
from .interop import DEFAULT_POLICY, ExpectedFailure, catching, from_throwing, from_throwing_async
from .result import Outcome, Result, failure, success

logging.getLogger("fallible").addHandler(logging.NullHandler())

__all__ = [
    # Core
    "Result", "Outcome", "success", "failure",
    # Combinators (free-function forms)
    "combinators",
    # Aggregation
    "combine", "traverse", "collect_all", "partition",
    # Interop
    "from_throwing", "from_throwing_async", "catching", "ExpectedFailure", "DEFAULT_POLICY",
    # Errors
    "ErrorCode", "ErrorContext", "ErrorInfo", "IllegalAccessError", "classify_exception",
    # Configuration
    "FallibleSettings", "get_settings", "clear_settings_cache", "configure_logging",
]
