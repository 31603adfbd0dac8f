"""twotrack - explicit, chainable success/error results for sync and async code"""

__version__ = "0.1.0"

from .async_result import AsyncResult, err, infer, ok, safe, safe_try, to_async
from .exceptions import (
    AmbiguousResultError,
    ErrorType,
    ImpossibleError,
    NoThrowAllowedError,
    ResultError,
    UnwrapError,
)
from .result import (
    EMPTY,
    Empty,
    Result,
    ResultStatus,
    ResultSync,
    err_sync,
    infer_sync,
    ok_sync,
    safe_sync,
    safe_try_sync,
)

__all__ = [
    # Sync results
    "Result",
    "ResultSync",
    "ResultStatus",
    "Empty",
    "EMPTY",
    "ok_sync",
    "err_sync",
    "safe_try_sync",
    "safe_sync",
    "infer_sync",
    # Async results
    "AsyncResult",
    "ok",
    "err",
    "to_async",
    "safe_try",
    "safe",
    "infer",
    # Exceptions
    "ResultError",
    "ErrorType",
    "ImpossibleError",
    "AmbiguousResultError",
    "NoThrowAllowedError",
    "UnwrapError",
]
