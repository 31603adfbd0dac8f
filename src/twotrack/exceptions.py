"""Custom exceptions for twotrack.

Domain errors travel inside an Err result and are never raised by the
containers. The exceptions below cover misuse of the containers themselves
and are always raised.
"""

from enum import Enum
from typing import Any, Optional


class ErrorType(Enum):
    """Kinds of usage-contract violations."""

    IMPOSSIBLE = "impossible"
    AMBIGUOUS_RESULT = "ambiguous_result"
    NO_THROW_ALLOWED = "no_throw_allowed"
    UNWRAP_ERR = "unwrap_err"


class ResultError(Exception):
    """Base for every misuse of a ResultSync or AsyncResult.

    Catching ResultError separates a broken contract (an ambiguous result, a
    raising tee, an unwrapped Err) from the domain errors carried in Err.

    Attributes:
        message: What went wrong with the container
        error_type: Which contract was broken
        details: Context such as the offending status or combinator name
    """

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.IMPOSSIBLE,
        details: Optional[dict] = None,
    ):
        self.message = message
        self.error_type = error_type
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        base = f"[{self.error_type.value}] {self.message}"
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{base} ({details_str})"
        return base

    def to_dict(self) -> dict:
        """Describe the broken contract as plain data, e.g. for an Err payload."""
        return {
            "error_type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ImpossibleError(ResultError):
    """Raised when an empty slot is read; construction rules make this a bug."""

    def __init__(self, message: str):
        super().__init__(message, ErrorType.IMPOSSIBLE)


class AmbiguousResultError(ResultError):
    """Raised when a result is built with both slots set, or neither."""

    def __init__(self, message: str, status: Optional[str] = None):
        details = {"status": status} if status else {}
        super().__init__(message, ErrorType.AMBIGUOUS_RESULT, details)


class NoThrowAllowedError(ResultError):
    """Raised when a tee callback raises instead of returning.

    Attributes:
        combinator: Name of the tee combinator that was violated
        cause: The exception raised by the callback
    """

    def __init__(self, combinator: str, cause: BaseException):
        self.combinator = combinator
        self.cause = cause
        alternative = "and_then" if combinator == "and_tee" else "or_else"
        message = (
            f"{combinator} should not raise, please move it to {alternative}: "
            f"{cause!r}"
        )
        super().__init__(
            message, ErrorType.NO_THROW_ALLOWED, {"combinator": combinator}
        )
        self.__cause__ = cause


class UnwrapError(ResultError, RuntimeError):
    """Raised by unwrap() on an Err whose payload is not an exception.

    Attributes:
        error: The error payload held by the result
    """

    def __init__(self, error: Any):
        self.error = error
        super().__init__(f"Called unwrap() on Err: {error}", ErrorType.UNWRAP_ERR)
