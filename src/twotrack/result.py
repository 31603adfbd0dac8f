"""Result type for explicit error handling.

Provides ResultSync[O, E], an immutable container holding either a success
value or an error value, with combinators to transform, chain and recover
without raising. Unlike an Optional, ``None`` is a legal payload on both
sides: the unused slot holds the ``EMPTY`` sentinel instead.
"""

from __future__ import annotations

import enum
import functools
import logging
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Generic,
    NoReturn,
    Optional,
    Union,
    overload,
)

from .exceptions import (
    AmbiguousResultError,
    ImpossibleError,
    NoThrowAllowedError,
    UnwrapError,
)
from .inference import E, F, O, P, R, T, U

if TYPE_CHECKING:
    from .inference import SyncContinuation

logger = logging.getLogger(__name__)


class ResultStatus(enum.Enum):
    """Discriminant of a result."""

    OK = "ok"
    ERR = "err"


class Empty(enum.Enum):
    """Type of the marker occupying the unused slot of a result."""

    TOKEN = "EMPTY"

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = Empty.TOKEN


@dataclass(frozen=True, repr=False)
class ResultSync(Generic[O, E]):
    """Represents the outcome of an operation: a value or an error.

    Build instances with ``ok_sync``/``err_sync`` or ``safe_try_sync``.

    Attributes:
        status: ResultStatus.OK or ResultStatus.ERR
        ok: The success value, or EMPTY when status is ERR
        err: The error value, or EMPTY when status is OK
    """

    status: ResultStatus
    ok: Union[O, Empty] = EMPTY
    err: Union[E, Empty] = EMPTY

    def __post_init__(self) -> None:
        status = ResultStatus(self.status)
        object.__setattr__(self, "status", status)

        if status is ResultStatus.OK:
            consistent = self.ok is not EMPTY and self.err is EMPTY
        else:
            consistent = self.err is not EMPTY and self.ok is EMPTY

        if not consistent:
            raise AmbiguousResultError(
                f"a result with status '{status.value}' must populate exactly "
                f"the '{status.value}' slot",
                status=status.value,
            )

    def __repr__(self) -> str:
        if self.is_ok():
            return f"Ok({self.ok!r})"
        return f"Err({self.err!r})"

    def _get_ok(self) -> O:
        if self.ok is EMPTY:
            raise ImpossibleError("value is empty")
        return self.ok

    def _get_err(self) -> E:
        if self.err is EMPTY:
            raise ImpossibleError("error is empty")
        return self.err

    def is_ok(self) -> bool:
        return self.status is ResultStatus.OK

    def is_err(self) -> bool:
        return self.status is ResultStatus.ERR

    def unwrap(self) -> O:
        """Return the success value.

        Raises:
            The held error if it is an exception, otherwise UnwrapError.
        """
        if self.is_err():
            error = self._get_err()
            if isinstance(error, BaseException):
                raise error
            raise UnwrapError(error)
        return self._get_ok()

    def unwrap_or(self, fallback: T) -> Union[O, T]:
        if self.is_err():
            return fallback
        return self._get_ok()

    def match(self, *, ok: Callable[[O], R], err: Callable[[E], R]) -> R:
        """Call ``ok`` or ``err`` with the populated value and return its result."""
        if self.is_err():
            return err(self._get_err())
        return ok(self._get_ok())

    def map(self, fn: Callable[[O], U]) -> ResultSync[U, E]:
        """Transform the success value; an Err passes through untouched."""
        if self.is_err():
            return ResultSync.err_sync(self._get_err())
        return ResultSync.ok_sync(fn(self._get_ok()))

    def map_err(self, fn: Callable[[E], F]) -> ResultSync[O, F]:
        """Transform the error value; an Ok passes through untouched."""
        if self.is_err():
            return ResultSync.err_sync(fn(self._get_err()))
        return ResultSync.ok_sync(self._get_ok())

    def and_then(
        self, fn: Callable[[O], SyncContinuation[U, F]]
    ) -> ResultSync[U, Union[E, F]]:
        """
        Chain a result-returning function onto the success value.

        ``fn`` only runs for an Ok. An Err short-circuits and is returned as
        is, so the error type of the chain is the union of both sides.
        """
        if self.is_err():
            return ResultSync.err_sync(self._get_err())
        return fn(self._get_ok())

    def or_else(
        self, fn: Callable[[E], SyncContinuation[U, F]]
    ) -> ResultSync[Union[O, U], F]:
        """
        Recover from an error with a result-returning function.

        ``fn`` only runs for an Err; an Ok is returned as is.
        """
        if self.is_err():
            return fn(self._get_err())
        return ResultSync.ok_sync(self._get_ok())

    def and_tee(self, fn: Callable[[O], Any]) -> ResultSync[O, E]:
        """
        Run ``fn`` on the success value for its side effect only.

        The callback must not raise: a failing side effect belongs in
        ``and_then``.

        Raises:
            NoThrowAllowedError: If ``fn`` raises.
        """
        if self.is_err():
            return ResultSync.err_sync(self._get_err())

        value = self._get_ok()
        try:
            fn(value)
        except Exception as exc:
            logger.error(f"and_tee callback raised {exc!r}")
            raise NoThrowAllowedError("and_tee", exc) from exc

        return ResultSync.ok_sync(value)

    def or_tee(self, fn: Callable[[E], Any]) -> ResultSync[O, E]:
        """
        Run ``fn`` on the error value for its side effect only.

        Raises:
            NoThrowAllowedError: If ``fn`` raises.
        """
        if self.is_ok():
            return ResultSync.ok_sync(self._get_ok())

        error = self._get_err()
        try:
            fn(error)
        except Exception as exc:
            logger.error(f"or_tee callback raised {exc!r}")
            raise NoThrowAllowedError("or_tee", exc) from exc

        return ResultSync.err_sync(error)

    @staticmethod
    def ok_sync(value: T) -> ResultSync[T, NoReturn]:
        """Create a successful result."""
        return ResultSync(ResultStatus.OK, ok=value)

    @staticmethod
    def err_sync(error: T) -> ResultSync[NoReturn, T]:
        """Create a failed result."""
        return ResultSync(ResultStatus.ERR, err=error)


Result = ResultSync

ok_sync = ResultSync.ok_sync
err_sync = ResultSync.err_sync


@overload
def safe_try_sync(fn: Callable[[], T]) -> ResultSync[T, Exception]: ...


@overload
def safe_try_sync(
    fn: Callable[[], T], map_error: Callable[[Exception], F]
) -> ResultSync[T, F]: ...


def safe_try_sync(
    fn: Callable[[], T], map_error: Optional[Callable[[Exception], Any]] = None
) -> ResultSync[T, Any]:
    """
    Call ``fn`` and capture a raised exception as an Err.

    Args:
        fn: Zero-argument callable to execute
        map_error: Optional function converting the exception to the error value

    Returns:
        Ok with the return value, or Err with the (mapped) exception
    """
    try:
        value = fn()
    except Exception as exc:
        logger.debug(f"safe_try_sync captured {exc!r}")
        if map_error is not None:
            return err_sync(map_error(exc))
        return err_sync(exc)
    return ok_sync(value)


@overload
def safe_sync(fn: Callable[P, T]) -> Callable[P, ResultSync[T, Exception]]: ...


@overload
def safe_sync(
    *, map_error: Callable[[Exception], F]
) -> Callable[[Callable[P, T]], Callable[P, ResultSync[T, F]]]: ...


def safe_sync(fn=None, *, map_error=None):
    """
    Decorate a raising function so every call returns a result instead.

    Usable bare (``@safe_sync``) or with an error mapper
    (``@safe_sync(map_error=MyError.from_exception)``).
    """

    def decorate(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            return safe_try_sync(functools.partial(func, *args, **kwargs), map_error)

        return wrapper

    if fn is None:
        return decorate
    return decorate(fn)


def infer_sync(fn: Callable[P, ResultSync[O, E]]) -> Callable[P, ResultSync[O, E]]:
    """Return ``fn`` unchanged; lets the type checker re-derive its result type."""
    return fn
