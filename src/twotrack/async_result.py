"""Async result container built on asyncio.

AsyncResult wraps an awaitable that resolves to a ResultSync and re-exposes
the combinator surface, so a chain can be built without awaiting each step::

    total = await (
        safe_try(lambda: fetch_order(order_id))
        .map(lambda order: order.lines)
        .and_then(price_lines)
        .unwrap_or(0)
    )

Inside a running event loop every container schedules its work as soon as it
is built, so continuations run in the order they were attached whether or not
anyone awaits them. A container built with no running loop is scheduled on
its first await instead. Either way the wrapped awaitable runs once and its
outcome is shared by every consumer of the same instance.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Generator,
    Generic,
    NoReturn,
    Optional,
    Union,
    overload,
)

from .inference import E, F, O, P, R, T, U
from .result import ResultSync, err_sync, ok_sync

if TYPE_CHECKING:
    from .inference import AsyncContinuation

logger = logging.getLogger(__name__)

# The event loop only keeps weak references to tasks; hold detached
# continuations here until they finish.
_in_flight: set = set()


async def _as_result(value: AsyncContinuation[U, F]) -> ResultSync[U, F]:
    """Await ``value`` if needed; continuations may return either form."""
    if inspect.isawaitable(value):
        return await value
    return value


class AsyncResult(Generic[O, E]):
    """
    A result whose outcome is produced by an awaitable.

    Awaiting an AsyncResult yields the settled ResultSync. Combinators return
    a new AsyncResult immediately and run once the predecessor has settled,
    in the order they were attached.
    """

    def __init__(self, source: Union[Awaitable[ResultSync[O, E]], ResultSync[O, E]]):
        """
        Initialize AsyncResult.

        Args:
            source: Awaitable resolving to a ResultSync, or an already
                    computed ResultSync
        """
        self._source = source
        self._future: Optional[asyncio.Future] = None

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # No loop yet: scheduled by the first await.
            return
        self._settle()

    def _settle(self) -> asyncio.Future:
        if self._future is None:
            source = self._source
            if isinstance(source, ResultSync):
                source = _as_result(source)
            self._future = asyncio.ensure_future(source)
            if not self._future.done():
                _in_flight.add(self._future)
                self._future.add_done_callback(_in_flight.discard)
        return self._future

    def __await__(self) -> Generator[Any, None, ResultSync[O, E]]:
        # Shielded: cancelling one consumer must not cancel the shared work.
        return asyncio.shield(self._settle()).__await__()

    def __repr__(self) -> str:
        if isinstance(self._source, ResultSync):
            return f"AsyncResult({self._source!r})"
        future = self._future
        if future is not None and future.done() and not future.cancelled():
            if future.exception() is None:
                return f"AsyncResult({future.result()!r})"
        return "AsyncResult(<pending>)"

    async def is_ok(self) -> bool:
        return (await self).is_ok()

    async def is_err(self) -> bool:
        return (await self).is_err()

    async def unwrap(self) -> O:
        """Return the success value; raises like ResultSync.unwrap()."""
        return (await self).unwrap()

    async def unwrap_or(self, fallback: T) -> Union[O, T]:
        return (await self).unwrap_or(fallback)

    async def match(self, *, ok: Callable[[O], R], err: Callable[[E], R]) -> R:
        return (await self).match(ok=ok, err=err)

    def map(self, fn: Callable[[O], U]) -> AsyncResult[U, E]:
        return AsyncResult(self._apply(lambda result: result.map(fn)))

    def map_err(self, fn: Callable[[E], F]) -> AsyncResult[O, F]:
        return AsyncResult(self._apply(lambda result: result.map_err(fn)))

    def and_tee(self, fn: Callable[[O], Any]) -> AsyncResult[O, E]:
        """Run ``fn`` on the success value; see ResultSync.and_tee()."""
        return AsyncResult(self._apply(lambda result: result.and_tee(fn)))

    def or_tee(self, fn: Callable[[E], Any]) -> AsyncResult[O, E]:
        """Run ``fn`` on the error value; see ResultSync.or_tee()."""
        return AsyncResult(self._apply(lambda result: result.or_tee(fn)))

    def and_then(
        self,
        fn: Callable[[O], AsyncContinuation[U, F]],
    ) -> AsyncResult[U, Union[E, F]]:
        """
        Chain a continuation onto the success value.

        ``fn`` may return a ResultSync, a coroutine resolving to one, or
        another AsyncResult. An Err short-circuits without calling ``fn``.
        """
        return AsyncResult(self._chain(ok=fn, err=err_sync))

    def or_else(
        self,
        fn: Callable[[E], AsyncContinuation[U, F]],
    ) -> AsyncResult[Union[O, U], F]:
        """
        Recover from an error with a continuation.

        Accepts the same continuation shapes as ``and_then``. An Ok is passed
        through without calling ``fn``.
        """
        return AsyncResult(self._chain(ok=ok_sync, err=fn))

    async def _apply(self, step: Callable[[ResultSync[O, E]], ResultSync[U, F]]):
        return step(await self)

    async def _chain(self, *, ok: Callable, err: Callable):
        result = await self
        return await _as_result(result.match(ok=ok, err=err))

    @staticmethod
    def ok(value: T) -> AsyncResult[T, NoReturn]:
        """Create an AsyncResult with an Ok value."""
        return AsyncResult(ok_sync(value))

    @staticmethod
    def err(error: T) -> AsyncResult[NoReturn, T]:
        """Create an AsyncResult with an Err value."""
        return AsyncResult(err_sync(error))

    @staticmethod
    def to_async(result: ResultSync[O, E]) -> AsyncResult[O, E]:
        """
        Lift a computed ResultSync into an AsyncResult.

        Lets sync results join an async chain without changing the
        functions that produce them.
        """
        return AsyncResult(result)


ok = AsyncResult.ok
err = AsyncResult.err
to_async = AsyncResult.to_async


async def _capture(
    awaitable: Awaitable[T], map_error: Optional[Callable[[Exception], Any]]
) -> ResultSync[T, Any]:
    try:
        value = await awaitable if inspect.isawaitable(awaitable) else awaitable
    except Exception as exc:
        logger.debug(f"safe_try captured {exc!r}")
        if map_error is not None:
            return err_sync(map_error(exc))
        return err_sync(exc)
    return ok_sync(value)


@overload
def safe_try(fn: Callable[[], Awaitable[T]]) -> AsyncResult[T, Exception]: ...


@overload
def safe_try(
    fn: Callable[[], Awaitable[T]], map_error: Callable[[Exception], F]
) -> AsyncResult[T, F]: ...


def safe_try(
    fn: Callable[[], Awaitable[T]],
    map_error: Optional[Callable[[Exception], Any]] = None,
) -> AsyncResult[T, Any]:
    """
    Call ``fn`` and capture failures as an Err.

    Both an exception raised while calling ``fn`` and one raised by the
    awaitable it returns become the error value. Cancellation is not captured.
    Inside a running loop the awaitable is scheduled right away, so the work
    completes even if the returned AsyncResult is never awaited.

    Args:
        fn: Zero-argument callable returning an awaitable
        map_error: Optional function converting the exception to the error value

    Returns:
        AsyncResult resolving to Ok with the awaited value, or Err
    """
    try:
        awaitable = fn()
    except Exception as exc:
        logger.debug(f"safe_try captured {exc!r} before awaiting")
        if map_error is not None:
            return err(map_error(exc))
        return err(exc)
    return AsyncResult(_capture(awaitable, map_error))


@overload
def safe(fn: Callable[P, Awaitable[T]]) -> Callable[P, AsyncResult[T, Exception]]: ...


@overload
def safe(
    *, map_error: Callable[[Exception], F]
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, AsyncResult[T, F]]]: ...


def safe(fn=None, *, map_error=None):
    """
    Decorate a coroutine function so every call returns an AsyncResult.

    Usable bare (``@safe``) or with an error mapper (``@safe(map_error=...)``).
    """

    def decorate(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            return safe_try(functools.partial(func, *args, **kwargs), map_error)

        return wrapper

    if fn is None:
        return decorate
    return decorate(fn)


@overload
def infer(fn: Callable[P, AsyncResult[O, E]]) -> Callable[P, AsyncResult[O, E]]: ...


@overload
def infer(
    fn: Callable[P, Awaitable[ResultSync[O, E]]],
) -> Callable[P, Awaitable[ResultSync[O, E]]]: ...


def infer(fn):
    """Return ``fn`` unchanged; lets the type checker re-derive its result type."""
    return fn
