"""Typing helpers shared by the sync and async result containers.

Python has no conditional types, so the success/error projection is carried
by the generic signatures of ``and_then``/``or_else``: the type checker binds
``U`` and ``F`` from whatever the continuation returns and widens the chain to
``E | F`` (or ``O | U``) without an annotation at the call site::

    def parse(raw: str) -> ResultSync[int, ParseError]: ...
    def check(n: int) -> ResultSync[int, RangeError]: ...

    parse("3").and_then(check)  # ResultSync[int, ParseError | RangeError]

The continuation aliases are only meaningful to a type checker and are not
defined at runtime.
"""

from typing import TYPE_CHECKING, Awaitable, ParamSpec, TypeVar, Union

# Success / error of the receiver.
O = TypeVar("O")
E = TypeVar("E")
# Success / error produced by a continuation.
U = TypeVar("U")
F = TypeVar("F")
# Free slots: factory payloads and match() return values.
T = TypeVar("T")
R = TypeVar("R")

P = ParamSpec("P")

if TYPE_CHECKING:
    from .result import ResultSync

    SyncContinuation = ResultSync[U, F]
    AsyncContinuation = Union[ResultSync[U, F], Awaitable[ResultSync[U, F]]]
