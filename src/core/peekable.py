"""Lookahead adapters for sync and async iterables.

A peekable holds at most one buffered element. `peek()` pulls the next
element into that slot without it being lost: the following iteration
step yields it first, then the remaining source elements in order.
"""

from __future__ import annotations

import inspect
from typing import Any, AsyncIterable, AsyncIterator, Generic, Iterable, NamedTuple, TypeVar, Union

from core.shapes import is_async_iterable

T = TypeVar("T")

_EMPTY: Any = object()


class PeekResult(NamedTuple):
    value: Any
    done: bool


class Peekable(Generic[T]):
    # Lookahead over a synchronous iterable
    def __init__(self, source: Iterable[T]) -> None:
        self._it = iter(source)
        self._slot: Any = _EMPTY

    def __iter__(self) -> "Peekable[T]":
        return self

    def __next__(self) -> T:
        if self._slot is not _EMPTY:
            value, self._slot = self._slot, _EMPTY
            return value
        return next(self._it)

    def peek(self) -> PeekResult:
        if self._slot is _EMPTY:
            try:
                self._slot = next(self._it)
            except StopIteration:
                return PeekResult(None, True)
        return PeekResult(self._slot, False)

    def push(self, value: T) -> None:
        if self._slot is not _EMPTY:
            raise RuntimeError("Peekable already holds a buffered value")
        self._slot = value

    def close(self) -> None:
        self._slot = _EMPTY
        close = getattr(self._it, "close", None)
        if callable(close):
            close()


class AsyncPeekable(Generic[T]):
    # Lookahead over an asynchronous iterable; elements are still produced
    # one at a time by the source's own scheduling.
    def __init__(self, source: AsyncIterable[T]) -> None:
        self._it = source.__aiter__()
        self._slot: Any = _EMPTY

    def __aiter__(self) -> "AsyncPeekable[T]":
        return self

    async def __anext__(self) -> T:
        if self._slot is not _EMPTY:
            value, self._slot = self._slot, _EMPTY
            return value
        return await self._it.__anext__()

    async def peek(self) -> PeekResult:
        if self._slot is _EMPTY:
            try:
                self._slot = await self._it.__anext__()
            except StopAsyncIteration:
                return PeekResult(None, True)
        return PeekResult(self._slot, False)

    def push(self, value: T) -> None:
        if self._slot is not _EMPTY:
            raise RuntimeError("Peekable already holds a buffered value")
        self._slot = value

    async def aclose(self) -> None:
        self._slot = _EMPTY
        aclose = getattr(self._it, "aclose", None)
        if callable(aclose):
            await aclose()


AnyPeekable = Union[Peekable[Any], AsyncPeekable[Any]]


def peekable(source: Union[Iterable[T], AsyncIterable[T]]) -> AnyPeekable:
    if is_async_iterable(source):
        return AsyncPeekable(source)
    return Peekable(source)


async def apeek(source: AnyPeekable) -> PeekResult:
    """Peek a sync or async peekable from async code."""
    result = source.peek()
    if inspect.isawaitable(result):
        result = await result
    return result


async def aiterate(source: AnyPeekable) -> AsyncIterator[Any]:
    """Iterate a sync or async peekable from async code."""
    if isinstance(source, AsyncPeekable):
        async for item in source:
            yield item
    else:
        for item in source:
            yield item


async def aclose(source: AnyPeekable) -> None:
    if isinstance(source, AsyncPeekable):
        await source.aclose()
    else:
        source.close()
