"""Core protocol definitions.

Describes the capabilities the normaliser relies on without binding it
to concrete types: the injected content normaliser, pull-streams and
their readers.
"""

from __future__ import annotations

from typing import Any, Awaitable, Protocol, Union


class ContentNormaliser(Protocol):
    """Maps raw content into whatever the consuming pipeline needs.

    May be a plain function or a coroutine function.
    """

    def __call__(self, content: Any) -> Union[Any, Awaitable[Any]]:
        ...


class StreamReader(Protocol):
    """Reader handed out by a pull-stream.

    `read()` returns (or resolves to) a result exposing `done` and
    `value`, either as attributes or as mapping keys; None also ends the
    stream. `release_lock()` and `cancel()` are optional.
    """

    def read(self) -> Any:
        ...


class PullStream(Protocol):
    def get_reader(self) -> StreamReader:
        ...

