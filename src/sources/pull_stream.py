"""Pull-stream adapter.

Turns an object exposing `get_reader()` into an async iterator. The
reader acquired here is owned by the adapter: when iteration ends early
the stream is cancelled (unless `prevent_cancel`), and the reader's lock
is always released.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, AsyncIterator

from core.interfaces import PullStream
from core.shapes import get_field

logger = logging.getLogger(__name__)


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


async def pull_stream_to_async_iter(stream: PullStream, *, prevent_cancel: bool = False) -> AsyncIterator[Any]:
    reader = stream.get_reader()
    finished = False

    try:
        while True:
            result = await _maybe_await(reader.read())
            if result is None or get_field(result, "done", False):
                finished = True
                return
            yield get_field(result, "value")
    finally:
        # Only cancel a stream the consumer abandoned before it was drained
        if not finished and not prevent_cancel:
            cancel = getattr(reader, "cancel", None)
            if callable(cancel):
                logger.debug("Cancelling pull-stream reader after early exit")
                await _maybe_await(cancel())

        release_lock = getattr(reader, "release_lock", None)
        if callable(release_lock):
            release_lock()
