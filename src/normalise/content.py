"""Default content normaliser.

Turns any recognised raw content into an async iterator of `bytes`:
text is UTF-8 encoded, byte buffers pass through, blobs are read in
chunks, integer sequences are packed into byte batches, and nested
sequences are flattened up to a maximum nesting depth.
"""

from __future__ import annotations

import inspect
import logging
from contextlib import aclosing
from typing import Any, AsyncIterator, Optional

from config import CONTENT_CHUNK_SIZE, MAX_NESTING_DEPTH
from core.classify import SEQUENCE_VARIANTS, classify
from core.errors import NestingTooDeepError, UnexpectedInputAbsent, UnexpectedInputUnrecognized
from core.models import InputVariant
from core.peekable import AnyPeekable, AsyncPeekable, Peekable, aclose, aiterate, apeek, peekable
from core.shapes import is_blob, is_bytes, is_integer, is_iterable, is_pull_stream, is_text
from sources.pull_stream import pull_stream_to_async_iter

logger = logging.getLogger(__name__)


async def normalise_content(
    content: Any,
    *,
    chunk_size: Optional[int] = None,
    max_depth: Optional[int] = None,
) -> AsyncIterator[bytes]:
    size = chunk_size if chunk_size is not None else CONTENT_CHUNK_SIZE
    depth_limit = max_depth if max_depth is not None else MAX_NESTING_DEPTH

    if size <= 0:
        raise ValueError("chunk_size must be positive")

    async with aclosing(_normalise(content, size, depth_limit, 0)) as chunks:
        async for chunk in chunks:
            yield chunk


async def _normalise(value: Any, chunk_size: int, max_depth: int, depth: int) -> AsyncIterator[bytes]:
    variant = classify(value)

    if variant is InputVariant.ABSENT:
        raise UnexpectedInputAbsent()

    if variant is InputVariant.TEXT:
        yield value.encode("utf-8")
        return

    if variant is InputVariant.BYTES:
        yield bytes(value)
        return

    if variant is InputVariant.BLOB:
        async for chunk in _read_blob(value, chunk_size):
            yield chunk
        return

    if variant not in SEQUENCE_VARIANTS:
        raise UnexpectedInputUnrecognized(value)

    # A peekable handed over as content belongs to this normaliser, like an
    # adapter it acquired for a pull-stream
    is_stream = variant is InputVariant.PULL_STREAM
    owned = is_stream or isinstance(value, (Peekable, AsyncPeekable))
    source = peekable(pull_stream_to_async_iter(value) if is_stream else value)

    try:
        head = await apeek(source)
        if head.done:
            return

        first = head.value

        if is_integer(first):
            async for chunk in _pack_integers(source, chunk_size):
                yield chunk
            return

        if is_bytes(first) or is_text(first):
            async for item in aiterate(source):
                yield _chunk_to_bytes(item)
            return

        if is_iterable(first) or is_pull_stream(first) or is_blob(first):
            if depth >= max_depth:
                raise NestingTooDeepError(max_depth)

            logger.debug("Flattening nested content at depth %d", depth + 1)
            async for item in aiterate(source):
                async with aclosing(_normalise(item, chunk_size, max_depth, depth + 1)) as chunks:
                    async for chunk in chunks:
                        yield chunk
            return

        raise UnexpectedInputUnrecognized(first)
    finally:
        if owned:
            await aclose(source)


def _chunk_to_bytes(item: Any) -> bytes:
    if is_text(item):
        return item.encode("utf-8")
    if is_bytes(item):
        return bytes(item)
    raise UnexpectedInputUnrecognized(item)


async def _pack_integers(source: AnyPeekable, chunk_size: int) -> AsyncIterator[bytes]:
    # Batches keep long integer streams from being materialised whole
    batch = bytearray()
    async for item in aiterate(source):
        if not is_integer(item):
            raise UnexpectedInputUnrecognized(item)
        batch.append(item)
        if len(batch) >= chunk_size:
            yield bytes(batch)
            batch = bytearray()

    if batch:
        yield bytes(batch)


async def _read_blob(blob: Any, chunk_size: int) -> AsyncIterator[bytes]:
    while True:
        chunk = blob.read(chunk_size)
        if inspect.isawaitable(chunk):
            chunk = await chunk
        if not chunk:
            return
        yield chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk)


async def collect_bytes(content: Any) -> bytes:
    """Drain normalised content into a single `bytes` value.

    Accepts bytes, text, or a sync/async iterable of byte chunks, text
    chunks or integers.
    """
    if content is None:
        return b""
    if is_bytes(content):
        return bytes(content)
    if is_text(content):
        return content.encode("utf-8")

    out = bytearray()
    async for item in aiterate(peekable(content)):
        if is_integer(item):
            out.append(item)
        else:
            out.extend(_chunk_to_bytes(item))
    return bytes(out)
