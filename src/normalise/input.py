"""Input normaliser.

`normalise_input` accepts text, raw bytes, blobs, file records, and any
(possibly nested, possibly async) sequence of these, and lazily yields
FileRecords. Raw content is handed to an injected content normaliser;
this module never reads or transforms the data itself.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, AsyncIterator, Optional

from core.classify import SEQUENCE_VARIANTS, classify
from core.errors import UnexpectedInputAbsent, UnexpectedInputUnrecognized
from core.interfaces import ContentNormaliser
from core.models import FileRecord, InputVariant
from core.peekable import aclose, aiterate, apeek, peekable
from core.shapes import (
    get_field,
    is_blob,
    is_bytes,
    is_file_object,
    is_integer,
    is_iterable,
    is_pull_stream,
    is_text,
)
from sources.pull_stream import pull_stream_to_async_iter

logger = logging.getLogger(__name__)

_SINGLE_VALUE_VARIANTS = frozenset({InputVariant.TEXT, InputVariant.BYTES, InputVariant.BLOB})


async def normalise_input(value: Any, normalise_content: ContentNormaliser) -> AsyncIterator[FileRecord]:
    """Lazily yield FileRecords for a loosely shaped input.

    Dispatch order: None fails; text, bytes and blobs become one record;
    pull-streams are adapted to async sequences; sequences are classified
    by their first element (ints or bytes: one record over the whole
    stream; records, blobs, text or nested sequences: one record each);
    anything else with a `path` or `content` is a single record. An empty
    sequence yields no records at all.
    """
    variant = classify(value)

    if variant is InputVariant.ABSENT:
        raise UnexpectedInputAbsent()

    # str | bytes | blob
    if variant in _SINGLE_VALUE_VARIANTS:
        logger.debug("Normalising %s input as a single file", variant.value)
        yield await to_file_record(value, normalise_content)
        return

    if variant in SEQUENCE_VARIANTS:
        owned = variant is InputVariant.PULL_STREAM
        source = peekable(pull_stream_to_async_iter(value) if owned else value)

        head = await apeek(source)
        if head.done:
            # Empty sources produce no records at all
            logger.debug("Sequence input is empty")
            return

        first = head.value

        # (Async)Iterable[int] | (Async)Iterable[bytes]
        if is_integer(first) or is_bytes(first):
            logger.debug("Normalising sequence of %s as one byte stream", type(first).__name__)
            try:
                record = await to_file_record(source, normalise_content)
            except BaseException:
                # The stream never reached a consumer; release what we acquired
                if owned:
                    await aclose(source)
                raise
            yield record
            return

        # (Async)Iterable[record | blob | str]
        # (Async)Iterable[(Async)Iterable | pull-stream]
        if _is_per_element(first):
            logger.debug("Normalising sequence as one file per %s", type(first).__name__)
            try:
                async for item in aiterate(source):
                    if item is None:
                        raise UnexpectedInputAbsent()
                    yield await to_file_record(item, normalise_content)
            finally:
                if owned:
                    await aclose(source)
            return

        if owned:
            await aclose(source)

    # {path, content}
    # Checked after sequences: streams may expose an incidental `path`.
    if is_file_object(value):
        yield await to_file_record(value, normalise_content)
        return

    raise UnexpectedInputUnrecognized(value)


def _is_per_element(first: Any) -> bool:
    if is_file_object(first) or is_blob(first) or is_text(first):
        return True
    # Nested sequences become one record each; their content is normalised
    # as a sub-input by the record builder.
    return is_iterable(first) or is_pull_stream(first)


def _has_content(content: Any) -> bool:
    if content is None:
        return False
    if isinstance(content, str) and not content:
        return False
    return True


async def _apply(normalise_content: ContentNormaliser, raw: Any) -> Any:
    result = normalise_content(raw)
    if inspect.isawaitable(result):
        result = await result
    return result


async def to_file_record(value: Any, normalise_content: ContentNormaliser) -> FileRecord:
    """Build one FileRecord from a single, already classified value.

    Content rule:
      - a non-empty `content` field is normalised and stored;
      - a value with no `path` (raw text, bytes, blob, byte stream) is
        normalised whole and stored as content;
      - a value with a `path` and no content is a directory marker and
        gets no content.
    """
    path = get_field(value, "path")
    raw_content = get_field(value, "content")

    content: Optional[Any] = None
    if _has_content(raw_content):
        content = await _apply(normalise_content, raw_content)
    elif not path:
        content = await _apply(normalise_content, value)

    # Only structured records carry metadata; an open file's `mode` is "rb"
    structured = is_file_object(value)

    return FileRecord(
        path=str(path) if path else "",
        mode=get_field(value, "mode") if structured else None,
        mtime=get_field(value, "mtime") if structured else None,
        content=content,
    )
