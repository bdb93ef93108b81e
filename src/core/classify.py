"""Shape classifier.

`classify` evaluates the structural predicates in a fixed order and
returns the first matching InputVariant. The order is significant:
byte buffers and blobs are iterable, and streams may carry an incidental
`path` attribute, so the broader checks run after the narrower ones.
"""

from __future__ import annotations

from typing import Any, Optional

from core.models import InputVariant
from core.shapes import (
    is_async_iterable,
    is_blob,
    is_bytes,
    is_file_object,
    is_pull_stream,
    is_sync_iterable,
    is_text,
)


def classify(value: Any) -> Optional[InputVariant]:
    """Return the variant of `value`, or None when no shape matches."""
    if value is None:
        return InputVariant.ABSENT

    if is_text(value):
        return InputVariant.TEXT

    if is_bytes(value):
        return InputVariant.BYTES

    if is_blob(value):
        return InputVariant.BLOB

    if is_pull_stream(value):
        return InputVariant.PULL_STREAM

    if is_async_iterable(value):
        return InputVariant.ASYNC_SEQUENCE

    if is_sync_iterable(value):
        return InputVariant.SYNC_SEQUENCE

    if is_file_object(value):
        return InputVariant.FILE_OBJECT

    return None


SEQUENCE_VARIANTS = frozenset(
    {InputVariant.PULL_STREAM, InputVariant.SYNC_SEQUENCE, InputVariant.ASYNC_SEQUENCE}
)
