"""Structural predicates used to classify loosely typed input.

Every check is shape based: nothing here relies on a tag set by the
producer, and nothing consumes a streaming value.
"""

from __future__ import annotations

import array
import io
from collections.abc import Mapping
from typing import Any

_MISSING = object()

BYTES_TYPES = (bytes, bytearray, memoryview, array.array)


def get_field(value: Any, name: str, default: Any = None) -> Any:
    """Read `name` from a mapping key or an attribute."""
    if isinstance(value, Mapping):
        return value.get(name, default)
    return getattr(value, name, default)


def has_field(value: Any, name: str) -> bool:
    if isinstance(value, Mapping):
        return name in value
    return getattr(value, name, _MISSING) is not _MISSING


def is_text(value: Any) -> bool:
    return isinstance(value, str)


def is_bytes(value: Any) -> bool:
    return isinstance(value, BYTES_TYPES)


def is_integer(value: Any) -> bool:
    # bool is an int subclass but never a byte value
    return isinstance(value, int) and not isinstance(value, bool)


def is_blob(value: Any) -> bool:
    if isinstance(value, io.IOBase):
        return True
    return callable(getattr(value, "read", None)) and hasattr(value, "size")


def is_pull_stream(value: Any) -> bool:
    return callable(getattr(value, "get_reader", None))


def is_async_iterable(value: Any) -> bool:
    return callable(getattr(value, "__aiter__", None))


def is_sync_iterable(value: Any) -> bool:
    # Mapping iteration yields keys, not elements
    if isinstance(value, Mapping):
        return False
    return callable(getattr(value, "__iter__", None))


def is_iterable(value: Any) -> bool:
    return is_async_iterable(value) or is_sync_iterable(value)


def is_file_object(value: Any) -> bool:
    if value is None:
        return False
    return has_field(value, "path") or has_field(value, "content")
