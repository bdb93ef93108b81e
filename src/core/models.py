"""Data models produced and consumed by the normaliser.

FileRecord is the unit of output; InputVariant is the closed set of
shapes the classifier can assign to a value.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


class InputVariant(enum.Enum):
    ABSENT = "absent"
    TEXT = "text"
    BYTES = "bytes"
    BLOB = "blob"
    FILE_OBJECT = "file_object"
    PULL_STREAM = "pull_stream"
    SYNC_SEQUENCE = "sync_sequence"
    ASYNC_SEQUENCE = "async_sequence"


@dataclass(frozen=True)
class FileRecord:
    """A normalised file entry.

    Field groups:
    - Identity: path
    - Metadata (passed through verbatim): mode, mtime
    - Data: content

    `content` is None for path-only entries (directories); otherwise it
    holds whatever the content-normalisation callback returned.
    """

    path: str = ""
    mode: Optional[Union[int, str]] = None
    mtime: Any = None
    content: Any = None

    @property
    def is_directory(self) -> bool:
        return self.content is None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"path": self.path, "mode": self.mode, "mtime": self.mtime}
        if self.content is not None:
            out["content"] = self.content
        return out
