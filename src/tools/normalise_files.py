"""MCP tool that normalises loosely shaped file input into file records.

Registers the 'normalise_files' tool which runs the input normaliser over
a list of records (or a single text payload), drains each record's
content and returns a JSON-friendly summary per record.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from config import MAX_PREVIEW_CHARS
from core.errors import ValidationError
from core.interfaces import ContentNormaliser
from core.models import FileRecord
from normalise.content import collect_bytes, normalise_content as default_normalise_content
from normalise.input import normalise_input

TRUNCATED_SUFFIX = "\n\n...[TRUNCATED]..."


def _normalize_max_chars(max_chars: int) -> int:
    n = int(max_chars)
    if n <= 0:
        raise ValidationError("max_chars must be positive")
    return n


async def summarise_record(record: FileRecord, *, max_chars: int) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "path": record.path,
        "mode": record.mode,
        "mtime": record.mtime,
        "directory": record.is_directory,
        "size": None,
        "preview": None,
    }
    if record.is_directory:
        return out

    data = await collect_bytes(record.content)
    # Decode with replacement so binary content still yields a preview
    text = data.decode("utf-8", errors="replace")
    if len(text) > max_chars:
        text = text[:max_chars] + TRUNCATED_SUFFIX

    out["size"] = len(data)
    out["preview"] = text
    return out


def register(mcp: FastMCP, *, normalise_content: Optional[ContentNormaliser] = None) -> None:
    content_fn = normalise_content or default_normalise_content

    @mcp.tool(name="normalise_files")
    async def normalise_files(
        files: Optional[List[Dict[str, Any]]] = None,
        text: Optional[str] = None,
        max_chars: int = MAX_PREVIEW_CHARS,
    ) -> List[Dict[str, Any]]:
        """Normalise file input and summarise the resulting file records.

        Params:
          - files: list of records shaped like {"path", "content", "mode", "mtime"};
            a record with a path and no content is a directory entry.
          - text: a single text payload, normalised as one unnamed file.
          - max_chars: maximum preview characters per record (default from config).

        Returns:
          One dict per record with path, mode, mtime, directory, size (bytes)
          and a UTF-8 preview truncated with "\n\n...[TRUNCATED]...".

        Raises:
          ValidationError unless exactly one of files/text is given, and
          UnexpectedInputError for records the normaliser does not recognise.
        """
        if files is None and text is None:
            raise ValidationError("Provide either files or text")
        if files is not None and text is not None:
            raise ValidationError("Provide only one of files or text")

        limit = _normalize_max_chars(max_chars)
        source: Any = text if files is None else files

        out: List[Dict[str, Any]] = []
        async for record in normalise_input(source, content_fn):
            out.append(await summarise_record(record, max_chars=limit))
        return out
