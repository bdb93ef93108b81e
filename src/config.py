"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (e.g.
MAX_NESTING_DEPTH, CONTENT_CHUNK_SIZE, MAX_PREVIEW_CHARS, LOG_LEVEL).
"""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip() or default


# Content normalisation
MAX_NESTING_DEPTH = _env_int("MAX_NESTING_DEPTH", 32)
CONTENT_CHUNK_SIZE = _env_int("CONTENT_CHUNK_SIZE", 262_144)

# Limits / output
MAX_PREVIEW_CHARS = _env_int("MAX_PREVIEW_CHARS", 2_000)

# Logging
LOG_LEVEL = _env_str("LOG_LEVEL", "WARNING")
