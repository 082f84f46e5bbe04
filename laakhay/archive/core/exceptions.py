"""Custom exception hierarchy.

Encoder failures (``stream_zip`` errors, I/O errors raised while reading a
content source) are not part of this hierarchy. They propagate unchanged to
the consumer on the pull that triggered them.
"""

from __future__ import annotations

from typing import Any


class ArchiveError(Exception):
    """Base exception for all library errors."""

    pass


class MissingFieldError(ArchiveError):
    """Entry description lacks a required field."""

    def __init__(self, field: str, index: int | None = None) -> None:
        where = f"entry {index}" if index is not None else "entry"
        super().__init__(f"{where} is missing required field {field!r}")
        self.field = field
        self.index = index


class InvalidEntryError(ArchiveError):
    """Entry description has an unusable shape or value."""

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class InvalidChunkSizeError(ArchiveError, ValueError):
    """Chunk size is not a positive integer nor the unbounded sentinel."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"chunk size must be a positive integer, got {value!r}")
        self.value = value


class InvalidOptionsError(ArchiveError):
    """Stream options failed validation."""

    pass
