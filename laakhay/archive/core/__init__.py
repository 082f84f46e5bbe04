"""Core components."""

from .enums import ChunkLimit, Codec, EntryShape
from .exceptions import (
    ArchiveError,
    InvalidChunkSizeError,
    InvalidEntryError,
    InvalidOptionsError,
    MissingFieldError,
)

__all__ = [
    "Codec",
    "ChunkLimit",
    "EntryShape",
    "ArchiveError",
    "MissingFieldError",
    "InvalidEntryError",
    "InvalidChunkSizeError",
    "InvalidOptionsError",
]
