"""Laakhay Archive - Lazy ZIP/GZIP archive streams in fixed-size chunks."""

from .api import ArchiveStage, astream, resolve_options, stream
from .core import (
    ArchiveError,
    ChunkLimit,
    Codec,
    EntryShape,
    InvalidChunkSizeError,
    InvalidEntryError,
    InvalidOptionsError,
    MissingFieldError,
)
from .models import DEFAULT_FILE_MODE, Entry, GzipConfig, StreamOptions
from .runtime import (
    arechunk,
    gzip_fragments,
    normalize_entries,
    rechunk,
    rechunk_bytes,
    zip_fragments,
)
from .runtime.chunking import (
    DEFAULT_CHUNK_SIZE,
    DEFLATED_CHUNK_SIZE,
    UNBOUNDED,
    RechunkState,
    step,
)

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "stream",
    "astream",
    "resolve_options",
    "ArchiveStage",
    # Rechunking
    "rechunk",
    "rechunk_bytes",
    "arechunk",
    "step",
    "RechunkState",
    "DEFAULT_CHUNK_SIZE",
    "DEFLATED_CHUNK_SIZE",
    "UNBOUNDED",
    # Stages
    "normalize_entries",
    "zip_fragments",
    "gzip_fragments",
    # Models
    "Entry",
    "DEFAULT_FILE_MODE",
    "GzipConfig",
    "StreamOptions",
    # Enums
    "Codec",
    "ChunkLimit",
    "EntryShape",
    # Exceptions
    "ArchiveError",
    "MissingFieldError",
    "InvalidEntryError",
    "InvalidChunkSizeError",
    "InvalidOptionsError",
]
