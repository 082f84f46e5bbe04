"""Byte rechunking layer.

This module re-segments lazy byte streams into fixed-size fragments while
holding at most one partial fragment in memory.

Architecture:
    - definitions.py: Chunk size defaults and RechunkState
    - rechunker.py: The step function and the sync/async drivers
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .definitions import (
    DEFAULT_CHUNK_SIZE,
    DEFLATED_CHUNK_SIZE,
    UNBOUNDED,
    RechunkState,
    validate_chunk_size,
)
from .rechunker import arechunk, astep, rechunk, rechunk_bytes, step

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFLATED_CHUNK_SIZE",
    "UNBOUNDED",
    "RechunkState",
    "validate_chunk_size",
    "step",
    "astep",
    "rechunk",
    "rechunk_bytes",
    "arechunk",
]
