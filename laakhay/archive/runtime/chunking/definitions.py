"""Rechunking constants and session state.

This module defines the chunk size defaults and the state object carried
through a single rechunking session.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any

from ...core.enums import ChunkLimit
from ...core.exceptions import InvalidChunkSizeError

# 32 MiB, default of the stored-archive pipeline
DEFAULT_CHUNK_SIZE = 32 * 1024 * 1024

# 5 MiB, default of the deflated-archive pipeline
DEFLATED_CHUNK_SIZE = 5 * 1024 * 1024

UNBOUNDED = ChunkLimit.UNBOUNDED


@dataclass
class RechunkState:
    """Leftover buffer of one rechunking session.

    Bytes pulled from upstream but not yet emitted are kept as a queue of
    slices and only joined when an output fragment is cut.

    Attributes:
        target_size: Exact size of every output fragment but the last
        pending: Slices waiting to be emitted, in stream order
        buffered: Total length of ``pending``
        exhausted: Whether the upstream source has been drained
        fragments_in: Upstream fragments consumed so far
        fragments_out: Output fragments emitted so far
        bytes_out: Bytes emitted so far
    """

    target_size: int
    pending: deque[memoryview] = field(default_factory=deque)
    buffered: int = 0
    exhausted: bool = False
    fragments_in: int = 0
    fragments_out: int = 0
    bytes_out: int = 0

    def feed(self, fragment: bytes | bytearray | memoryview) -> None:
        """Append an upstream fragment. Empty fragments are a no-op.

        Raises:
            TypeError: If the fragment is not bytes-like
        """
        if not isinstance(fragment, (bytes, bytearray, memoryview)):
            raise TypeError(f"fragment must be bytes-like, got {type(fragment).__name__}")
        self.fragments_in += 1
        if not isinstance(fragment, bytes):
            # snapshot mutable buffers before keeping a view on them
            fragment = bytes(fragment)
        if not fragment:
            return
        self.pending.append(memoryview(fragment))
        self.buffered += len(fragment)

    def cut(self, size: int) -> bytes:
        """Remove and return the first ``size`` buffered bytes."""
        if size > self.buffered:
            raise ValueError(f"cannot cut {size} bytes from {self.buffered} buffered")

        parts: list[memoryview] = []
        remaining = size
        while remaining:
            head = self.pending[0]
            if len(head) <= remaining:
                parts.append(self.pending.popleft())
                remaining -= len(head)
            else:
                parts.append(head[:remaining])
                self.pending[0] = head[remaining:]
                remaining = 0

        self.buffered -= size
        self.fragments_out += 1
        self.bytes_out += size
        return b"".join(parts)


def validate_chunk_size(value: Any) -> int:
    """Return ``value`` if it is a usable chunk size.

    Args:
        value: Requested chunk size

    Returns:
        The chunk size as an int

    Raises:
        InvalidChunkSizeError: If value is not a positive integer
    """
    # bool is an int subclass but never a meaningful size
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidChunkSizeError(value)
    return value
