"""Core enumerations shared by the archive pipeline.

Key Types:
    - Codec: Per-entry ZIP compression method
    - ChunkLimit: Sentinels accepted in place of a numeric chunk size
    - EntryShape: Input shapes accepted by the entry normalizer
"""

from enum import Enum


class Codec(str, Enum):
    """ZIP member compression method.

    String enum so entry options can name the codec directly
    (``{"codec": "deflate"}``).
    """

    STORE = "store"
    DEFLATE = "deflate"


class ChunkLimit(str, Enum):
    """Non-numeric chunk size settings."""

    UNBOUNDED = "unbounded"  # pass encoder output through unchanged


class EntryShape(str, Enum):
    """Shapes of caller input understood by the entry normalizer."""

    ENTRY = "entry"  # a ready Entry instance
    MAPPING = "mapping"  # one entry-shaped mapping
    PAIRS = "pairs"  # flat (key, value) pairs describing one entry
    LIST = "list"  # ordered list or tuple of entries
    LAZY = "lazy"  # any other iterable, consumed on demand
