"""Runtime pipeline stages."""

from .chunking import arechunk, rechunk, rechunk_bytes
from .encoders import gzip_fragments, iter_source, zip_fragments
from .entries import classify_entries, normalize_entries, to_entry

__all__ = [
    "rechunk",
    "rechunk_bytes",
    "arechunk",
    "zip_fragments",
    "gzip_fragments",
    "iter_source",
    "normalize_entries",
    "classify_entries",
    "to_entry",
]
