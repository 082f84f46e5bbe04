"""Data models."""

from .entry import DEFAULT_FILE_MODE, Entry
from .options import GzipConfig, StreamOptions

__all__ = [
    "Entry",
    "DEFAULT_FILE_MODE",
    "GzipConfig",
    "StreamOptions",
]
