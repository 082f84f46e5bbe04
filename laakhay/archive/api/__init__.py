"""High-level API facades."""

from .pipeline import ArchiveStage, astream, resolve_options, stream

__all__ = [
    "ArchiveStage",
    "stream",
    "astream",
    "resolve_options",
]
