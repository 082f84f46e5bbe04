"""Helpers for releasing upstream iterators."""

from __future__ import annotations

from typing import Any


def close_iterator(iterator: Any) -> None:
    """Close ``iterator`` if it supports it (generators, file-like sources)."""
    close = getattr(iterator, "close", None)
    if callable(close):
        close()


async def aclose_iterator(iterator: Any) -> None:
    """Async counterpart of :func:`close_iterator` for async generators."""
    aclose = getattr(iterator, "aclose", None)
    if callable(aclose):
        await aclose()
