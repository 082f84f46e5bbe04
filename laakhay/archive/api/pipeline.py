"""Archive streaming pipeline.

This module composes the entry normalizer, the archive encoders and the
rechunker into one pull-based byte stream.

Architecture:
    entries -> normalize_entries -> zip_fragments -> [gzip_fragments]
            -> [rechunk] -> consumer

    Every stage is a generator wrapping the previous one. Pulling one
    fragment from the result pulls only as much upstream work as needed to
    produce it, and closing the result closes every stage, releasing any
    content source that was being read.

Design Decisions:
    - Validation first: options, chunk size and list-shaped entries are
      checked when :func:`stream` is called, before any bytes are produced
    - Pluggable archive stage: ``encoder`` swaps the ZIP stage, which keeps
      the pipeline testable without a real container format
    - Errors from encoders are never wrapped or retried

Example:
    >>> from laakhay.archive import stream
    >>> fragments = stream(
    ...     [{"path": "rel/path/file.txt", "source": ["content"]}],
    ...     chunk_size=10,
    ... )
    >>> archive = b"".join(fragments)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from ..core.exceptions import InvalidChunkSizeError, InvalidOptionsError
from ..models.entry import Entry
from ..models.options import StreamOptions
from ..runtime.chunking import rechunk
from ..runtime.encoders import gzip_fragments, zip_fragments
from ..runtime.entries import normalize_entries
from ..utils.iterators import close_iterator

logger = logging.getLogger(__name__)

ArchiveStage = Callable[[Iterator[Entry]], Iterable[bytes]]


def resolve_options(
    options: StreamOptions | Mapping[str, Any] | None = None, **overrides: Any
) -> StreamOptions:
    """Merge caller options into a validated StreamOptions.

    Args:
        options: Base options, as a model or a mapping of fields
        **overrides: Individual fields overriding ``options``

    Raises:
        InvalidChunkSizeError: If chunk_size is not a positive integer or
            the unbounded sentinel
        InvalidOptionsError: If any other option is invalid
    """
    if isinstance(options, StreamOptions):
        fields = options.model_dump(exclude_unset=True)
    elif options is None:
        fields = {}
    elif isinstance(options, Mapping):
        fields = dict(options)
    else:
        raise InvalidOptionsError(
            f"options must be StreamOptions or a mapping, got {type(options).__name__}"
        )
    fields.update(overrides)

    try:
        return StreamOptions(**fields)
    except ValidationError as e:
        if any(error["loc"][:1] == ("chunk_size",) for error in e.errors()):
            raise InvalidChunkSizeError(fields.get("chunk_size")) from e
        raise InvalidOptionsError(str(e)) from e


def stream(
    entries: Any,
    options: StreamOptions | Mapping[str, Any] | None = None,
    *,
    encoder: ArchiveStage | None = None,
    **overrides: Any,
) -> Iterator[bytes]:
    """Stream entries as a ZIP archive, optionally GZIP-wrapped.

    Args:
        entries: One entry mapping, a list of them, flat key/value pairs, or
            a lazy iterable of entry mappings. Each entry has ``path``,
            ``source`` and optional ``options`` (``codec``, ``modified_at``,
            ``mode``).
        options: StreamOptions or a mapping of its fields
        encoder: Archive stage replacing the ZIP encoder
        **overrides: StreamOptions fields (``chunk_size``, ``gzip``,
            ``default_codec``) overriding ``options``

    Returns:
        Lazy iterator of archive fragments. Every fragment is exactly
        ``chunk_size`` bytes except the last, unless chunk_size is
        ``UNBOUNDED``.

    Raises:
        InvalidChunkSizeError: If chunk_size is invalid
        InvalidOptionsError: If another option is invalid
        MissingFieldError: If a list or mapping entry lacks path or source
        InvalidEntryError: If entries has an unsupported shape
    """
    resolved = resolve_options(options, **overrides)
    normalized = normalize_entries(entries, default_codec=resolved.default_codec)

    archive = (encoder or zip_fragments)(normalized)
    if resolved.gzip is not None:
        archive = gzip_fragments(archive, resolved.gzip)

    logger.info(
        "stream_started",
        extra={
            "chunk_size": resolved.chunk_size,
            "gzip_level": resolved.gzip.level if resolved.gzip else None,
            "default_codec": resolved.default_codec.value,
        },
    )

    if resolved.unbounded:
        return iter(archive)
    return rechunk(archive, resolved.chunk_size)


def astream(
    entries: Any,
    options: StreamOptions | Mapping[str, Any] | None = None,
    *,
    encoder: ArchiveStage | None = None,
    **overrides: Any,
) -> AsyncIterator[bytes]:
    """Async counterpart of :func:`stream`.

    Validation happens immediately, as in :func:`stream`. Each pull runs
    the synchronous pipeline in a worker thread so that reading and
    compressing content does not block the event loop. Pulls never overlap.
    """
    fragments = stream(entries, options, encoder=encoder, **overrides)
    return _iterate_in_thread(fragments)


async def _iterate_in_thread(fragments: Iterator[bytes]) -> AsyncIterator[bytes]:
    try:
        while True:
            pull = asyncio.ensure_future(asyncio.to_thread(next, fragments, None))
            try:
                fragment = await asyncio.shield(pull)
            except asyncio.CancelledError:
                # a running worker thread cannot be interrupted, and the
                # pipeline can only be closed once its pull has returned
                await asyncio.wait({pull})
                if not pull.cancelled() and pull.exception() is not None:
                    logger.debug(
                        "stream_pull_failed_after_cancel",
                        extra={"error_type": type(pull.exception()).__name__},
                    )
                raise
            if fragment is None:
                break
            yield fragment
    finally:
        close_iterator(fragments)
