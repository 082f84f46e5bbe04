"""Archive and compression encoder stages.

The ZIP container is produced by ``stream-zip`` and the optional GZIP
wrapper by a streaming ``zlib`` compressor. Both stages are lazy: a member's
content source is only read when the encoder needs its bytes, and fragment
sizes are whatever the encoders choose.

Encoder failures are not caught here. They propagate to the consumer on the
pull that triggered them, after the stage has closed its upstream.
"""

from __future__ import annotations

import logging
import zlib
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from stream_zip import NO_COMPRESSION_64, ZIP_64, stream_zip

from ..core.enums import Codec
from ..utils.iterators import close_iterator

if TYPE_CHECKING:
    from ..models.entry import Entry
    from ..models.options import GzipConfig

logger = logging.getLogger(__name__)

# stream_zip member methods per codec; NO_COMPRESSION_64 is passed uncalled
# so stream_zip buffers the member to compute its size and CRC
ZIP_METHODS = {
    Codec.STORE: NO_COMPRESSION_64,
    Codec.DEFLATE: ZIP_64,
}

# read size stream_zip uses when evening out its own output
ZIP_ENCODER_CHUNK_SIZE = 64 * 1024

# gzip header and trailer around a raw deflate stream
GZIP_WBITS = 16 + zlib.MAX_WBITS


def to_bytes(unit: Any) -> bytes:
    """Flatten one byte-producing unit.

    Units are bytes-like objects, text (encoded as UTF-8), or nested lists
    and tuples of those.

    Raises:
        TypeError: If the unit is none of the above
    """
    if isinstance(unit, bytes):
        return unit
    if isinstance(unit, (bytearray, memoryview)):
        return bytes(unit)
    if isinstance(unit, str):
        return unit.encode("utf-8")
    if isinstance(unit, (list, tuple)):
        return b"".join(to_bytes(part) for part in unit)
    raise TypeError(f"unsupported content unit type: {type(unit).__name__}")


def iter_source(source: Any) -> Iterator[bytes]:
    """Yield the bytes of a content source, one unit per pull."""
    if isinstance(source, (bytes, bytearray, memoryview, str)):
        yield to_bytes(source)
        return

    units = iter(source)
    try:
        for unit in units:
            yield to_bytes(unit)
    finally:
        close_iterator(units)


def zip_fragments(
    entries: Iterable[Entry], *, chunk_size: int = ZIP_ENCODER_CHUNK_SIZE
) -> Iterator[bytes]:
    """Encode entries as a ZIP archive.

    Args:
        entries: Normalized entries, consumed in order
        chunk_size: Read size handed to stream_zip

    Returns:
        Lazy iterator of archive fragments of unspecified size
    """
    upstream = iter(entries)
    current: Iterator[bytes] | None = None

    def members() -> Iterator[tuple[Any, ...]]:
        nonlocal current
        for entry in upstream:
            logger.debug(
                "archive_entry_started",
                extra={"entry_path": entry.path, "codec": entry.codec.value},
            )
            current = iter_source(entry.source)
            yield (entry.path, entry.modified_at, entry.mode, ZIP_METHODS[entry.codec], current)

    fragments = stream_zip(members(), chunk_size=chunk_size)
    try:
        yield from fragments
    finally:
        fragments.close()
        close_iterator(current)
        close_iterator(upstream)


def gzip_fragments(fragments: Iterable[bytes], config: GzipConfig) -> Iterator[bytes]:
    """Wrap a byte stream in a GZIP container.

    Args:
        fragments: Upstream fragments
        config: Compression parameters

    Returns:
        Lazy iterator of compressed fragments
    """
    compressor = zlib.compressobj(
        config.level, zlib.DEFLATED, GZIP_WBITS, config.mem_level, config.strategy
    )
    upstream = iter(fragments)
    try:
        for fragment in upstream:
            compressed = compressor.compress(fragment)
            if compressed:
                yield compressed
        tail = compressor.flush()
        if tail:
            yield tail
    finally:
        close_iterator(upstream)
