"""Pipeline configuration models."""

from __future__ import annotations

import zlib
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.enums import ChunkLimit, Codec
from ..runtime.chunking.definitions import (
    DEFAULT_CHUNK_SIZE,
    DEFLATED_CHUNK_SIZE,
    validate_chunk_size,
)


class GzipConfig(BaseModel):
    """Parameters of the GZIP stage.

    Attributes:
        level: Compression level, -1 to 9 (default: best compression)
        mem_level: zlib memory level, 1 to 9
        strategy: zlib strategy constant
    """

    level: int = Field(default=zlib.Z_BEST_COMPRESSION, ge=-1, le=9)
    mem_level: int = Field(default=8, ge=1, le=9)
    strategy: int = Field(default=zlib.Z_DEFAULT_STRATEGY, ge=0, le=4)

    model_config = ConfigDict(frozen=True, extra="forbid")


class StreamOptions(BaseModel):
    """Options of :func:`laakhay.archive.stream`.

    Attributes:
        chunk_size: Output fragment size in bytes, or ``ChunkLimit.UNBOUNDED``
            to pass encoder output through unchanged
        gzip: GZIP stage configuration, ``None`` when disabled. Accepts
            ``True``/``False`` or a mapping of GzipConfig fields on input.
        default_codec: Codec for entries that do not name one
    """

    chunk_size: int | ChunkLimit = DEFAULT_CHUNK_SIZE
    gzip: GzipConfig | None = None
    default_codec: Codec = Codec.DEFLATE

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("chunk_size", mode="before")
    @classmethod
    def check_chunk_size(cls, v: Any) -> Any:
        """Accept positive integers or the unbounded sentinel."""
        if isinstance(v, (str, ChunkLimit)):
            return ChunkLimit(v)
        return validate_chunk_size(v)

    @field_validator("gzip", mode="before")
    @classmethod
    def resolve_gzip(cls, v: Any) -> Any:
        """Map the gzip toggle onto a config (or None)."""
        if v is None or v is False:
            return None
        if v is True:
            return GzipConfig()
        return v

    @property
    def unbounded(self) -> bool:
        """Whether rechunking is skipped."""
        return self.chunk_size == ChunkLimit.UNBOUNDED

    @classmethod
    def stored(cls, **overrides: Any) -> StreamOptions:
        """Stored archive preset: 32 MiB fragments, entries stored uncompressed.

        The ZIP stage reads a stored member in full before writing it, so
        each member is held in memory once.
        """
        return cls(**{"chunk_size": DEFAULT_CHUNK_SIZE, "default_codec": Codec.STORE, **overrides})

    @classmethod
    def deflated(cls, **overrides: Any) -> StreamOptions:
        """Deflated archive preset: 5 MiB fragments, entries deflated."""
        return cls(
            **{"chunk_size": DEFLATED_CHUNK_SIZE, "default_codec": Codec.DEFLATE, **overrides}
        )
