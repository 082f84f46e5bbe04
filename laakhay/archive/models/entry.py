"""Archive entry model."""

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.enums import Codec

# regular file, rw-r--r--
DEFAULT_FILE_MODE = 0o100644


def _now() -> datetime:
    return datetime.now(UTC)


class Entry(BaseModel):
    """One named content source to be written into the archive.

    ``source`` is a literal byte buffer, an ordered sequence of
    byte-producing units, or a lazy iterable of them. It is consumed once,
    by the archive encoder.
    """

    path: str = Field(..., min_length=1)
    source: Any
    codec: Codec = Codec.DEFLATE
    modified_at: datetime = Field(default_factory=_now)
    mode: int = Field(default=DEFAULT_FILE_MODE, ge=0, le=0xFFFF)

    @field_validator("source")
    @classmethod
    def validate_source(cls, v: Any) -> Any:
        """Accept byte buffers, text and iterables of units."""
        if isinstance(v, (bytes, bytearray, memoryview, str)):
            return v
        if not isinstance(v, Iterable):
            raise ValueError(f"source must be bytes or an iterable of bytes, got {type(v).__name__}")
        return v

    @field_validator("modified_at")
    @classmethod
    def validate_modified_at(cls, v: datetime) -> datetime:
        """ZIP timestamps cannot express dates before 1980."""
        if v.year < 1980:
            raise ValueError("modified_at must not be earlier than 1980")
        return v

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
