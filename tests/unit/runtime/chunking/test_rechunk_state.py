"""Unit tests for rechunking definitions."""

from __future__ import annotations

import pytest

from laakhay.archive.core import InvalidChunkSizeError
from laakhay.archive.runtime.chunking import (
    DEFAULT_CHUNK_SIZE,
    DEFLATED_CHUNK_SIZE,
    RechunkState,
    validate_chunk_size,
)


class TestRechunkState:
    """Test the leftover buffer."""

    def test_feed_and_cut_across_slices(self):
        """Test cutting through several pending slices."""
        state = RechunkState(target_size=4)
        state.feed(b"ab")
        state.feed(b"cde")
        state.feed(b"fghij")

        assert state.cut(4) == b"abcd"
        assert state.buffered == 6
        assert state.cut(4) == b"efgh"
        assert state.cut(2) == b"ij"
        assert state.buffered == 0
        assert not state.pending

    def test_empty_feed_is_noop(self):
        """Test that empty fragments are counted but not buffered."""
        state = RechunkState(target_size=4)
        state.feed(b"")

        assert state.buffered == 0
        assert not state.pending
        assert state.fragments_in == 1

    def test_cut_more_than_buffered(self):
        """Test that over-cutting is rejected."""
        state = RechunkState(target_size=4)
        state.feed(b"ab")

        with pytest.raises(ValueError, match="cannot cut"):
            state.cut(3)

    @pytest.mark.parametrize("fragment", [3, None, "text", [b"a"]])
    def test_feed_rejects_non_bytes(self, fragment):
        """Test that only bytes-like fragments are buffered."""
        state = RechunkState(target_size=4)

        with pytest.raises(TypeError, match="bytes-like"):
            state.feed(fragment)
        assert state.buffered == 0
        assert state.fragments_in == 0


class TestValidateChunkSize:
    """Test chunk size validation."""

    def test_defaults(self):
        """Test published default sizes."""
        assert DEFAULT_CHUNK_SIZE == 32 * 1024 * 1024
        assert DEFLATED_CHUNK_SIZE == 5 * 1024 * 1024

    @pytest.mark.parametrize("value", [1, 2, 4096, DEFAULT_CHUNK_SIZE])
    def test_accepts_positive_integers(self, value):
        """Test valid sizes are returned unchanged."""
        assert validate_chunk_size(value) == value

    @pytest.mark.parametrize("value", [0, -5, 1.0, "10", None, False, True])
    def test_rejects_everything_else(self, value):
        """Test invalid sizes raise InvalidChunkSizeError."""
        with pytest.raises(InvalidChunkSizeError, match="positive integer"):
            validate_chunk_size(value)

    def test_error_is_value_error(self):
        """Test InvalidChunkSizeError can be caught as ValueError."""
        with pytest.raises(ValueError):
            validate_chunk_size(0)
