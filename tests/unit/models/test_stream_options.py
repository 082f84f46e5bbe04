"""Unit tests for pipeline configuration models."""

from __future__ import annotations

import zlib

import pytest
from pydantic import ValidationError

from laakhay.archive.core import ChunkLimit, Codec
from laakhay.archive.models import GzipConfig, StreamOptions
from laakhay.archive.runtime.chunking import DEFAULT_CHUNK_SIZE, DEFLATED_CHUNK_SIZE


class TestStreamOptions:
    """Test StreamOptions defaults and validation."""

    def test_defaults(self):
        options = StreamOptions()

        assert options.chunk_size == DEFAULT_CHUNK_SIZE
        assert options.gzip is None
        assert options.default_codec is Codec.DEFLATE
        assert not options.unbounded

    @pytest.mark.parametrize("value", ["unbounded", ChunkLimit.UNBOUNDED])
    def test_unbounded(self, value):
        options = StreamOptions(chunk_size=value)

        assert options.chunk_size is ChunkLimit.UNBOUNDED
        assert options.unbounded

    @pytest.mark.parametrize("value", [0, -1, True, 1.5, "huge"])
    def test_invalid_chunk_size(self, value):
        with pytest.raises(ValidationError):
            StreamOptions(chunk_size=value)

    @pytest.mark.parametrize("value", [None, False])
    def test_gzip_disabled(self, value):
        assert StreamOptions(gzip=value).gzip is None

    def test_gzip_enabled_with_defaults(self):
        options = StreamOptions(gzip=True)

        assert options.gzip == GzipConfig()
        assert options.gzip.level == zlib.Z_BEST_COMPRESSION

    def test_gzip_mapping_defaults_level(self):
        options = StreamOptions(gzip={"mem_level": 9})

        assert options.gzip.level == zlib.Z_BEST_COMPRESSION
        assert options.gzip.mem_level == 9

    def test_gzip_explicit_level(self):
        assert StreamOptions(gzip={"level": 1}).gzip.level == 1

    @pytest.mark.parametrize("gzip", [{"level": 10}, {"level": -2}, {"window": 15}])
    def test_invalid_gzip_config(self, gzip):
        with pytest.raises(ValidationError):
            StreamOptions(gzip=gzip)

    def test_unknown_option(self):
        with pytest.raises(ValidationError):
            StreamOptions(compression="zip")

    def test_frozen(self):
        options = StreamOptions()

        with pytest.raises(ValidationError):
            options.chunk_size = 10


class TestPresets:
    """Test the stored and deflated presets."""

    def test_stored(self):
        options = StreamOptions.stored()

        assert options.chunk_size == DEFAULT_CHUNK_SIZE
        assert options.default_codec is Codec.STORE

    def test_deflated(self):
        options = StreamOptions.deflated()

        assert options.chunk_size == DEFLATED_CHUNK_SIZE
        assert options.default_codec is Codec.DEFLATE

    def test_preset_overrides(self):
        options = StreamOptions.deflated(chunk_size=1024, gzip=True)

        assert options.chunk_size == 1024
        assert options.default_codec is Codec.DEFLATE
        assert options.gzip is not None
