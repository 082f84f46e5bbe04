"""Unit tests for the archive and compression encoder stages."""

from __future__ import annotations

import gzip
import io
import os
import zipfile
from datetime import UTC, datetime

import pytest

from laakhay.archive.core import Codec
from laakhay.archive.models import Entry, GzipConfig
from laakhay.archive.runtime.encoders import gzip_fragments, iter_source, to_bytes, zip_fragments


def _read_zip(data: bytes) -> dict[str, bytes]:
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        return {info.filename: archive.read(info) for info in archive.infolist()}


class TestContentUnits:
    """Test flattening of byte-producing units."""

    @pytest.mark.parametrize(
        ("unit", "expected"),
        [
            (b"abc", b"abc"),
            (bytearray(b"abc"), b"abc"),
            (memoryview(b"abc"), b"abc"),
            ("héllo", "héllo".encode()),
            ([b"a", ["b", (b"c",)]], b"abc"),
        ],
    )
    def test_to_bytes(self, unit, expected):
        assert to_bytes(unit) == expected

    def test_to_bytes_rejects_other_types(self):
        with pytest.raises(TypeError, match="int"):
            to_bytes(42)

    def test_literal_buffer_is_one_unit(self):
        assert list(iter_source(b"abc")) == [b"abc"]

    def test_iterable_source(self):
        assert list(iter_source(["ab", b"cd"])) == [b"ab", b"cd"]

    def test_source_closed_when_abandoned(self):
        """Test closing the unit iterator releases the content source."""
        released = []

        def units():
            try:
                yield b"a"
                yield b"b"
            finally:
                released.append(True)

        chunks = iter_source(units())
        next(chunks)
        chunks.close()

        assert released == [True]


class TestZipFragments:
    """Test the ZIP encoder stage."""

    def test_round_trip_store_and_deflate(self):
        """Test archive contents are readable by zipfile."""
        entries = [
            Entry(path="a.txt", source=[b"hello ", "world"], codec=Codec.STORE),
            Entry(path="dir/b.bin", source=b"\x00" * 10_000, codec=Codec.DEFLATE),
        ]

        data = b"".join(zip_fragments(entries))

        assert _read_zip(data) == {"a.txt": b"hello world", "dir/b.bin": b"\x00" * 10_000}

    def test_codec_maps_to_compression_type(self):
        entries = [
            Entry(path="stored", source=b"s" * 100, codec=Codec.STORE),
            Entry(path="deflated", source=b"d" * 100, codec=Codec.DEFLATE),
        ]

        with zipfile.ZipFile(io.BytesIO(b"".join(zip_fragments(entries)))) as archive:
            assert archive.getinfo("stored").compress_type == zipfile.ZIP_STORED
            assert archive.getinfo("deflated").compress_type == zipfile.ZIP_DEFLATED

    def test_entry_metadata(self):
        modified_at = datetime(2024, 2, 3, 4, 5, 6, tzinfo=UTC)
        entries = [Entry(path="run.sh", source=b"#!", modified_at=modified_at, mode=0o100755)]

        with zipfile.ZipFile(io.BytesIO(b"".join(zip_fragments(entries)))) as archive:
            info = archive.getinfo("run.sh")

        assert info.date_time == (2024, 2, 3, 4, 5, 6)
        assert info.external_attr >> 16 == 0o100755

    def test_empty_archive(self):
        assert _read_zip(b"".join(zip_fragments([]))) == {}

    def test_lazy_entries_are_pulled_on_demand(self):
        """Test entries are not read before output is requested."""
        pulled = []

        def entries():
            pulled.append("a")
            yield Entry(path="a", source=b"a")

        fragments = zip_fragments(entries())

        assert pulled == []
        next(fragments)
        assert pulled == ["a"]

    def test_bad_unit_propagates(self):
        """Test encoder failures reach the consumer unchanged."""
        fragments = zip_fragments([Entry(path="a", source=[b"ok", 3], codec=Codec.DEFLATE)])

        with pytest.raises(TypeError, match="unsupported content unit"):
            b"".join(fragments)

    def test_sources_closed_on_early_abandonment(self):
        """Test closing the stage closes the entry being read."""
        released = []

        def units():
            try:
                while True:
                    yield os.urandom(1024)
            finally:
                released.append(True)

        fragments = zip_fragments(
            [Entry(path="big", source=units(), codec=Codec.DEFLATE)], chunk_size=16
        )
        for _ in range(16):
            next(fragments)
        fragments.close()

        assert released == [True]


class TestGzipFragments:
    """Test the GZIP stage."""

    def test_round_trip(self):
        payload = [b"abc" * 1000, b"", b"def" * 1000]

        compressed = b"".join(gzip_fragments(payload, GzipConfig()))

        assert gzip.decompress(compressed) == b"".join(payload)

    def test_empty_input_is_valid_gzip(self):
        assert gzip.decompress(b"".join(gzip_fragments([], GzipConfig()))) == b""

    def test_level_changes_output(self):
        payload = [bytes(range(256)) * 200]

        stored = b"".join(gzip_fragments(payload, GzipConfig(level=0)))
        best = b"".join(gzip_fragments(payload, GzipConfig(level=9)))

        assert len(best) < len(stored)
        assert gzip.decompress(stored) == gzip.decompress(best)

    def test_upstream_closed(self):
        released = []

        def upstream():
            try:
                yield b"a" * 100_000
                yield b"b" * 100_000
            finally:
                released.append(True)

        assert b"".join(gzip_fragments(upstream(), GzipConfig()))
        assert released == [True]
