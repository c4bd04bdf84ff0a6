# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for font.py — the Font object."""

import struct
import threading
import time
from io import BytesIO
from pathlib import Path

import pytest
from font_helpers import (
    REFERENCE_CMAP,
    CountingSource,
    _external_font_path,
    build_cmap,
    build_format4,
    build_sfnt,
    minimal_tables,
)
from fontTools.ttLib import TTFont

import ttfverify.font
from ttfverify import Font
from ttfverify.exceptions import (
    CodePointOutOfRangeError,
    MappingError,
    NoMatchingPlatformError,
    TableNotFoundError,
    UnsupportedIndirectMappingError,
)
from ttfverify.tags import Tag

WINDOWS_ONLY_CMAP = build_cmap(
    [(3, 1, build_format4([(0x41, 0x5A, 1 - 0x41), (0xFFFF, 0xFFFF, 1)]))]
)
INDIRECT_CMAP = build_cmap(
    [(0, 3, build_format4([(0x41, 0x41, 0, 4), (0xFFFF, 0xFFFF, 1)], glyph_ids=(9,)))]
)


class TestOpen:
    """Tests for opening fonts."""

    def test_from_path(self, reference_font: Path):
        """Fonts can be opened from a path."""
        font = Font.from_path(reference_font)
        assert font.map_glyph("A") == 36

    def test_from_str_path(self, reference_font: Path):
        """String paths are accepted."""
        assert Font.from_path(str(reference_font)).tables_num() > 0

    def test_from_file_object(self, reference_font: Path):
        """Open binary files are read on demand."""
        with reference_font.open("rb") as fh:
            font = Font.open(fh)
            assert font.map_glyph("A") == 36
            font.check()

    def test_from_bytes_io(self, reference_font_bytes: bytes):
        """In-memory streams work like files."""
        assert Font.open(BytesIO(reference_font_bytes)).map_glyph("B") == 37

    def test_missing_file(self, tmp_dir: Path):
        """A missing path raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            Font.from_path(tmp_dir / "missing.ttf")

    def test_unsupported_source_type(self):
        """Objects that are not bytes, files or sources raise TypeError."""
        with pytest.raises(TypeError):
            Font.open(12345)


class TestTables:
    """Tests for table access."""

    def test_table_count_matches_fonttools(self, reference_font_bytes: bytes):
        """tables_num agrees with the tables fontTools reads."""
        font = Font.open(reference_font_bytes)
        reader = TTFont(BytesIO(reference_font_bytes)).reader

        assert font.tables_num() == len(reader.keys())
        assert {str(tag) for tag in font.directory} == set(reader.keys())

    def test_table_section(self, synthetic_font_bytes: bytes):
        """Sections cover exactly the table bytes."""
        section = Font.open(synthetic_font_bytes).table_section("hmtx")

        assert section.tag == Tag("hmtx")
        assert section.read_at(0, 100) == minimal_tables()["hmtx"]

    def test_missing_table_section(self, synthetic_font_bytes: bytes):
        """Absent tables raise TableNotFoundError."""
        with pytest.raises(TableNotFoundError) as exc_info:
            Font.open(synthetic_font_bytes).table_section("GSUB")
        assert exc_info.value.tag == Tag("GSUB")

    def test_invalid_tag_section(self, synthetic_font_bytes: bytes):
        """Keys that are not valid tags are reported as absent tables."""
        with pytest.raises(TableNotFoundError):
            Font.open(synthetic_font_bytes).table_section("toolong")

    def test_head_adjustment(self, reference_font_bytes: bytes):
        """head_adjustment agrees with fontTools."""
        font = Font.open(reference_font_bytes)
        tt = TTFont(BytesIO(reference_font_bytes))

        assert font.head_adjustment() == tt["head"].checkSumAdjustment


class TestMapGlyph:
    """Tests for character to glyph mapping."""

    def test_reference_font_letter_a(self, reference_font_bytes: bytes):
        """'A' is glyph 36 in the classic TrueType glyph order."""
        assert Font.open(reference_font_bytes).map_glyph("A") == 36
        assert Font.open(reference_font_bytes).map_glyph(0x41) == 36

    def test_agrees_with_fonttools(self, reference_font_bytes: bytes):
        """Every mapped character gives the glyph fontTools reports."""
        font = Font.open(reference_font_bytes)
        tt = TTFont(BytesIO(reference_font_bytes))
        best = tt.getBestCmap()

        for code_point in REFERENCE_CMAP:
            assert font.map_glyph(code_point) == tt.getGlyphID(best[code_point])

    def test_unmapped_is_notdef(self, reference_font_bytes: bytes):
        """Characters missing from the cmap map to glyph 0."""
        font = Font.open(reference_font_bytes)
        assert font.map_glyph(0x7F) == 0
        assert font.map_glyph(0x263A) == 0

    def test_above_bmp(self, reference_font_bytes: bytes):
        """Code points above U+FFFF are rejected."""
        with pytest.raises(CodePointOutOfRangeError):
            Font.open(reference_font_bytes).map_glyph(0x1F600)

    @pytest.mark.parametrize(
        "cmap",
        [None, WINDOWS_ONLY_CMAP, INDIRECT_CMAP],
        ids=["no-cmap", "windows-only", "indirect"],
    )
    def test_above_bmp_checked_before_cmap(self, cmap):
        """Out-of-range code points fail the same way whatever the cmap holds."""
        tables = minimal_tables(cmap=cmap)
        if cmap is None:
            del tables["cmap"]
        font = Font.open(build_sfnt(tables), platform_ids=(0,))

        with pytest.raises(CodePointOutOfRangeError):
            font.map_glyph(0x10000)
        with pytest.raises(CodePointOutOfRangeError):
            font.map_glyph(-1)

    def test_windows_fallback(self):
        """A font with only a Windows subtable maps by default."""
        font = Font.open(build_sfnt(minimal_tables(cmap=WINDOWS_ONLY_CMAP)))
        assert font.map_glyph("C") == 3

    def test_explicit_platform(self, synthetic_font_bytes: bytes):
        """Restricting to a platform the font lacks fails."""
        font = Font.open(synthetic_font_bytes, platform_ids=(1,))
        assert font.platform_ids == (1,)

        with pytest.raises(NoMatchingPlatformError):
            font.map_glyph("A")

    def test_indirect_subtable(self):
        """Fonts using idRangeOffset raise UnsupportedIndirectMappingError."""
        font = Font.open(build_sfnt(minimal_tables(cmap=INDIRECT_CMAP)))
        with pytest.raises(UnsupportedIndirectMappingError):
            font.map_glyph("A")


class TestMapperCache:
    """Tests for lazy, cached construction of the glyph mapper."""

    def test_mapper_built_once(self, reference_font_bytes: bytes):
        """Repeated lookups do not touch the source again."""
        source = CountingSource(reference_font_bytes)
        font = Font.open(source)
        reads_after_open = source.reads

        first = font.map_glyph("A")
        reads_after_map = source.reads
        second = font.map_glyph("A")

        assert first == second == 36
        assert reads_after_map > reads_after_open
        assert source.reads == reads_after_map
        assert font.glyph_mapper() is font.glyph_mapper()

    def test_eager_mapping(self, reference_font_bytes: bytes):
        """eager_mapping builds the mapper during open."""
        source = CountingSource(reference_font_bytes)
        font = Font.open(source, eager_mapping=True)
        reads_after_open = source.reads

        assert font.map_glyph("A") == 36
        assert source.reads == reads_after_open

    def test_eager_mapping_reports_errors_at_open(self):
        """Mapping problems surface from open when mapping is eager."""
        data = build_sfnt(minimal_tables(cmap=INDIRECT_CMAP))
        with pytest.raises(UnsupportedIndirectMappingError):
            Font.open(data, eager_mapping=True)

    def test_failure_is_not_cached(self):
        """A failed build is retried on the next lookup."""
        source = CountingSource(build_sfnt(minimal_tables(cmap=INDIRECT_CMAP)))
        font = Font.open(source)

        with pytest.raises(UnsupportedIndirectMappingError):
            font.map_glyph("A")
        reads = source.reads
        with pytest.raises(UnsupportedIndirectMappingError):
            font.map_glyph("A")
        assert source.reads > reads

    def test_concurrent_first_use(self, reference_font_bytes: bytes, monkeypatch):
        """Threads racing on first use share a single mapper."""
        calls = []
        real_load_mapper = ttfverify.font.load_mapper

        def slow_load_mapper(font, record):
            calls.append(record)
            time.sleep(0.05)
            return real_load_mapper(font, record)

        monkeypatch.setattr(ttfverify.font, "load_mapper", slow_load_mapper)
        font = Font.open(reference_font_bytes)
        barrier = threading.Barrier(8)
        mappers = []
        results = []

        def worker():
            barrier.wait()
            mappers.append(font.glyph_mapper())
            results.append(font.map_glyph("A"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert all(mapper is mappers[0] for mapper in mappers)
        assert results == [36] * 8


class TestCheck:
    """Tests for Font.check."""

    def test_reference_font(self, reference_font_bytes: bytes):
        """Fonts written by fontTools pass."""
        Font.open(reference_font_bytes).check()

    def test_declared_checksums_recorded(self, synthetic_font_bytes: bytes):
        """The directory keeps the checksums as stored."""
        font = Font.open(synthetic_font_bytes)
        record = font.directory["glyf"]
        stored = struct.unpack_from(">I", synthetic_font_bytes, 12 + 16 * 1 + 4)[0]

        assert record.checksum == stored


@pytest.mark.skipif(
    _external_font_path() is None, reason="TTFVERIFY_TEST_FONT not set"
)
class TestExternalFont:
    """Tests against a real font named by TTFVERIFY_TEST_FONT."""

    def test_checks_and_maps_like_fonttools(self):
        """A shipped font validates and maps like fontTools."""
        path = _external_font_path()
        font = Font.from_path(path)
        font.check()
        try:
            font.glyph_mapper()
        except MappingError as e:
            pytest.skip(f"cmap not mappable: {e}")

        tt = TTFont(path)
        best = tt.getBestCmap()
        for code_point in range(0x20, 0x7F):
            if code_point in best:
                assert font.map_glyph(code_point) == tt.getGlyphID(best[code_point])
