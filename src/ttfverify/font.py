# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""The Font object: table directory, checksums and glyph mapping."""

import logging
import threading
from collections.abc import Iterable
from os import PathLike
from pathlib import Path

from .checksum import check_font, read_head_adjustment
from .cmap import GlyphMapper, load_mapper, locate_preferred, to_code_point
from .constants import DEFAULT_PLATFORM_PREFERENCE
from .directory import TableDirectory, parse_directory
from .exceptions import TableNotFoundError
from .source import ByteSource, Section, as_source
from .tags import Tag

logger = logging.getLogger(__name__)


class Font:
    """An opened TrueType/OpenType font.

    The table directory is parsed when the font is opened and never
    changes afterwards. The glyph mapper is built on the first call to
    ``map_glyph`` (or at open time with ``eager_mapping=True``) and reused.

    Args:
        source: Byte source over the font file.
        directory: Parsed table directory of ``source``.
        platform_ids: cmap platforms to try, in order, when mapping glyphs.
    """

    def __init__(
        self,
        source: ByteSource,
        directory: TableDirectory,
        *,
        platform_ids: Iterable[int] = DEFAULT_PLATFORM_PREFERENCE,
    ) -> None:
        self._source = source
        self._directory = directory
        self._platform_ids = tuple(platform_ids)
        self._mapper: GlyphMapper | None = None
        self._mapper_lock = threading.Lock()

    @classmethod
    def open(
        cls,
        source,
        *,
        platform_ids: Iterable[int] = DEFAULT_PLATFORM_PREFERENCE,
        eager_mapping: bool = False,
    ) -> "Font":
        """Opens a font and parses its table directory.

        Args:
            source: A ByteSource, bytes-like object or seekable binary file.
            platform_ids: cmap platforms to try, in order, when mapping glyphs.
            eager_mapping: Build the glyph mapper now instead of on first use.

        Returns:
            The opened font.

        Raises:
            FormatError: If the table directory is malformed.
        """
        byte_source = as_source(source)
        font = cls(byte_source, parse_directory(byte_source), platform_ids=platform_ids)
        if eager_mapping:
            font.glyph_mapper()
        return font

    @classmethod
    def from_path(cls, path: "str | PathLike[str]", **kwargs) -> "Font":
        """Reads a font file into memory and opens it.

        Keyword arguments are passed to ``Font.open``.
        """
        path = Path(path)
        logger.debug("Reading font file %s", path)
        return cls.open(path.read_bytes(), **kwargs)

    @property
    def source(self) -> ByteSource:
        return self._source

    @property
    def directory(self) -> TableDirectory:
        return self._directory

    @property
    def platform_ids(self) -> tuple[int, ...]:
        return self._platform_ids

    def tables_num(self) -> int:
        """Returns the number of distinct tables in the directory."""
        return len(self._directory)

    def table_section(self, tag: "Tag | str") -> Section:
        """Returns a section scoped to one table's byte range.

        Raises:
            TableNotFoundError: If the table is absent.
        """
        try:
            tag = Tag(tag)
        except (TypeError, ValueError):
            raise TableNotFoundError(tag) from None
        record = self._directory.get(tag)
        if record is None:
            raise TableNotFoundError(tag)
        return Section(self._source, record.offset, record.length, tag)

    def head_adjustment(self) -> int:
        """Returns head.checkSumAdjustment."""
        return read_head_adjustment(self._source, self._directory)

    def check(self) -> None:
        """Validates required tables, table checksums and the file checksum.

        Raises:
            ChecksumError: Describing the first violation found.
        """
        check_font(self)

    def glyph_mapper(self) -> GlyphMapper:
        """Returns the glyph mapper, building it on first use.

        Raises:
            TableNotFoundError: If the font has no cmap table.
            MappingError: If no usable subtable can be loaded.
        """
        mapper = self._mapper
        if mapper is not None:
            return mapper
        with self._mapper_lock:
            if self._mapper is None:
                record = locate_preferred(self, self._platform_ids)
                self._mapper = load_mapper(self, record)
                logger.debug(
                    "Glyph mapper ready: %r (platform %d, encoding %d)",
                    self._mapper,
                    record.platform_id,
                    record.encoding_id,
                )
            return self._mapper

    def map_glyph(self, code_point: "int | str") -> int:
        """Maps a Unicode code point (or one-character string) to a glyph index.

        Unmapped code points return 0 (.notdef).

        Raises:
            CodePointOutOfRangeError: If the code point is negative or above U+FFFF.
            MappingError: If the glyph mapper cannot be built.
        """
        code_point = to_code_point(code_point)
        return self.glyph_mapper().map(code_point)
