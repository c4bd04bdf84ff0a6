# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Locating cmap subtables and building glyph mappers from them."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..constants import PLATFORM_NAMES
from ..exceptions import NoMatchingPlatformError, UnsupportedCmapFormatError
from ..source import Section
from ..tags import CMAP
from .base import GlyphMapper
from .format4 import Format4Mapper

if TYPE_CHECKING:
    from ..font import Font

logger = logging.getLogger(__name__)

# Subtable format -> mapper class
SUBTABLE_MAPPERS: dict[int, type[GlyphMapper]] = {
    mapper.format: mapper for mapper in (Format4Mapper,)
}


@dataclass(frozen=True)
class CmapSubtableRecord:
    """An encoding record of the cmap index.

    Attributes:
        platform_id: Platform ID.
        encoding_id: Platform-specific encoding ID.
        offset: Offset of the subtable from the start of the cmap table.
    """

    platform_id: int
    encoding_id: int
    offset: int

    @property
    def platform_name(self) -> str:
        return PLATFORM_NAMES.get(self.platform_id, "Unknown")


def _iter_subtable_records(cmap: Section) -> Iterator[CmapSubtableRecord]:
    cmap.seek(0)
    cmap.skip(2)  # version
    count = cmap.u16()
    for _ in range(count):
        yield CmapSubtableRecord(cmap.u16(), cmap.u16(), cmap.u32())


def read_subtable_records(font: "Font") -> list[CmapSubtableRecord]:
    """Returns every encoding record of the font's cmap table in file order.

    Raises:
        TableNotFoundError: If the font has no cmap table.
    """
    return list(_iter_subtable_records(font.table_section(CMAP)))


def locate_subtable(font: "Font", platform_id: int) -> CmapSubtableRecord:
    """Finds the first cmap subtable for a platform.

    Args:
        font: Opened font.
        platform_id: Platform ID to look for.

    Returns:
        The first encoding record with that platform ID.

    Raises:
        TableNotFoundError: If the font has no cmap table.
        NoMatchingPlatformError: If no record has that platform ID.
    """
    for record in _iter_subtable_records(font.table_section(CMAP)):
        if record.platform_id == platform_id:
            return record
    raise NoMatchingPlatformError((platform_id,))


def locate_preferred(font: "Font", platform_ids: Iterable[int]) -> CmapSubtableRecord:
    """Finds a cmap subtable, trying platforms in order of preference.

    Raises:
        TableNotFoundError: If the font has no cmap table.
        NoMatchingPlatformError: If none of the platforms has a subtable.
    """
    platform_ids = tuple(platform_ids)
    records = read_subtable_records(font)
    for platform_id in platform_ids:
        for record in records:
            if record.platform_id == platform_id:
                return record
    raise NoMatchingPlatformError(platform_ids)


def load_mapper(font: "Font", record: CmapSubtableRecord) -> GlyphMapper:
    """Parses the subtable an encoding record points to.

    Args:
        font: Opened font.
        record: Encoding record from the cmap index.

    Returns:
        A glyph mapper for the subtable.

    Raises:
        UnsupportedCmapFormatError: If no mapper handles the subtable format.
        UnsupportedIndirectMappingError: See Format4Mapper.parse.
        TruncatedTableError: If the subtable lies outside the cmap table.
    """
    cmap = font.table_section(CMAP)
    header = cmap.subsection(record.offset, 4)  # format, length
    fmt = header.u16()
    mapper_cls = SUBTABLE_MAPPERS.get(fmt)
    if mapper_cls is None:
        raise UnsupportedCmapFormatError(fmt)
    length = header.u16()

    logger.debug(
        "Loading cmap subtable format %d (platform %d/%d, offset %d, length %d)",
        fmt,
        record.platform_id,
        record.encoding_id,
        record.offset,
        length,
    )
    return mapper_cls.parse(cmap.subsection(record.offset, length))
