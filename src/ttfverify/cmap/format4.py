# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""cmap format 4: segment mapping to delta values.

Layout (all uint16):

    format (4), length, language, segCountX2,
    searchRange, entrySelector, rangeShift,
    endCode[segCount], reservedPad,
    startCode[segCount], idDelta[segCount], idRangeOffset[segCount],
    glyphIdArray[...]

Segments are stored sorted by endCode. A segment with idRangeOffset 0 maps
``c`` to ``(c + idDelta) mod 65536``; any other value points into
glyphIdArray, which is not supported.
"""

import logging
from dataclasses import dataclass

from ..constants import NOTDEF_GLYPH
from ..exceptions import UnsupportedIndirectMappingError
from ..source import Section
from .base import GlyphMapper, to_code_point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Format4Range:
    """A segment mapped through idDelta.

    Attributes:
        start: First code point of the segment.
        end: Last code point of the segment.
        delta: idDelta as stored (uint16; signed values wrap).
    """

    start: int
    end: int
    delta: int

    def glyph_for(self, code_point: int) -> int:
        return (self.delta + code_point) & 0xFFFF


class Format4Mapper(GlyphMapper):
    """Glyph mapper for a format 4 subtable.

    Args:
        ranges: Delta-mapped segments in stored (ascending endCode) order.
        direct: Explicit code point to glyph entries, consulted first.
    """

    format = 4

    def __init__(
        self,
        ranges: "list[Format4Range] | tuple[Format4Range, ...]",
        direct: dict[int, int] | None = None,
    ) -> None:
        self.ranges = tuple(ranges)
        self.direct = dict(direct) if direct else {}

    def __repr__(self) -> str:
        return f"Format4Mapper({len(self.ranges)} range(s))"

    @classmethod
    def parse(cls, section: Section) -> "Format4Mapper":
        """Parses a format 4 subtable.

        Args:
            section: Section covering exactly the subtable.

        Returns:
            The parsed mapper.

        Raises:
            ValueError: If the subtable is not format 4.
            UnsupportedIndirectMappingError: If any segment uses idRangeOffset.
            TruncatedTableError: If the subtable ends early.
        """
        fmt = section.u16()
        if fmt != 4:
            raise ValueError(f"Format4Mapper.parse called on a format {fmt} subtable")
        section.skip(4)  # length, language
        seg_count = section.u16() // 2
        section.skip(6)  # searchRange, entrySelector, rangeShift

        end_codes = section.u16_array(seg_count)
        section.skip(2)  # reservedPad
        start_codes = section.u16_array(seg_count)
        deltas = section.u16_array(seg_count)
        range_offsets = section.u16_array(seg_count)

        ranges = []
        for i in range(seg_count):
            if range_offsets[i] != 0:
                raise UnsupportedIndirectMappingError(i, start_codes[i], end_codes[i])
            ranges.append(Format4Range(start_codes[i], end_codes[i], deltas[i]))

        logger.debug("Parsed cmap format 4 subtable with %d segment(s)", seg_count)
        return cls(ranges)

    def map(self, code_point: "int | str") -> int:
        """Returns the glyph index for a code point.

        Code points outside every segment map to glyph 0.

        Raises:
            CodePointOutOfRangeError: If the code point is above U+FFFF.
        """
        code_point = to_code_point(code_point)

        glyph = self.direct.get(code_point)
        if glyph is not None:
            return glyph

        for rng in self.ranges:
            if rng.end < code_point:
                continue
            if rng.start > code_point:
                # Gap between segments
                return NOTDEF_GLYPH
            return rng.glyph_for(code_point)

        return NOTDEF_GLYPH
