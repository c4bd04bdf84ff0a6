# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Character to glyph mapping through the cmap table."""

from .base import GlyphMapper, to_code_point
from .format4 import Format4Mapper, Format4Range
from .locator import (
    SUBTABLE_MAPPERS,
    CmapSubtableRecord,
    load_mapper,
    locate_preferred,
    locate_subtable,
    read_subtable_records,
)

__all__ = [
    "GlyphMapper",
    "to_code_point",
    "Format4Mapper",
    "Format4Range",
    "SUBTABLE_MAPPERS",
    "CmapSubtableRecord",
    "load_mapper",
    "locate_preferred",
    "locate_subtable",
    "read_subtable_records",
]
