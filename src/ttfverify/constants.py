# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Binary layout constants for the sfnt container and its tables."""

# sfnt version values accepted as the file magic
SFNT_VERSION_TRUETYPE = 0x00010000
SFNT_VERSION_APPLE = 0x74727565  # "true"
VALID_SFNT_VERSIONS = frozenset({SFNT_VERSION_TRUETYPE, SFNT_VERSION_APPLE})

# Offset table: sfnt version (4), numTables, searchRange, entrySelector,
# rangeShift (2 each)
HEADER_SIZE = 4 + 4 * 2
# Table record: tag, checksum, offset, length (4 each)
TABLE_RECORD_SIZE = 4 * 4

# Whole-file checksum target ("BiboAfba")
CHECKSUM_MAGIC = 0xB1B0AFBA

# Byte offset of checkSumAdjustment inside the head table
HEAD_ADJUSTMENT_OFFSET = 8

# Tables every TrueType font must carry, in the order they are reported
REQUIRED_TABLES = (
    "cmap",
    "glyf",
    "head",
    "hhea",
    "hmtx",
    "loca",
    "maxp",
    "name",
    "post",
)

# cmap platform IDs
PLATFORM_UNICODE = 0
PLATFORM_MACINTOSH = 1
PLATFORM_WINDOWS = 3

PLATFORM_NAMES: dict[int, str] = {
    PLATFORM_UNICODE: "Unicode",
    PLATFORM_MACINTOSH: "Macintosh",
    2: "ISO",
    PLATFORM_WINDOWS: "Windows",
    4: "Custom",
}

# Subtable lookup order used when mapping glyphs without an explicit platform
DEFAULT_PLATFORM_PREFERENCE = (PLATFORM_UNICODE, PLATFORM_WINDOWS)

# Largest code point a 16-bit subtable can map
MAX_BMP_CODE_POINT = 0xFFFF

# Glyph index returned for unmapped code points
NOTDEF_GLYPH = 0

# Whole-file checksum read size (must stay a multiple of 4)
CHECKSUM_CHUNK_SIZE = 64 * 1024
