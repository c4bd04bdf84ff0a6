# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""ttfverify - Verify TrueType/OpenType checksums and map characters to glyphs."""

from importlib.metadata import PackageNotFoundError, version

from .checksum import check_font, word_sum
from .directory import TableDirectory, TableRecord, parse_directory
from .exceptions import (
    ChecksumError,
    CodePointOutOfRangeError,
    FontChecksumMismatchError,
    FormatError,
    InvalidMagicError,
    MappingError,
    MissingRequiredTableError,
    NoMatchingPlatformError,
    TableChecksumMismatchError,
    TableNotFoundError,
    TableOutOfBoundsError,
    TruncatedDirectoryError,
    TruncatedTableError,
    TTFVerifyError,
    UnsupportedCmapFormatError,
    UnsupportedIndirectMappingError,
)
from .font import Font
from .source import BytesSource, ByteSource, FileSource, Section
from .tags import Tag

try:
    __version__ = version("ttfverify")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "__version__",
    # Entry points
    "Font",
    "parse_directory",
    "check_font",
    "word_sum",
    # Data model
    "Tag",
    "TableRecord",
    "TableDirectory",
    # Byte sources
    "ByteSource",
    "BytesSource",
    "FileSource",
    "Section",
    # Exceptions
    "TTFVerifyError",
    "FormatError",
    "InvalidMagicError",
    "TruncatedDirectoryError",
    "TableOutOfBoundsError",
    "TruncatedTableError",
    "TableNotFoundError",
    "ChecksumError",
    "MissingRequiredTableError",
    "TableChecksumMismatchError",
    "FontChecksumMismatchError",
    "MappingError",
    "UnsupportedCmapFormatError",
    "UnsupportedIndirectMappingError",
    "CodePointOutOfRangeError",
    "NoMatchingPlatformError",
]
