# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Custom exceptions for ttfverify."""


class TTFVerifyError(Exception):
    """Base exception for all ttfverify errors."""


# -- Structural errors --


class FormatError(TTFVerifyError):
    """The font file is structurally malformed."""


class InvalidMagicError(FormatError):
    """The sfnt version is neither 0x00010000 nor 'true'."""

    def __init__(self, magic: int) -> None:
        self.magic = magic
        super().__init__(f"Invalid magic number 0x{magic:08X}")


class TruncatedDirectoryError(FormatError):
    """The table directory ends before all declared records were read."""


class TableOutOfBoundsError(FormatError):
    """A table record points past the end of the file."""

    def __init__(self, tag, offset: int, length: int, size: int) -> None:
        self.tag = tag
        self.offset = offset
        self.length = length
        self.size = size
        super().__init__(
            f"Table '{tag}' at offset {offset} with length {length} "
            f"exceeds file size {size}"
        )


class TruncatedTableError(FormatError):
    """A table ended before a field could be read."""

    def __init__(self, tag, offset: int, size: int) -> None:
        self.tag = tag
        self.offset = offset
        self.size = size
        super().__init__(
            f"Table '{tag}' truncated: cannot read {size} byte(s) at offset {offset}"
        )


class TableNotFoundError(TTFVerifyError):
    """A table needed by an operation is absent from the directory."""

    def __init__(self, tag) -> None:
        self.tag = tag
        super().__init__(f"Table '{tag}' not found")


# -- Checksum validation --


class ChecksumError(TTFVerifyError):
    """Checksum validation failed."""


class MissingRequiredTableError(ChecksumError):
    """A table every TrueType font must carry is missing."""

    def __init__(self, tag) -> None:
        self.tag = tag
        super().__init__(f"Missing required table '{tag}'")


class TableChecksumMismatchError(ChecksumError):
    """A table's computed checksum differs from its directory record."""

    def __init__(self, tag, expected: int, actual: int) -> None:
        self.tag = tag
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Table '{tag}' checksum failed: "
            f"expected 0x{expected:08X}, computed 0x{actual:08X}"
        )


class FontChecksumMismatchError(ChecksumError):
    """The whole-file checksum does not agree with head.checkSumAdjustment."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Font checksum failed: adjustment 0x{expected:08X}, "
            f"computed 0x{actual:08X}"
        )


# -- Glyph mapping --


class MappingError(TTFVerifyError):
    """A code point could not be mapped to a glyph index."""


class UnsupportedCmapFormatError(MappingError):
    """The selected cmap subtable uses a format with no parser."""

    def __init__(self, fmt: int) -> None:
        self.format = fmt
        super().__init__(f"Unsupported cmap subtable format {fmt}")


class UnsupportedIndirectMappingError(MappingError):
    """A format 4 segment addresses glyphs through the glyph index array."""

    def __init__(self, segment: int, start: int, end: int) -> None:
        self.segment = segment
        self.start = start
        self.end = end
        super().__init__(
            f"Range offset mapping not implemented "
            f"(segment {segment}, U+{start:04X}..U+{end:04X})"
        )


class CodePointOutOfRangeError(MappingError):
    """The code point cannot be expressed in a 16-bit cmap subtable."""

    def __init__(self, code_point: int) -> None:
        self.code_point = code_point
        super().__init__(f"Unicode code point {code_point:#x} out of range")


class NoMatchingPlatformError(MappingError):
    """No cmap subtable exists for any of the requested platforms."""

    def __init__(self, platform_ids) -> None:
        self.platform_ids = tuple(platform_ids)
        ids = ", ".join(str(p) for p in self.platform_ids)
        super().__init__(f"No cmap subtable for platform(s) {ids}")
