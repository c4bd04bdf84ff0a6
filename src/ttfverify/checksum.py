# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Table and whole-file checksum validation.

A checksum is the sum of the data read as big-endian uint32 words, modulo
2**32. Only complete words count: a trailing group of fewer than four bytes
is dropped rather than zero padded, which matches how the stored sums were
produced by the encoders this validator has to agree with.

The head table is special twice over. Its own checksum was computed with
checkSumAdjustment (bytes 8-11) zeroed, so the adjustment is subtracted
from the computed sum before comparing. And the adjustment itself ties the
whole file together: 0xB1B0AFBA minus the sum of the file, plus the
adjustment, must give the adjustment back.
"""

import logging
import struct
from typing import TYPE_CHECKING

from .constants import (
    CHECKSUM_CHUNK_SIZE,
    CHECKSUM_MAGIC,
    HEAD_ADJUSTMENT_OFFSET,
    REQUIRED_TABLES,
)
from .directory import TableDirectory, TableRecord
from .exceptions import (
    FontChecksumMismatchError,
    MissingRequiredTableError,
    TableChecksumMismatchError,
    TableNotFoundError,
    TruncatedTableError,
)
from .source import ByteSource
from .tags import HEAD, Tag

if TYPE_CHECKING:
    from .font import Font

logger = logging.getLogger(__name__)

_MASK32 = 0xFFFFFFFF


def word_sum(data: bytes, start: int = 0) -> int:
    """Sums complete big-endian uint32 words with 32-bit wraparound.

    Args:
        data: Bytes to sum. Trailing bytes that do not fill a word are ignored.
        start: Running sum to continue from.

    Returns:
        The sum modulo 2**32.
    """
    count = len(data) // 4
    words = struct.unpack(f">{count}I", memoryview(data)[: count * 4])
    return (start + sum(words)) & _MASK32


def table_checksum(source: ByteSource, record: TableRecord) -> int:
    """Computes the raw checksum of a table over its padded length."""
    return word_sum(source.read_at(record.offset, record.padded_length))


def file_checksum(source: ByteSource) -> int:
    """Computes the checksum of the whole file, reading it in chunks."""
    total = 0
    for offset in range(0, source.size, CHECKSUM_CHUNK_SIZE):
        total = word_sum(source.read_at(offset, CHECKSUM_CHUNK_SIZE), total)
    return total


def read_head_adjustment(source: ByteSource, directory: TableDirectory) -> int:
    """Reads head.checkSumAdjustment.

    Raises:
        TableNotFoundError: If the font has no head table.
        TruncatedTableError: If the head table is too short to hold the field.
    """
    record = directory.get(HEAD)
    if record is None:
        raise TableNotFoundError(HEAD)
    data = source.read_at(record.offset + HEAD_ADJUSTMENT_OFFSET, 4)
    if len(data) < 4:
        raise TruncatedTableError(HEAD, HEAD_ADJUSTMENT_OFFSET, 4)
    return struct.unpack(">I", data)[0]


def check_required_tables(directory: TableDirectory) -> None:
    """Raises MissingRequiredTableError for the first absent required table."""
    for name in REQUIRED_TABLES:
        tag = Tag(name)
        if tag not in directory:
            raise MissingRequiredTableError(tag)


def check_table_checksum(
    source: ByteSource, directory: TableDirectory, record: TableRecord
) -> None:
    """Verifies one table against the checksum stored in its record."""
    actual = table_checksum(source, record)
    if record.tag == HEAD:
        actual = (actual - read_head_adjustment(source, directory)) & _MASK32

    if actual != record.checksum:
        raise TableChecksumMismatchError(record.tag, record.checksum, actual)
    logger.debug("Table '%s' checksum OK (0x%08X)", record.tag, actual)


def check_font_checksum(source: ByteSource, directory: TableDirectory) -> None:
    """Verifies the whole-file checksum against head.checkSumAdjustment."""
    adjustment = read_head_adjustment(source, directory)
    total = file_checksum(source)

    computed = (CHECKSUM_MAGIC - total + adjustment) & _MASK32
    if adjustment != computed:
        raise FontChecksumMismatchError(adjustment, computed)
    logger.debug("Font checksum OK (adjustment 0x%08X)", adjustment)


def check_font(font: "Font") -> None:
    """Runs the full checksum validation of a font.

    Checks run in a fixed priority and stop at the first violation:
    required tables are present, then every table checksum matches its
    record, then the whole-file checksum agrees with the head adjustment.

    Args:
        font: Opened font.

    Raises:
        MissingRequiredTableError: A required table is absent.
        TableChecksumMismatchError: A table checksum does not match.
        FontChecksumMismatchError: The whole-file checksum does not match.
    """
    source = font.source
    directory = font.directory

    check_required_tables(directory)
    for record in directory.values():
        check_table_checksum(source, directory, record)
    check_font_checksum(source, directory)

    logger.info("Checksum validation passed for %d table(s)", len(directory))
