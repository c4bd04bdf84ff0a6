# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""sfnt offset table and table directory parsing.

Layout (big-endian):

    0   sfnt version   uint32   0x00010000 or 'true'
    4   numTables      uint16
    6   searchRange    uint16   (ignored)
    8   entrySelector  uint16   (ignored)
    10  rangeShift     uint16   (ignored)
    12  numTables x {tag[4], checksum u32, offset u32, length u32}
"""

import logging
import struct
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from .constants import HEADER_SIZE, TABLE_RECORD_SIZE, VALID_SFNT_VERSIONS
from .exceptions import (
    InvalidMagicError,
    TableOutOfBoundsError,
    TruncatedDirectoryError,
)
from .source import ByteSource
from .tags import Tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableRecord:
    """One entry of the table directory.

    Attributes:
        tag: Table tag.
        checksum: Checksum stored in the directory.
        offset: Byte offset of the table from the start of the file.
        length: Unpadded length of the table in bytes.
    """

    tag: Tag
    checksum: int
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def padded_length(self) -> int:
        """Length rounded up to the next 4-byte boundary."""
        return (self.length + 3) & ~3


class TableDirectory(Mapping):
    """Read-only mapping of Tag to TableRecord.

    Records are inserted in file order. A tag that appears more than once
    keeps the record read last. Lookups accept anything ``Tag`` accepts,
    so ``directory["head"]`` works.
    """

    def __init__(
        self,
        records: Iterable[TableRecord] = (),
        *,
        sfnt_version: int = 0x00010000,
        num_tables: int | None = None,
    ) -> None:
        self._records: dict[Tag, TableRecord] = {}
        for record in records:
            if record.tag in self._records:
                logger.debug(
                    "Duplicate table record %r replaces earlier entry", record.tag
                )
            self._records[record.tag] = record
        self.sfnt_version = sfnt_version
        # numTables as declared in the header, before duplicates collapse
        self.num_tables = len(self._records) if num_tables is None else num_tables

    def __getitem__(self, tag) -> TableRecord:
        try:
            key = Tag(tag)
        except (TypeError, ValueError):
            raise KeyError(tag) from None
        return self._records[key]

    def __contains__(self, tag) -> bool:
        try:
            return Tag(tag) in self._records
        except (TypeError, ValueError):
            return False

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        tags = ", ".join(str(tag) for tag in self._records)
        return f"TableDirectory([{tags}])"


def parse_directory(source: ByteSource) -> TableDirectory:
    """Parses the offset table and table records of an sfnt file.

    Args:
        source: Byte source positioned over the whole font file.

    Returns:
        The table directory.

    Raises:
        InvalidMagicError: If the sfnt version is not recognized.
        TruncatedDirectoryError: If the header or any table record is cut off.
        TableOutOfBoundsError: If a table extends past the end of the file.
    """
    header = source.read_at(0, HEADER_SIZE)
    if len(header) < 4:
        raise TruncatedDirectoryError(
            f"File too short for an sfnt header ({len(header)} byte(s))"
        )

    (magic,) = struct.unpack_from(">I", header)
    if magic not in VALID_SFNT_VERSIONS:
        raise InvalidMagicError(magic)

    if len(header) < HEADER_SIZE:
        raise TruncatedDirectoryError(
            f"sfnt header truncated: {len(header)} of {HEADER_SIZE} byte(s)"
        )
    (num_tables,) = struct.unpack_from(">H", header, 4)

    expected = num_tables * TABLE_RECORD_SIZE
    data = source.read_at(HEADER_SIZE, expected)
    if len(data) < expected:
        raise TruncatedDirectoryError(
            f"Table directory truncated: {len(data) // TABLE_RECORD_SIZE} of "
            f"{num_tables} record(s) readable"
        )

    file_size = source.size
    records = []
    for i in range(num_tables):
        raw_tag, checksum, offset, length = struct.unpack_from(
            ">4sIII", data, i * TABLE_RECORD_SIZE
        )
        tag = Tag(raw_tag)
        if offset + length > file_size:
            raise TableOutOfBoundsError(tag, offset, length, file_size)
        records.append(TableRecord(tag, checksum, offset, length))

    directory = TableDirectory(records, sfnt_version=magic, num_tables=num_tables)
    logger.debug(
        "Parsed table directory: %d record(s), %d distinct table(s)",
        num_tables,
        len(directory),
    )
    return directory
