# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Random-access byte sources and bounded section readers.

The decoder never streams a font front to back. Every structure is reached
through an absolute offset, so the only thing it needs from the outside
world is ``read_at(offset, size)`` and the total ``size``. Two adapters are
provided: one for in-memory data and one for seekable binary files.
"""

import os
import struct
import threading
from typing import BinaryIO, Protocol, runtime_checkable

from .exceptions import TruncatedTableError


@runtime_checkable
class ByteSource(Protocol):
    """Anything that can hand out byte ranges at absolute offsets.

    ``read_at`` returns fewer than ``size`` bytes only at end of data.
    """

    @property
    def size(self) -> int: ...

    def read_at(self, offset: int, size: int) -> bytes: ...


class BytesSource:
    """Byte source over an in-memory buffer."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)

    @property
    def size(self) -> int:
        return len(self._data)

    def read_at(self, offset: int, size: int) -> bytes:
        if offset < 0 or size < 0:
            raise ValueError(f"Invalid read of {size} byte(s) at offset {offset}")
        return self._data[offset : offset + size]


class FileSource:
    """Byte source over a seekable binary file object.

    The file object is not owned: closing it is left to the caller. Each
    seek+read pair runs under a lock so one file can serve several readers.

    Args:
        fileobj: Binary file opened for reading, supporting ``seek``.
    """

    def __init__(self, fileobj: BinaryIO) -> None:
        self._file = fileobj
        self._lock = threading.Lock()
        with self._lock:
            self._size = fileobj.seek(0, os.SEEK_END)

    @property
    def size(self) -> int:
        return self._size

    def read_at(self, offset: int, size: int) -> bytes:
        if offset < 0 or size < 0:
            raise ValueError(f"Invalid read of {size} byte(s) at offset {offset}")
        chunks: list[bytes] = []
        remaining = size
        with self._lock:
            self._file.seek(offset)
            while remaining > 0:
                chunk = self._file.read(remaining)
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
        return b"".join(chunks)


def as_source(obj) -> ByteSource:
    """Coerces bytes-like objects and binary files into a ByteSource.

    Args:
        obj: A ByteSource, a bytes-like object or a seekable binary file.

    Returns:
        A ByteSource reading from ``obj``.

    Raises:
        TypeError: If ``obj`` is none of the supported kinds.
    """
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return BytesSource(obj)
    if isinstance(obj, ByteSource):
        return obj
    if hasattr(obj, "read") and hasattr(obj, "seek"):
        return FileSource(obj)
    raise TypeError(f"Cannot read font data from {type(obj).__name__}")


class Section:
    """Bounded view of a byte source with a read cursor.

    Reads past the end of the section raise TruncatedTableError naming
    the table the section belongs to.

    Args:
        source: Underlying byte source.
        offset: Absolute start of the section.
        length: Length of the section in bytes.
        tag: Table the section belongs to, used in error messages.
    """

    def __init__(self, source: ByteSource, offset: int, length: int, tag=None) -> None:
        self.source = source
        self.offset = offset
        self.length = max(0, length)
        self.tag = tag
        self._pos = 0

    def __len__(self) -> int:
        return self.length

    def tell(self) -> int:
        return self._pos

    def seek(self, pos: int) -> None:
        self._pos = pos

    def skip(self, count: int) -> None:
        self._pos += count

    def read_at(self, pos: int, size: int) -> bytes:
        """Reads up to ``size`` bytes at ``pos``, clamped to the section."""
        if pos >= self.length or size <= 0:
            return b""
        size = min(size, self.length - pos)
        return self.source.read_at(self.offset + pos, size)

    def read(self, size: int) -> bytes:
        """Reads exactly ``size`` bytes at the cursor and advances it."""
        data = self.read_at(self._pos, size)
        if len(data) < size:
            raise TruncatedTableError(self.tag, self._pos, size)
        self._pos += size
        return data

    def u16(self) -> int:
        return struct.unpack(">H", self.read(2))[0]

    def u32(self) -> int:
        return struct.unpack(">I", self.read(4))[0]

    def u16_array(self, count: int) -> tuple[int, ...]:
        return struct.unpack(f">{count}H", self.read(2 * count))

    def subsection(self, pos: int, length: int) -> "Section":
        """Returns a section starting at ``pos``, clamped to this one."""
        pos = min(max(0, pos), self.length)
        length = min(length, self.length - pos)
        return Section(self.source, self.offset + pos, length, self.tag)
