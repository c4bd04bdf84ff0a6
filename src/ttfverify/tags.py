# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Four-byte sfnt table tags."""


class Tag(int):
    """A table tag stored as its 32-bit big-endian value.

    Tags compare and hash as integers, so ``Tag("head") == Tag(b"head")``
    and either form can key a dictionary of tags. Tags shorter than four
    characters are padded with spaces, as in ``"CFF "``.

    Args:
        value: A ``str``, ``bytes`` or ``int`` (an existing Tag is
            returned unchanged).

    Raises:
        ValueError: If the value does not fit in four bytes.
    """

    def __new__(cls, value: "str | bytes | int") -> "Tag":
        if isinstance(value, Tag):
            return value
        if isinstance(value, str):
            value = value.encode("latin-1")
        if isinstance(value, (bytes, bytearray)):
            if len(value) > 4:
                raise ValueError(f"Table tag {bytes(value)!r} is longer than 4 bytes")
            value = int.from_bytes(bytes(value).ljust(4, b" "), "big")
        elif not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"Table tag value {value:#x} does not fit in 32 bits")
        return super().__new__(cls, value)

    def __bytes__(self) -> bytes:
        return int(self).to_bytes(4, "big")

    def __str__(self) -> str:
        return bytes(self).decode("latin-1")

    def __repr__(self) -> str:
        return f"Tag({str(self)!r})"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return int.__format__(self, format_spec)


HEAD = Tag("head")
CMAP = Tag("cmap")
GLYF = Tag("glyf")
HHEA = Tag("hhea")
HMTX = Tag("hmtx")
LOCA = Tag("loca")
MAXP = Tag("maxp")
NAME = Tag("name")
POST = Tag("post")
