# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Common interface of cmap subtable mappers."""

from ..constants import MAX_BMP_CODE_POINT
from ..exceptions import CodePointOutOfRangeError


def to_code_point(value: "int | str", limit: int = MAX_BMP_CODE_POINT) -> int:
    """Normalizes a character or integer to a code point within ``limit``.

    Raises:
        CodePointOutOfRangeError: If the code point is negative or above limit.
        TypeError: If a string is not exactly one character long.
    """
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError(f"Expected a single character, got {value!r}")
        value = ord(value)
    if value < 0 or value > limit:
        raise CodePointOutOfRangeError(value)
    return value


class GlyphMapper:
    """Maps Unicode code points to glyph indices.

    One subclass exists per cmap subtable format. Each provides a ``parse``
    classmethod taking a Section scoped to the subtable, and ``map``.
    Unmapped code points map to glyph 0 (.notdef).
    """

    format: int

    @classmethod
    def parse(cls, section) -> "GlyphMapper":
        raise NotImplementedError

    def map(self, code_point: "int | str") -> int:
        raise NotImplementedError
