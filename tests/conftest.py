# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pytest fixtures for the ttfverify test suite."""

from pathlib import Path

import pytest
from font_helpers import build_reference_font, build_sfnt, minimal_tables

# -- Fixtures --


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Temporary directory for tests.

    Args:
        tmp_path: Pytest-provided temporary directory.

    Returns:
        Path to the temporary directory.
    """
    return tmp_path


@pytest.fixture(scope="session")
def reference_font_bytes() -> bytes:
    """Complete TrueType font built with fontTools.

    Glyph order follows the classic TrueType layout, so "A" is glyph 36.

    Returns:
        Font data as bytes.
    """
    return build_reference_font()


@pytest.fixture
def reference_font(tmp_dir: Path, reference_font_bytes: bytes) -> Path:
    """Reference font on disk.

    Args:
        tmp_dir: Temporary directory.
        reference_font_bytes: Font data as bytes.

    Returns:
        Path to the font file.
    """
    font_path = tmp_dir / "reference.ttf"
    font_path.write_bytes(reference_font_bytes)
    return font_path


@pytest.fixture
def synthetic_font_bytes() -> bytes:
    """Hand-assembled sfnt with every required table and valid checksums.

    Returns:
        Font data as bytes.
    """
    return build_sfnt(minimal_tables())
