# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Logging setup and small helpers shared by the CLI."""

import logging
import re
import sys

from fontTools.agl import AGL2UV

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_HEX_CODE_POINT = re.compile(r"^(?:U\+|u\+|0x|0X)([0-9A-Fa-f]{1,6})$")


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configures logging for ttfverify.

    Args:
        verbose: If True, DEBUG level is used.
        quiet: If True, only ERROR and higher are output.
            Takes precedence over verbose.

    Returns:
        Configured logger for ttfverify.
    """
    # Determine log level (quiet takes precedence)
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    ttfverify_logger = logging.getLogger("ttfverify")
    ttfverify_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    ttfverify_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    ttfverify_logger.addHandler(handler)

    logger.debug("Logging configured with level: %s", logging.getLevelName(level))
    return ttfverify_logger


def parse_code_point(text: str) -> int:
    """Parses a character specification into a code point.

    Accepts a single character (``A``), a hexadecimal code point
    (``U+0041``, ``0x41``) or an Adobe glyph name (``Aacute``).

    Args:
        text: The character specification.

    Returns:
        The code point.

    Raises:
        ValueError: If the text matches none of the accepted forms.
    """
    if len(text) == 1:
        return ord(text)

    match = _HEX_CODE_POINT.match(text)
    if match:
        return int(match.group(1), 16)

    if text in AGL2UV:
        return AGL2UV[text]

    raise ValueError(f"Cannot interpret {text!r} as a character")
