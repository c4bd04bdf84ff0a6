# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Click-based CLI for ttfverify.

This module provides the command-line interface for checking
font file integrity and looking up glyph indices.
"""

# Standard Library
import logging
import sys
from pathlib import Path

# Third Party
import click
from colorama import Fore, Style, init

# Local
from . import __version__
from .cmap import read_subtable_records
from .constants import DEFAULT_PLATFORM_PREFERENCE
from .exceptions import (
    ChecksumError,
    FormatError,
    MappingError,
    TableNotFoundError,
    TTFVerifyError,
)
from .font import Font
from .utils import parse_code_point, setup_logging

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_FILE_NOT_FOUND = 2
EXIT_FORMAT_ERROR = 3
EXIT_CHECK_FAILED = 4
EXIT_MAPPING_FAILED = 5

logger = logging.getLogger(__name__)


def print_success(msg: str) -> None:
    """Prints a success message in green.

    Args:
        msg: The message to output.
    """
    click.echo(f"{Fore.GREEN}✓{Style.RESET_ALL} {msg}")


def print_error(msg: str) -> None:
    """Prints an error message in red.

    Args:
        msg: The error message to output.
    """
    click.echo(f"{Fore.RED}✗ Error:{Style.RESET_ALL} {msg}", err=True)


def print_warning(msg: str) -> None:
    """Prints a warning in yellow.

    Args:
        msg: The warning to output.
    """
    click.echo(f"{Fore.YELLOW}⚠{Style.RESET_ALL} {msg}")


def _print_tables(font: Font) -> None:
    """Prints the table directory and the cmap encoding records.

    Args:
        font: The opened font.
    """
    click.echo(f"{'Tag':<6}{'Offset':>10}{'Length':>10}  Checksum")
    for record in font.directory.values():
        click.echo(
            f"{str(record.tag):<6}{record.offset:>10}{record.length:>10}  "
            f"0x{record.checksum:08X}"
        )

    try:
        subtables = read_subtable_records(font)
    except TTFVerifyError as e:
        print_warning(f"cmap index unreadable: {e}")
        return

    click.echo()
    click.echo("cmap subtables:")
    for sub in subtables:
        click.echo(
            f"  platform {sub.platform_id} ({sub.platform_name}), "
            f"encoding {sub.encoding_id}, offset {sub.offset}"
        )


def _check_font(font: Font, quiet: bool) -> int:
    """Runs checksum validation and reports the result.

    Args:
        font: The opened font.
        quiet: If True, only output errors.

    Returns:
        Exit code.
    """
    try:
        font.check()
    except (ChecksumError, FormatError, TableNotFoundError) as e:
        print_error(f"Validation failed: {e}")
        return EXIT_CHECK_FAILED

    if not quiet:
        print_success("Checksums valid")
    return EXIT_SUCCESS


def _map_characters(font: Font, characters: tuple[str, ...]) -> int:
    """Maps characters to glyph indices and prints one line per character.

    Args:
        font: The opened font.
        characters: Character specifications from the command line.

    Returns:
        Exit code.
    """
    exit_code = EXIT_SUCCESS
    for spec in characters:
        try:
            code_point = parse_code_point(spec)
        except ValueError as e:
            print_error(str(e))
            exit_code = exit_code or EXIT_GENERAL_ERROR
            continue

        try:
            glyph = font.map_glyph(code_point)
        except (MappingError, FormatError, TableNotFoundError) as e:
            print_error(f"U+{code_point:04X}: {e}")
            exit_code = exit_code or EXIT_MAPPING_FAILED
            continue

        click.echo(f"U+{code_point:04X} -> glyph {glyph}")
    return exit_code


@click.command()
@click.argument(
    "font_path", required=False, type=click.Path(exists=True, dir_okay=False)
)
@click.option(
    "--check/--no-check",
    "do_check",
    default=True,
    help="Validate table and file checksums (default: enabled)",
)
@click.option(
    "-m",
    "--map",
    "characters",
    multiple=True,
    help="Character to map to a glyph index: a character, U+XXXX, 0xXXXX "
    "or an Adobe glyph name. Repeatable.",
)
@click.option(
    "-t",
    "--tables",
    "show_tables",
    is_flag=True,
    help="List the table directory and cmap subtables",
)
@click.option(
    "-p",
    "--platform",
    "platforms",
    multiple=True,
    type=click.IntRange(0, 0xFFFF),
    help="cmap platform ID to use for mapping, in order of preference. "
    "Repeatable (default: 0, then 3).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Only output errors and mapping results",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Detailed output",
)
@click.version_option(version=__version__)
def main(
    font_path: str | None,
    do_check: bool,
    characters: tuple[str, ...],
    show_tables: bool,
    platforms: tuple[int, ...],
    quiet: bool,
    verbose: bool,
) -> None:
    """Checks a TrueType/OpenType font and maps characters to glyphs.

    FONT_PATH is the path to the .ttf/.otf file.
    """
    # Initialize colorama for Windows compatibility
    init()

    if font_path is None:
        click.echo(click.get_current_context().get_help())
        sys.exit(EXIT_GENERAL_ERROR)

    setup_logging(verbose=verbose, quiet=quiet)

    path = Path(font_path)
    platform_ids = platforms or DEFAULT_PLATFORM_PREFERENCE

    try:
        font = Font.from_path(path, platform_ids=platform_ids)

        if not quiet:
            click.echo(f"{path.name}: {font.tables_num()} table(s)")

        if show_tables:
            _print_tables(font)

        exit_code = EXIT_SUCCESS
        if do_check:
            exit_code = _check_font(font, quiet)

        if characters:
            map_code = _map_characters(font, characters)
            exit_code = exit_code or map_code

    except FileNotFoundError as e:
        print_error(str(e))
        exit_code = EXIT_FILE_NOT_FOUND
    except PermissionError as e:
        print_error(f"Access denied: {e}")
        exit_code = EXIT_GENERAL_ERROR
    except FormatError as e:
        print_error(f"{path.name}: {e}")
        exit_code = EXIT_FORMAT_ERROR
    except Exception as e:
        logger.exception("Unexpected error")
        print_error(f"Unexpected error: {e}")
        exit_code = EXIT_GENERAL_ERROR

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
