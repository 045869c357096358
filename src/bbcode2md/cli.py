#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Command-line interface for bbcode2md.

Convert a file::

    $ bbcode2md post.bbcode -o post.md

Read from stdin and preview the result in the terminal::

    $ cat post.bbcode | bbcode2md --rich

Keep color tags and map ``[code=py]`` onto python fences::

    $ bbcode2md post.bbcode --disable-cleaner remove_color --alias py=python

"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from bbcode2md import __version__
from bbcode2md.config import load_options
from bbcode2md.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_CLEANER_ORDER,
    DEFAULT_LOG_LEVEL,
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from bbcode2md.converter import BBCodeConverter
from bbcode2md.exceptions import ParsingError, ValidationError
from bbcode2md.logging_utils import configure_logging
from bbcode2md.options import BBCodeConverterOptions

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser"]


def _parse_alias(value: str) -> tuple[str, str]:
    """Parse a ``SRC=DST`` language alias argument."""
    source, sep, target = value.partition("=")
    if not sep or not source.strip() or not target.strip():
        raise argparse.ArgumentTypeError(f"Invalid alias '{value}', expected SRC=DST (e.g. py=python)")
    return source.strip(), target.strip()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``bbcode2md`` command."""
    parser = argparse.ArgumentParser(
        prog="bbcode2md",
        description="Convert BBCode formatted text to Markdown.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Input file, or '-' to read stdin (default)")
    parser.add_argument("-o", "--out", help="Output file (default: stdout)")
    parser.add_argument("--id", dest="doc_id", help="Document identifier used in error messages")

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument("--config", help=f"Configuration file (also read from ${CONFIG_ENV_VAR})")
    config_group.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    config_group.add_argument(
        "--disable-cleaner",
        action="append",
        default=[],
        metavar="NAME",
        choices=list(DEFAULT_CLEANER_ORDER),
        help="Skip a built-in cleaner (repeatable)",
    )
    config_group.add_argument(
        "--alias",
        action="append",
        default=[],
        type=_parse_alias,
        metavar="SRC=DST",
        help="Add a code language alias (repeatable)",
    )
    config_group.add_argument("--list-cleaners", action="store_true", help="List the active cleaners and exit")

    output_group = parser.add_argument_group("output")
    output_group.add_argument("--rich", action="store_true", help="Render the Markdown in the terminal with Rich")

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    logging_group.add_argument("--log-file", help="Also write log records to this file")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps")

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level.upper())
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _build_options(parsed_args: argparse.Namespace) -> BBCodeConverterOptions:
    """Merge configuration file options with command-line overrides."""
    if parsed_args.no_config:
        options = BBCodeConverterOptions()
    else:
        options = load_options(parsed_args.config or os.environ.get(CONFIG_ENV_VAR) or None)

    disabled = tuple(dict.fromkeys((*options.disabled_cleaners, *parsed_args.disable_cleaner)))
    aliases = {**options.language_aliases, **dict(parsed_args.alias)}
    return options.create_updated(disabled_cleaners=disabled, language_aliases=aliases)


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(markdown: str, parsed_args: argparse.Namespace) -> int:
    if parsed_args.out:
        Path(parsed_args.out).write_text(markdown, encoding="utf-8")
        logger.info(f"Wrote {parsed_args.out}")
        return EXIT_SUCCESS

    if parsed_args.rich:
        try:
            from rich.console import Console
            from rich.markdown import Markdown
        except ImportError:
            print("Error: --rich requires the optional 'rich' dependency. Install with: pip install bbcode2md[rich]",
                  file=sys.stderr)
            return EXIT_DEPENDENCY_ERROR

        Console().print(Markdown(markdown))
        return EXIT_SUCCESS

    sys.stdout.write(markdown)
    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the CLI entry point and return an exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        options = _build_options(parsed_args)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    converter = BBCodeConverter(options=options)

    if parsed_args.list_cleaners:
        print("\n".join(converter.cleaner_names))
        return EXIT_SUCCESS

    try:
        text = _read_input(parsed_args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Cannot read input {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    doc_id = parsed_args.doc_id
    if doc_id is None and parsed_args.input != "-":
        doc_id = Path(parsed_args.input).name

    try:
        markdown = converter.to_markdown(text, doc_id) or ""
    except ParsingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_PARSING_ERROR

    try:
        return _write_output(markdown, parsed_args)
    except OSError as e:
        print(f"Error: Cannot write output {parsed_args.out}: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
