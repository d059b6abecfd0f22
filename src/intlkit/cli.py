"""Command-line entry point: intlkit-extract.

Usage:
    intlkit-extract
    intlkit-extract --config intl.json --locale en --locale fr --fallback en
    intlkit-extract --source-dir src --sort-by source --no-empty-tags
    intlkit-extract --error-format json

Options given on the command line override those of the configuration file.

Exit Codes:
    0   Extraction completed, all files written
    1   Extraction failed (unreadable or malformed dictionary, invalid
        configuration, unreadable source, write failure)
    2   Usage error

Python 3.13+.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from intlkit import __version__
from intlkit.diagnostics import DiagnosticFormatter, IntlError, OutputFormat
from intlkit.extraction import ExtractionConfig, extract_messages

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser of intlkit-extract."""
    parser = argparse.ArgumentParser(
        prog="intlkit-extract",
        description="Extract message usages from sources and update locale dictionaries.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scan the current directory with the default options:
  intlkit-extract

  # Only scan src/, maintain English and French, fill gaps from English:
  intlkit-extract --source-dir src --locale en --locale fr --fallback en

  # Machine-readable errors for editor or CI integration:
  intlkit-extract --error-format json

Positions in message-map.json and file-map.json are "file:line:column" with
1-based lines and columns.
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        help="JSON file of options (camelCase names, e.g. sourceDir, sortBy)",
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        default=Path(),
        help="Directory all other paths are relative to (default: current directory)",
    )
    parser.add_argument(
        "--source-dir",
        action="append",
        dest="source_dir",
        metavar="DIR",
        help="Directory to scan; repeat for several (default: whole tree)",
    )
    parser.add_argument("--locales-dir", help="Directory of <locale>.json dictionaries")
    parser.add_argument("--output-dir", help="Directory of template and occurrence maps")
    parser.add_argument("--default-language", help="Locale receiving extracted default messages")
    parser.add_argument(
        "--locale",
        action="append",
        dest="locales",
        metavar="CODE",
        help="Locale to maintain; repeat for several",
    )
    parser.add_argument(
        "--extension",
        action="append",
        dest="extensions",
        metavar="EXT",
        help="File extension to scan; repeat for several",
    )
    parser.add_argument("--fallback", help="Locale whose values fill gaps in the others")
    parser.add_argument(
        "--sort-by",
        choices=["keys", "source"],
        help="Write dictionaries sorted by id (keys) or in discovery order (source)",
    )
    parser.add_argument(
        "--no-empty-tags",
        action="store_false",
        dest="empty_tags",
        default=None,
        help="Do not add empty templates for new ids",
    )
    parser.add_argument(
        "--no-reserve-keys",
        action="store_false",
        dest="reserve_keys",
        default=None,
        help="Report persisted ids that no longer occur in sources",
    )
    parser.add_argument("--indent", type=int, dest="json_indent", help="JSON indent width")
    parser.add_argument(
        "--error-format",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.COMPILER.value,
        help="How fatal errors are printed on stderr (default: compiler)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Log scan details")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Only log errors")
    return parser


_OVERRIDES = (
    "source_dir",
    "locales_dir",
    "output_dir",
    "default_language",
    "locales",
    "extensions",
    "fallback",
    "sort_by",
    "empty_tags",
    "reserve_keys",
    "json_indent",
)


def _load_config(args: argparse.Namespace) -> ExtractionConfig:
    config = ExtractionConfig.from_json_file(args.config) if args.config else ExtractionConfig()
    overrides: dict[str, Any] = {}
    for name in _OVERRIDES:
        value = getattr(args, name)
        if value is None:
            continue
        overrides[name] = tuple(value) if isinstance(value, list) else value
    return dataclasses.replace(config, **overrides)


def _format_error(error: IntlError, output_format: OutputFormat) -> str:
    if error.diagnostic is None:
        return f"[ERROR] {error}"
    formatter = DiagnosticFormatter(output_format=output_format, color=sys.stderr.isatty())
    if output_format is OutputFormat.COMPILER:
        return f"[ERROR] {formatter.format(error.diagnostic)}"
    return formatter.format(error.diagnostic)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = _load_config(args)
        summary = extract_messages(config, args.base_dir)
    except IntlError as e:
        print(_format_error(e, OutputFormat(args.error_format)), file=sys.stderr)
        return 1

    print()
    for line in summary.report_lines():
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
