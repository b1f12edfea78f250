"""Main CLI entry point for manifest-parser.

Provides commands: parse, get-by-key, get-by-section, authors
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from manifest_parser import __version__
from manifest_parser.cli.authors import authors_command
from manifest_parser.cli.common import make_console
from manifest_parser.cli.lookup import get_by_key_command, get_by_section_command
from manifest_parser.cli.parse import parse_command
from manifest_parser.config import load_cli_config
from manifest_parser.errors import ConfigurationError

logger = logging.getLogger("manifest_parser.cli")

EPILOG = """\
examples:
    manifest-parser parse Cargo.toml
    manifest-parser get-by-key Cargo.toml package version
    manifest-parser get-by-section Cargo.toml dependencies
"""


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="manifest-parser",
        description="Manifest Parser - parse and inspect manifest files",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional CLI configuration. Can be a path to a TOML/JSON "
            "file or an inline TOML/JSON string. When omitted, built-in "
            "defaults are used."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse",
        aliases=["p"],
        help="Parse and display the sections of a manifest file",
    )
    parse_parser.add_argument(
        "file",
        metavar="FILE",
        help="Path to the manifest file to parse",
    )
    parse_parser.set_defaults(handler=parse_command)

    key_parser = subparsers.add_parser(
        "get-by-key",
        aliases=["get"],
        help="Extract a specific value by section and key",
    )
    key_parser.add_argument("file", metavar="FILE", help="Path to the manifest file")
    key_parser.add_argument("section", metavar="SECTION", help="Section name to search in")
    key_parser.add_argument("key", metavar="KEY", help="Key to look up")
    key_parser.set_defaults(handler=get_by_key_command)

    section_parser = subparsers.add_parser(
        "get-by-section",
        aliases=["section"],
        help="Get all key-value pairs from a section",
    )
    section_parser.add_argument("file", metavar="FILE", help="Path to the manifest file")
    section_parser.add_argument("section", metavar="SECTION", help="Section to display")
    section_parser.set_defaults(handler=get_by_section_command)

    authors_parser = subparsers.add_parser(
        "authors",
        aliases=["a"],
        help="Show information about the authors",
    )
    authors_parser.set_defaults(handler=authors_command)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Argument list; defaults to sys.argv[1:].

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 1

    try:
        config = load_cli_config(args.config)
    except ConfigurationError as exc:
        logger.error(str(exc))
        return 1

    console = make_console(config)
    return handler(args, config, console)


if __name__ == "__main__":
    sys.exit(main())
