"""Authors command implementation."""

from manifest_parser import __author__, __version__
from manifest_parser.cli.common import emit


def authors_command(args, config, console) -> int:
    """Print project and author information."""
    emit(console, f"Manifest Parser v{__version__}")
    emit(console, f"Created by {__author__}")
    return 0
