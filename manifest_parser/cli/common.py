"""Shared helpers for CLI commands: reading manifests and console output."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console

from manifest_parser.config import CliConfig
from manifest_parser.errors import ParseError
from manifest_parser.model import Manifest

logger = logging.getLogger("manifest_parser.cli.common")


def make_console(config: CliConfig) -> Console:
    """Create the console used for command results."""
    return Console(highlight=False, no_color=not config.color)


def emit(console: Console, text: str) -> None:
    """Print a result line verbatim; manifest text is never Rich markup."""
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def ordered(names: Iterable[str], config: CliConfig) -> list[str]:
    items = list(names)
    return sorted(items) if config.sort_output else items


def load_manifest(file: str, config: CliConfig) -> Optional[Manifest]:
    """Read and parse a manifest file, logging any failure.

    Args:
        file: Path to the manifest file.
        config: CLI configuration (file encoding).

    Returns:
        Parsed Manifest, or None if the file could not be read or parsed.
    """
    path = Path(file)
    try:
        content = path.read_text(encoding=config.encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read file %s: %s", path, e)
        return None

    try:
        manifest = Manifest.parse(content)
    except ParseError as e:
        logger.error("Failed to parse manifest %s: %s", path, e)
        if e.context:
            logger.debug("Parse context:\n%s", e.context)
        return None

    logger.debug("Parsed %s: %d section(s)", path, len(manifest))
    return manifest
