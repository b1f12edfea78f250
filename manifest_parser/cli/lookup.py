"""Lookup command implementations: get-by-key and get-by-section."""

import logging

from manifest_parser.cli.common import emit, load_manifest, ordered
from manifest_parser.errors import MissingKey, MissingSection

logger = logging.getLogger("manifest_parser.cli.lookup")


def get_by_key_command(args, config, console) -> int:
    """Print a single `key = value` line from a manifest file.

    Args:
        args: Parsed command-line arguments (file, section, key).
        config: CLI configuration.
        console: Rich console for results.

    Returns:
        int: Exit code (1 when the file, section or key is unavailable).
    """
    manifest = load_manifest(args.file, config)
    if manifest is None:
        return 1

    try:
        value = manifest.get_by_key(args.section, args.key)
    except (MissingSection, MissingKey) as e:
        logger.debug("Lookup of %s.%s failed: %s", args.section, args.key, e)
        emit(console, f"Error: {e}")
        return 1

    emit(console, f"{args.key} = {value}")
    return 0


def get_by_section_command(args, config, console) -> int:
    """Print every key/value pair of one manifest section.

    Args:
        args: Parsed command-line arguments (file, section).
        config: CLI configuration.
        console: Rich console for results.

    Returns:
        int: Exit code (1 when the file or section is unavailable).
    """
    manifest = load_manifest(args.file, config)
    if manifest is None:
        return 1

    try:
        entries = manifest.get_by_section(args.section)
    except MissingSection as e:
        logger.debug("Lookup of section %s failed: %s", args.section, e)
        emit(console, f"Error: {e}")
        return 1

    emit(console, f"Values in section [{args.section}]:")
    for key in ordered(entries, config):
        emit(console, f"{key} = {entries[key]}")
    return 0
