"""Parse command implementation."""

import logging

from manifest_parser.cli.common import emit, load_manifest, ordered

logger = logging.getLogger("manifest_parser.cli.parse")


def parse_command(args, config, console) -> int:
    """Execute parse command: list the sections of a manifest file.

    Args:
        args: Parsed command-line arguments (file).
        config: CLI configuration.
        console: Rich console for results.

    Returns:
        int: Exit code.
    """
    manifest = load_manifest(args.file, config)
    if manifest is None:
        return 1

    emit(console, "Parsed manifest sections:")
    for section in ordered(manifest.sections(), config):
        emit(console, f"- {section}")
    return 0
