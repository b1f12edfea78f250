"""Configuration schema and loading for the manifest-parser CLI."""

from .loader import load_cli_config
from .schema import CliConfig

__all__ = [
    "CliConfig",
    "load_cli_config",
]
