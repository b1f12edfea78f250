"""Helpers for loading CLI configuration from TOML/JSON sources.

This module provides a single entry point `load_cli_config` that accepts
various configuration sources:

* None -> default CliConfig
* dict -> validated directly
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from manifest_parser.config.schema import CliConfig
from manifest_parser.errors import ConfigurationError

logger = logging.getLogger("manifest_parser.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _guess_format(text: str) -> str:
    stripped = text.lstrip()
    return "json" if stripped.startswith("{") else "toml"


def _read_source(source: Union[str, Path]) -> tuple[str, str]:
    """Return (text, format) for a file path or an inline string."""
    path = Path(source)
    try:
        is_file = path.is_file()
    except OSError:
        # Inline TOML can be too long or odd to be a valid path
        is_file = False

    if is_file:
        text = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()
        if suffix in {".toml", ".tml"}:
            fmt = "toml"
        elif suffix == ".json":
            fmt = "json"
        else:
            fmt = _guess_format(text)
        logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
        return text, fmt

    text = str(source)
    fmt = _guess_format(text)
    logger.info("Loading configuration from inline %s string", fmt)
    return text, fmt


def load_cli_config(source: ConfigSource) -> CliConfig:
    """Load CliConfig from various configuration sources.

    A top-level `cli` table, when present, holds the settings; otherwise
    the whole mapping is used.

    Args:
        source: One of:
            * None: returns CliConfig()
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        CliConfig instance.

    Raises:
        ConfigurationError: If the source cannot be read, decoded or validated.
    """
    if source is None:
        logger.debug("No config source provided; using default CliConfig")
        return CliConfig()

    data: Optional[Any]
    if isinstance(source, dict):
        logger.debug("Loading CliConfig from provided dict")
        data = source
    elif isinstance(source, (str, Path)):
        try:
            text, fmt = _read_source(source)
            data = json.loads(text) if fmt == "json" else tomllib.loads(text)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
            raise ConfigurationError(f"Cannot load configuration: {exc}") from exc
    else:
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    if not isinstance(data, dict):
        raise ConfigurationError("Top-level configuration must be a mapping/dict")

    settings = data.get("cli", data)
    if not isinstance(settings, dict):
        raise ConfigurationError("The [cli] configuration entry must be a table")

    try:
        return CliConfig(**settings)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


__all__ = ["ConfigSource", "load_cli_config"]
