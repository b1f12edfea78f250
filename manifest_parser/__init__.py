"""Manifest Parser - parse sectioned key/value manifests into a read-only model."""

__version__ = "0.1.0"
__author__ = "the manifest-parser contributors"

from manifest_parser.errors import (
    ConfigurationError,
    ManifestError,
    MissingKey,
    MissingSection,
    ParseError,
)
from manifest_parser.model import Manifest, parse_manifest
from manifest_parser.parsers.grammar import ParseNode, ParseToken, Rule, parse

__all__ = [
    "ConfigurationError",
    "Manifest",
    "ManifestError",
    "MissingKey",
    "MissingSection",
    "ParseError",
    "ParseNode",
    "ParseToken",
    "Rule",
    "parse",
    "parse_manifest",
]
