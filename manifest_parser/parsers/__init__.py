"""Parsers package.

Grammar engine, parse-tree flattening and the section builder.
"""

from manifest_parser.parsers.builder import build_sections
from manifest_parser.parsers.grammar import ParseNode, ParseToken, Rule, parse
from manifest_parser.parsers.nodes import flatten

__all__ = [
    "ParseNode",
    "ParseToken",
    "Rule",
    "build_sections",
    "flatten",
    "parse",
]
