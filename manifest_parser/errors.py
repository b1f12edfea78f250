"""Exception hierarchy for manifest parsing and lookups.

Every failure the engine produces is one of these types so callers can
branch on the kind of problem instead of matching message text:

- ParseError: the text does not conform to the manifest grammar
- MissingSection: a lookup named a section the manifest does not have
- MissingKey: a lookup named a key its (existing) section does not have
- ConfigurationError: front-end settings could not be loaded
"""

from __future__ import annotations

from typing import Optional


class ManifestError(Exception):
    """Base class for all manifest errors.

    These errors describe expected failure conditions (bad input, absent
    data) and are meant to be handled by the caller.
    """
    pass


class ParseError(ManifestError):
    """Manifest text was rejected by the grammar.

    Parsing stops at the first offending token; no partial model is ever
    returned alongside this error.

    Attributes:
        description: Human-readable account of what went wrong.
        line: 1-based line of the offending input, if known.
        column: 1-based column of the offending input, if known.
        offset: 0-based character offset of the offending input, if known.
        context: Snippet of the input around the offending location.
    """

    def __init__(
        self,
        description: str,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
        offset: Optional[int] = None,
        context: str = "",
    ) -> None:
        self.description = description
        self.line = line
        self.column = column
        self.offset = offset
        self.context = context
        super().__init__(f"Parse error: {description}")


class MissingSection(ManifestError, KeyError):
    """A lookup referenced a section absent from the manifest."""

    def __init__(self, section: str) -> None:
        self.section = section
        super().__init__(f"Missing section: {section}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class MissingKey(ManifestError, KeyError):
    """A lookup referenced a key absent from an existing section."""

    def __init__(self, section: str, key: str) -> None:
        self.section = section
        self.key = key
        super().__init__(f"Missing key {key} in section {section}")

    def __str__(self) -> str:
        return self.args[0]


class ConfigurationError(ManifestError):
    """Front-end configuration is malformed or contains invalid values."""
    pass


__all__ = [
    "ManifestError",
    "ParseError",
    "MissingSection",
    "MissingKey",
    "ConfigurationError",
]
