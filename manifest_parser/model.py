"""Read-only manifest model and lookup interface."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

from manifest_parser.errors import MissingKey, MissingSection
from manifest_parser.parsers.builder import build_sections
from manifest_parser.parsers.grammar import Rule, parse
from manifest_parser.parsers.nodes import flatten


class Manifest:
    """Parsed manifest: section names mapped to key/value sections.

    Instances are immutable. Sections are exposed as read-only mapping
    views, so a Manifest can be shared between readers freely.
    """

    __slots__ = ("_sections",)

    def __init__(self, sections: Mapping[str, Mapping[str, str]]):
        """Initialize from a section name -> key/value mapping.

        Args:
            sections: Sections to expose. The mapping is copied.
        """
        self._sections: Mapping[str, Mapping[str, str]] = MappingProxyType(
            {name: MappingProxyType(dict(entries)) for name, entries in sections.items()}
        )

    @classmethod
    def parse(cls, text: str) -> "Manifest":
        """Parse manifest text into a Manifest.

        Args:
            text: Manifest content.

        Returns:
            Parsed Manifest.

        Raises:
            ParseError: If the text does not conform to the manifest grammar.
        """
        root = parse(Rule.MANIFEST, text)
        return cls(build_sections(flatten(root)))

    def sections(self) -> Iterator[str]:
        """Iterate over section names, each exactly once, in no particular order."""
        return iter(self._sections)

    def get_by_key(self, section: str, key: str) -> str:
        """Look up a single value.

        Args:
            section: Section name.
            key: Key within the section.

        Returns:
            The stored value.

        Raises:
            MissingSection: If the section does not exist.
            MissingKey: If the section exists but has no such key.
        """
        entries = self.get_by_section(section)
        try:
            return entries[key]
        except KeyError:
            raise MissingKey(section, key) from None

    def get_by_section(self, section: str) -> Mapping[str, str]:
        """Return the read-only key/value view of a section.

        Raises:
            MissingSection: If the section does not exist.
        """
        try:
            return self._sections[section]
        except KeyError:
            raise MissingSection(section) from None

    def _as_dict(self) -> dict[str, dict[str, str]]:
        return {name: dict(entries) for name, entries in self._sections.items()}

    def __contains__(self, section: object) -> bool:
        return section in self._sections

    def __len__(self) -> int:
        return len(self._sections)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Manifest):
            return NotImplemented
        return self._as_dict() == other._as_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Manifest(sections={sorted(self._sections)!r})"


def parse_manifest(text: str) -> Manifest:
    """Parse manifest text; shorthand for Manifest.parse()."""
    return Manifest.parse(text)


__all__ = ["Manifest", "parse_manifest"]
