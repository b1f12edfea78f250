"""Flat node sequence produced from a manifest parse tree.

The model builder never looks at Lark trees directly. Instead the tree is
flattened, in document order, into a closed set of node kinds:

- SectionHeader: a generic `[name]` / `[[name]]` header
- KeyValue: one generic `key = value` line
- PackageConstruct: a whole `[package]` block, entries included
- DependenciesConstruct: a whole `[dependencies]` block, entries included
- Other: anything else the grammar may emit
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple, Union

from manifest_parser.parsers.grammar import ParseNode, ParseToken, Rule


@dataclass(frozen=True)
class SectionHeader:
    """Generic section header; becomes the active section."""

    name: str


@dataclass(frozen=True)
class KeyValue:
    """Key/value pair with its value already cleaned."""

    key: str
    value: str


@dataclass(frozen=True)
class PackageConstruct:
    """`[package]` block with its mandatory fields and extra entries."""

    name: str
    version: str
    entries: Tuple[KeyValue, ...] = ()


@dataclass(frozen=True)
class DependenciesConstruct:
    """`[dependencies]` block with one entry per dependency line."""

    entries: Tuple[KeyValue, ...] = ()


@dataclass(frozen=True)
class Other:
    """Node kind with no effect on the model."""

    rule: str


Node = Union[SectionHeader, KeyValue, PackageConstruct, DependenciesConstruct, Other]


def clean_value(raw: str) -> str:
    """Trim whitespace and strip exactly one layer of double quotes.

    Escape sequences inside the quotes are kept verbatim.

    Args:
        raw: Value text as captured by the grammar.

    Returns:
        Cleaned value string.
    """
    value = raw.strip()
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    return value


def _tokens(node: ParseNode) -> list[ParseToken]:
    return [child for child in node.children if isinstance(child, ParseToken)]


def _key_value(node: ParseNode) -> KeyValue:
    key, value = _tokens(node)
    return KeyValue(key=key.value.strip(), value=clean_value(value.value))


def _entries(node: ParseNode, rule: Rule) -> Tuple[KeyValue, ...]:
    return tuple(
        _key_value(child)
        for child in node.children
        if isinstance(child, ParseNode) and child.rule == rule.value
    )


def _section_name(definition: ParseNode) -> str:
    (name,) = _tokens(definition)
    return name.value.strip()


def flatten(root: ParseNode) -> Iterator[Node]:
    """Flatten a `manifest` parse tree into document-ordered nodes.

    Entries of the package and dependencies constructs stay inside their
    construct node; only generic sections are split into a header
    followed by its key/value nodes.

    Args:
        root: ParseNode for the `manifest` rule.

    Yields:
        Node instances in document order.
    """
    for child in root.children:
        if not isinstance(child, ParseNode):
            continue

        rule = child.rule
        if rule == Rule.SECTION.value:
            definition, *lines = [c for c in child.children if isinstance(c, ParseNode)]
            yield SectionHeader(name=_section_name(definition))
            for line in lines:
                yield _key_value(line)
        elif rule == Rule.KEY_VALUE.value:
            yield _key_value(child)
        elif rule == Rule.PACKAGE_SECTION.value:
            name, version = _tokens(child)
            yield PackageConstruct(
                name=clean_value(name.value),
                version=clean_value(version.value),
                entries=_entries(child, Rule.KEY_VALUE),
            )
        elif rule == Rule.DEPENDENCIES_SECTION.value:
            yield DependenciesConstruct(entries=_entries(child, Rule.DEPENDENCY))
        else:
            yield Other(rule=rule)


__all__ = [
    "DependenciesConstruct",
    "KeyValue",
    "Node",
    "Other",
    "PackageConstruct",
    "SectionHeader",
    "clean_value",
    "flatten",
]
