"""Fold a flat node sequence into manifest sections.

The builder is a left fold: each node is applied to an explicit
BuildState carrying the active generic section and the sections built so
far. States are never modified in place: each step returns a new state
with fresh copies of the mappings it changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Dict, Iterable, Optional

from manifest_parser.parsers.nodes import (
    DependenciesConstruct,
    KeyValue,
    Node,
    Other,
    PackageConstruct,
    SectionHeader,
)

logger = logging.getLogger("manifest_parser.parsers.builder")

PACKAGE_SECTION = "package"
DEPENDENCIES_SECTION = "dependencies"
DEV_DEPENDENCIES_SECTION = "dev-dependencies"


@dataclass(frozen=True)
class BuildState:
    """Accumulator threaded through the fold."""

    current_section: Optional[str] = None
    sections: Dict[str, Dict[str, str]] = field(default_factory=dict)


def dependencies_target(sections: Dict[str, Dict[str, str]]) -> str:
    """Return the section name the next dependencies block is stored under."""
    if DEPENDENCIES_SECTION in sections:
        return DEV_DEPENDENCIES_SECTION
    return DEPENDENCIES_SECTION


def apply_node(state: BuildState, node: Node) -> BuildState:
    """Apply a single node to the build state.

    The given state is left untouched. Sections that change are copied
    into the returned state; unchanged sections are shared.

    Args:
        state: State before the node.
        node: Node to apply.

    Returns:
        State after the node.

    Raises:
        TypeError: If `node` is not one of the known node kinds.
    """
    if isinstance(node, SectionHeader):
        if node.name in state.sections:
            return replace(state, current_section=node.name)
        return replace(
            state,
            current_section=node.name,
            sections={**state.sections, node.name: {}},
        )

    if isinstance(node, KeyValue):
        if state.current_section is None:
            logger.debug("Discarding key %r outside of any section", node.key)
            return state
        section = {**state.sections[state.current_section], node.key: node.value}
        return replace(state, sections={**state.sections, state.current_section: section})

    if isinstance(node, PackageConstruct):
        package = {"name": node.name, "version": node.version}
        for entry in node.entries:
            package[entry.key] = entry.value
        return replace(state, sections={**state.sections, PACKAGE_SECTION: package})

    if isinstance(node, DependenciesConstruct):
        target = dependencies_target(state.sections)
        if target != DEPENDENCIES_SECTION:
            logger.debug("Storing repeated dependencies block as %r", target)
        entries = {entry.key: entry.value for entry in node.entries}
        return replace(state, sections={**state.sections, target: entries})

    if isinstance(node, Other):
        return state

    raise TypeError(f"Unsupported manifest node: {node!r}")


def build_sections(nodes: Iterable[Node]) -> Dict[str, Dict[str, str]]:
    """Fold `nodes` into a section name -> key/value mapping.

    Args:
        nodes: Document-ordered nodes, typically from nodes.flatten().

    Returns:
        Mapping of section names to their key/value pairs.
    """
    final = reduce(apply_node, nodes, BuildState())
    return final.sections


__all__ = [
    "BuildState",
    "DEPENDENCIES_SECTION",
    "DEV_DEPENDENCIES_SECTION",
    "PACKAGE_SECTION",
    "apply_node",
    "build_sections",
    "dependencies_target",
]
