"""Node flattening and section builder tests."""

from __future__ import annotations

import pytest

from manifest_parser.parsers.builder import (
    BuildState,
    apply_node,
    build_sections,
    dependencies_target,
)
from manifest_parser.parsers.grammar import Rule, parse
from manifest_parser.parsers.nodes import (
    DependenciesConstruct,
    KeyValue,
    Other,
    PackageConstruct,
    SectionHeader,
    clean_value,
    flatten,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('"x"', "x"),
        ('  "x"  ', "x"),
        ('" padded "', " padded "),
        ('""', ""),
        ('"a\\"b\\""', 'a\\"b\\"'),
        ("2", "2"),
        ('{ version = "1.0.0" }', '{ version = "1.0.0" }'),
        ('["a", "b"]', '["a", "b"]'),
        ('"', '"'),
    ],
)
def test_clean_value(raw: str, expected: str) -> None:
    assert clean_value(raw) == expected


def test_flatten_orders_nodes_like_the_document() -> None:
    text = """
    root = "dropped"
    [package]
    name = "demo"
    version = "0.1.0"
    edition = "2021"

    [dependencies]
    serde = "1.0.0"
    tokio = { version = "1.0.0", features = ["full"] }

    [[bin]]
    name = "demo-cli"
    """

    nodes = list(flatten(parse(Rule.MANIFEST, text)))

    assert nodes == [
        KeyValue("root", "dropped"),
        PackageConstruct("demo", "0.1.0", (KeyValue("edition", "2021"),)),
        DependenciesConstruct(
            (
                KeyValue("serde", "1.0.0"),
                KeyValue("tokio", '{ version = "1.0.0", features = ["full"] }'),
            )
        ),
        SectionHeader("bin"),
        KeyValue("name", "demo-cli"),
    ]


def test_header_sets_cursor_and_creates_section() -> None:
    state = apply_node(BuildState(), SectionHeader("lib"))

    assert state.current_section == "lib"
    assert state.sections == {"lib": {}}


def test_reentering_section_keeps_existing_keys() -> None:
    state = BuildState()
    for node in (
        SectionHeader("lib"),
        KeyValue("a", "1"),
        SectionHeader("bin"),
        SectionHeader("lib"),
        KeyValue("b", "2"),
    ):
        state = apply_node(state, node)

    assert state.sections["lib"] == {"a": "1", "b": "2"}
    assert state.sections["bin"] == {}


def test_key_value_without_section_is_discarded() -> None:
    state = apply_node(BuildState(), KeyValue("orphan", "x"))

    assert state.current_section is None
    assert state.sections == {}


def test_later_key_overwrites_earlier_one() -> None:
    sections = build_sections(
        [SectionHeader("lib"), KeyValue("path", "a.rs"), KeyValue("path", "b.rs")]
    )
    assert sections == {"lib": {"path": "b.rs"}}


def test_package_construct_replaces_existing_package_section() -> None:
    sections = build_sections(
        [
            SectionHeader("package"),
            KeyValue("license", "MIT"),
            PackageConstruct("demo", "1.0.0", (KeyValue("edition", "2021"),)),
        ]
    )
    assert sections == {"package": {"name": "demo", "version": "1.0.0", "edition": "2021"}}


def test_package_construct_leaves_cursor_alone() -> None:
    state = BuildState()
    for node in (
        SectionHeader("lib"),
        PackageConstruct("demo", "1.0.0"),
        KeyValue("path", "src/lib.rs"),
    ):
        state = apply_node(state, node)

    assert state.current_section == "lib"
    assert state.sections["lib"] == {"path": "src/lib.rs"}
    assert state.sections["package"] == {"name": "demo", "version": "1.0.0"}


def test_dependency_blocks_are_aliased() -> None:
    first = DependenciesConstruct((KeyValue("serde", "1.0.0"),))
    second = DependenciesConstruct((KeyValue("pretty_assertions", "1.4.0"),))
    third = DependenciesConstruct((KeyValue("criterion", "0.5.1"),))

    assert build_sections([first]) == {"dependencies": {"serde": "1.0.0"}}
    assert build_sections([first, second]) == {
        "dependencies": {"serde": "1.0.0"},
        "dev-dependencies": {"pretty_assertions": "1.4.0"},
    }
    assert build_sections([first, second, third]) == {
        "dependencies": {"serde": "1.0.0"},
        "dev-dependencies": {"criterion": "0.5.1"},
    }


def test_dependencies_target_follows_existing_sections() -> None:
    assert dependencies_target({}) == "dependencies"
    assert dependencies_target({"dependencies": {}}) == "dev-dependencies"
    assert dependencies_target({"dev-dependencies": {}}) == "dependencies"


def test_other_nodes_have_no_effect() -> None:
    state = BuildState(current_section="lib", sections={"lib": {}})
    assert apply_node(state, Other("unknown")) is state


def test_unknown_node_type_is_rejected() -> None:
    with pytest.raises(TypeError):
        apply_node(BuildState(), ("lib", "x"))  # type: ignore[arg-type]


def test_build_sections_starts_fresh_every_time() -> None:
    nodes = [SectionHeader("lib"), KeyValue("a", "1")]
    first = build_sections(nodes)
    second = build_sections(nodes)

    assert first == second
    assert first is not second


def test_apply_node_leaves_earlier_states_untouched() -> None:
    empty = BuildState()
    header = apply_node(empty, SectionHeader("lib"))
    with_key = apply_node(header, KeyValue("a", "1"))
    overwritten = apply_node(with_key, KeyValue("a", "2"))
    package = apply_node(overwritten, PackageConstruct("demo", "1.0.0"))
    deps = apply_node(package, DependenciesConstruct((KeyValue("serde", "1.0.0"),)))

    assert empty.sections == {}
    assert header.sections == {"lib": {}}
    assert with_key.sections == {"lib": {"a": "1"}}
    assert overwritten.sections == {"lib": {"a": "2"}}
    assert "dependencies" not in package.sections
    assert deps.sections["dependencies"] == {"serde": "1.0.0"}
    assert header is not with_key
    assert with_key is not overwritten


def test_reentering_section_does_not_touch_previous_state() -> None:
    state = BuildState()
    for node in (SectionHeader("lib"), KeyValue("a", "1"), SectionHeader("bin")):
        state = apply_node(state, node)

    reentered = apply_node(state, SectionHeader("lib"))
    updated = apply_node(reentered, KeyValue("b", "2"))

    assert state.sections["lib"] == {"a": "1"}
    assert reentered.sections["lib"] == {"a": "1"}
    assert updated.sections["lib"] == {"a": "1", "b": "2"}
