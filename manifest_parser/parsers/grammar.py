"""Manifest grammar and a shared LALR parser instance.

The grammar is compiled once at import time with one start symbol per
public rule, so callers (and tests) can validate a fragment such as a
single dependency block or a version literal on its own. Parse results
are wrapped in ParseNode/ParseToken objects that expose the matched span
of each node alongside its ordered children.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, List, Optional, Union

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken
from lark.lexer import PatternStr

from manifest_parser.errors import ParseError


MANIFEST_GRAMMAR = r"""
manifest: _NL? key_value+ _construct*
        | _NL? _construct+

_construct: section
          | package_section
          | dependencies_section

section: section_definition key_value*

section_definition: ("[" IDENT "]" | "[[" IDENT "]]") _NL

key_value: IDENT "=" _value _NL

_value: STRING
      | INLINE_TABLE
      | ARRAY
      | BARE_VALUE

package_section: "[package]" _NL "name" "=" STRING _NL "version" "=" SEMVER _NL key_value*

dependencies_section: "[dependencies]" _NL dependency*

dependency: IDENT "=" (SEMVER | INLINE_TABLE) _NL

version: SEMVER _NL

IDENT: /[A-Za-z0-9_-]+/

STRING: /"(?:[^"\\\n]|\\.)*"/

// Strict semantic version, quotes included
SEMVER: /"(?:0|[1-9][0-9]*)\.(?:0|[1-9][0-9]*)\.(?:0|[1-9][0-9]*)(?:-(?:0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*)(?:\.(?:0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*))*)?(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"/

// Captured whole; allows quoted strings, lists and one nested table
INLINE_TABLE: /\{(?:[^{}"]|"(?:[^"\\\n]|\\.)*"|\{(?:[^{}"]|"(?:[^"\\\n]|\\.)*")*\})*\}/

ARRAY: /\[(?:[^\[\]"]|"(?:[^"\\\n]|\\.)*"|\[(?:[^\[\]"]|"(?:[^"\\\n]|\\.)*")*\])*\]/

BARE_VALUE: /[^\s"#\[\]{},=]+/

// Line end; swallows trailing comments, blank lines and comment-only lines
_NL: /(?:(?:#[^\n]*)?\r?\n[\t ]*)+/

%import common.WS_INLINE
%ignore WS_INLINE
"""


class Rule(str, Enum):
    """Grammar rules that can be used as a parse entry point."""

    MANIFEST = "manifest"
    SECTION = "section"
    SECTION_DEFINITION = "section_definition"
    KEY_VALUE = "key_value"
    PACKAGE_SECTION = "package_section"
    DEPENDENCIES_SECTION = "dependencies_section"
    DEPENDENCY = "dependency"
    VERSION = "version"


LINE_END = "_NL"

# Terminals that read better as words than as terminal names
_TERMINAL_LABELS = {
    LINE_END: "end of line",
    "$END": "end of input",
}


def _counts_for_span(child: Union[Tree, Token]) -> bool:
    # Node spans stop at the last value, not at the newline that ends the line
    return not (isinstance(child, Token) and child.type == LINE_END)


MANIFEST_PARSER = Lark(
    MANIFEST_GRAMMAR,
    parser="lalr",
    lexer="contextual",
    start=[rule.value for rule in Rule],
    propagate_positions=_counts_for_span,
)


class ParseToken:
    """Leaf of a parse tree: a typed terminal and its matched text."""

    def __init__(self, token: Token):
        self.type = token.type
        self.value = str(token)
        self.start = token.start_pos if token.start_pos is not None else 0
        self.end = self.start + len(self.value)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"ParseToken({self.type}, {self.value!r})"


class ParseNode:
    """Labeled parse tree node over the parsed source text.

    Wraps a Lark tree so callers see the rule name, the matched span of
    the node, and its ordered children without depending on Lark types.
    """

    def __init__(self, tree: Tree, source: str):
        """Initialize wrapper with a Lark tree and the parsed source.

        Args:
            tree: Lark Tree produced by MANIFEST_PARSER.
            source: Text the tree was parsed from, for span extraction.
        """
        self.tree = tree
        self.source = source
        self._children: Optional[List[Union[ParseNode, ParseToken]]] = None

    @property
    def rule(self) -> str:
        return str(self.tree.data)

    @property
    def start(self) -> int:
        meta = self.tree.meta
        return 0 if meta.empty else meta.start_pos

    @property
    def end(self) -> int:
        meta = self.tree.meta
        return 0 if meta.empty else meta.end_pos

    @property
    def line(self) -> Optional[int]:
        meta = self.tree.meta
        return None if meta.empty else meta.line

    @property
    def column(self) -> Optional[int]:
        meta = self.tree.meta
        return None if meta.empty else meta.column

    @property
    def text(self) -> str:
        """Source text matched by this node."""
        return self.source[self.start:self.end]

    @property
    def children(self) -> List[Union[ParseNode, ParseToken]]:
        """Ordered children; subtrees are wrapped, terminals become tokens."""
        if self._children is None:
            self._children = [
                ParseNode(child, self.source) if isinstance(child, Tree) else ParseToken(child)
                for child in self.tree.children
            ]
        return self._children

    def find_data(self, rule: Union[Rule, str]) -> Iterator[ParseNode]:
        """Yield this node and its descendants labeled `rule`, in document order."""
        name = Rule(rule).value
        for subtree in self.tree.iter_subtrees_topdown():
            if subtree.data == name:
                yield ParseNode(subtree, self.source)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"ParseNode({self.rule}, {self.text!r})"


def _describe_terminals(names: Iterable[str]) -> str:
    """Render terminal names the way they appear in manifest text."""
    rendered = []
    for name in sorted(names):
        if name in _TERMINAL_LABELS:
            rendered.append(_TERMINAL_LABELS[name])
            continue
        try:
            pattern = MANIFEST_PARSER.get_terminal(name).pattern
        except KeyError:
            rendered.append(name)
            continue
        if isinstance(pattern, PatternStr):
            rendered.append(repr(pattern.value))
        else:
            rendered.append(name)
    return ", ".join(rendered)


def _position(value: object, minimum: int) -> Optional[int]:
    # Lark reports unknown positions as -1 or '?'
    if isinstance(value, int) and value >= minimum:
        return value
    return None


def _to_parse_error(exc: UnexpectedInput, text: str) -> ParseError:
    """Translate a Lark failure into a ParseError with location details."""
    line = _position(exc.line, minimum=1)
    column = _position(exc.column, minimum=1)
    offset = _position(exc.pos_in_stream, minimum=0)
    context = exc.get_context(text) if offset is not None else ""

    if isinstance(exc, UnexpectedCharacters):
        found = repr(exc.char)
        expected = exc.allowed or set()
    elif isinstance(exc, UnexpectedToken):
        found = _TERMINAL_LABELS.get(exc.token.type) or repr(str(exc.token))
        expected = exc.accepts or exc.expected or set()
    else:
        found = "end of input"
        expected = getattr(exc, "expected", None) or set()

    where = f" at line {line}, column {column}" if line is not None else ""
    description = f"unexpected {found}{where}"
    if expected:
        description += f"; expected one of: {_describe_terminals(expected)}"

    return ParseError(description, line=line, column=column, offset=offset, context=context)


def parse(rule: Union[Rule, str], text: str) -> ParseNode:
    """Parse `text` starting from `rule`, consuming the whole input.

    Headers and key/value lines end at a newline. A newline is appended
    before parsing, so the last line of `text` may omit it.

    Args:
        rule: Entry point, a Rule member or its string value.
        text: Source text to parse.

    Returns:
        Root ParseNode labeled with the requested rule.

    Raises:
        ParseError: If the text does not conform to the grammar.
        ValueError: If `rule` is not a known entry point.
    """
    start = Rule(rule).value
    try:
        tree = MANIFEST_PARSER.parse(text + "\n", start=start)
    except UnexpectedInput as exc:
        raise _to_parse_error(exc, text) from exc
    return ParseNode(tree, text)


__all__ = [
    "MANIFEST_GRAMMAR",
    "MANIFEST_PARSER",
    "ParseNode",
    "ParseToken",
    "Rule",
    "parse",
]
