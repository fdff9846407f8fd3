"""Lark Transformer that converts a stylesheet parse tree into a Document."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, UnexpectedCharacters, UnexpectedToken

from nestlint.model.document import Document, Node, NodeKind, Position
from nestlint.parser.errors import ParseError

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

# @name params -- the name runs up to whitespace or an opening paren.
_AT_RULE_RE = re.compile(r"^@(?P<name>[^\s(]+)\s*(?P<params>.*)$", re.DOTALL)

_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)


class _Sentinel:
    """Marker objects returned by transformer rules."""


class _Prelude(_Sentinel):
    def __init__(self, text: str, position: Position):
        self.text = text
        self.position = position


class _Statement(_Sentinel):
    """A prelude with an optional block of child statements."""

    def __init__(self, prelude: _Prelude, children: list[_Statement] | None = None):
        self.prelude = prelude
        self.children = children

    @property
    def has_block(self) -> bool:
        return self.children is not None


def _flatten(items: list[Token | list[Token]]) -> list[Token]:
    tokens: list[Token] = []
    for item in items:
        if isinstance(item, list):
            tokens.extend(item)
        else:
            tokens.append(item)
    return tokens


class StylesheetTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into intermediate statement objects.

    Prelude text is rebuilt from its tokens and the source between them,
    so the transformer is given the source it was parsed from.
    """

    def __init__(self, source: str):
        super().__init__()
        self._source = source

    def group(self, items: list[Token | list[Token]]) -> list[Token]:
        return _flatten(items)

    def prelude(self, items: list[Token | list[Token]]) -> _Prelude:
        tokens = _flatten(items)
        parts = [str(tokens[0])]
        for prev, token in zip(tokens, tokens[1:]):
            gap = self._source[prev.end_pos : token.start_pos]
            if gap and not gap.isspace():
                # only whitespace and comments lie between tokens
                gap = " "
            parts.append(gap)
            parts.append(str(token))
        first = tokens[0]
        return _Prelude(
            "".join(parts).strip(),
            Position(line=first.line or 1, column=first.column or 1),
        )

    def block(self, items: list[_Statement]) -> list[_Statement]:
        return [item for item in items if isinstance(item, _Statement)]

    def nested(self, items: list[object]) -> _Statement:
        prelude, children = items
        return _Statement(prelude, children)  # type: ignore[arg-type]

    def terminated(self, items: list[object]) -> _Statement:
        return _Statement(items[0])  # type: ignore[arg-type]

    def tail(self, items: list[object]) -> _Statement:
        return _Statement(items[0])  # type: ignore[arg-type]

    def start(self, items: list[object]) -> list[_Statement]:
        return [item for item in items if isinstance(item, _Statement)]


def _node_attrs(statement: _Statement) -> tuple[NodeKind, dict[str, object]]:
    """Classify a statement and return the node kind plus its fields."""
    prelude = statement.prelude
    attrs: dict[str, object] = {
        "position": prelude.position,
        "has_block": statement.has_block,
    }

    if prelude.text.startswith("@"):
        match = _AT_RULE_RE.match(prelude.text)
        if match is None:
            raise ParseError(
                "At-rule without name", prelude.position.line, prelude.position.column
            )
        attrs["name"] = match.group("name")
        attrs["params"] = match.group("params").strip()
        return NodeKind.AT_RULE, attrs

    if statement.has_block:
        attrs["selector"] = prelude.text
        return NodeKind.RULE, attrs

    prop, sep, value = prelude.text.partition(":")
    if not sep or not prop.strip():
        raise ParseError(
            f"Unknown word {prelude.text!r}",
            prelude.position.line,
            prelude.position.column,
        )
    important = _IMPORTANT_RE.search(value)
    if important:
        value = value[: important.start()]
        attrs["important"] = True
    attrs["prop"] = prop.strip()
    attrs["value"] = value.strip()
    return NodeKind.DECLARATION, attrs


def _assemble_document(statements: list[_Statement], source_name: str | None) -> Document:
    """Walk the statement objects top-down and fill the node arena."""
    document = Document(source_name=source_name)
    # Stack of (parent, statement); reversed so nodes are added in pre-order.
    pending: list[tuple[Node, _Statement]] = [
        (document.root, stmt) for stmt in reversed(statements)
    ]
    while pending:
        parent, stmt = pending.pop()
        kind, attrs = _node_attrs(stmt)
        node = document.add_node(kind, parent, **attrs)
        if stmt.children:
            pending.extend((node, child) for child in reversed(stmt.children))
    return document


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        start="start",
    )


def _describe(exc: LarkError) -> str:
    if isinstance(exc, UnexpectedCharacters):
        return f"Unexpected character {exc.char!r}"
    if isinstance(exc, UnexpectedToken):
        if exc.token.type == "$END":
            return "Unexpected end of input, unclosed block"
        return f"Unexpected {str(exc.token)!r}"
    return str(exc)


def parse_stylesheet(source: str, source_name: str | None = None) -> Document:
    """Parse stylesheet source text into a Document.

    Raises :class:`ParseError` with the offending line and column when the
    source is not well formed (unbalanced braces or parentheses,
    unterminated strings or comments, declarations without a colon).
    ``/* */`` and ``//`` comments are skipped.
    """
    try:
        tree = _parser().parse(source)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        if line is not None and line < 1:
            line = column = None
        raise ParseError(_describe(e), line=line, column=column) from e
    statements = StylesheetTransformer(source).transform(tree)
    return _assemble_document(statements, source_name)
