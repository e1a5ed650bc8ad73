"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from slotml.ast import (
    Element,
    Expression,
    ExpressionProp,
    MixedProp,
    Root,
    SlotPart,
    SpreadProp,
)
from slotml.config import ParseOptions
from slotml.lexer import tokenize
from slotml.parser import parse_template
from slotml.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes segments given as positional strings."""

    def _lex(*segments: str, raw_text: tuple[str, ...] = ()) -> list[Token]:
        return tokenize(list(segments), raw_text_elements=raw_text)

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses ${...} marked template text into a Root."""

    def _parse(source: str, options: ParseOptions | None = None) -> Root:
        return parse_template(source, options)

    return _parse


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def find_tokens(tokens: list[Token], tt: TokenType) -> list[Token]:
    """Return all tokens of the given type."""
    return [t for t in tokens if t.type == tt]


def iter_elements(node: Root | Element):
    """Yield every Element below node, depth first in source order."""
    for child in node.children:
        if isinstance(child, Element):
            yield child
            yield from iter_elements(child)


def slot_refs(node: Root | Element) -> list[int]:
    """Collect every slot index referenced below node, in source order."""
    refs: list[int] = []
    for child in node.children:
        if isinstance(child, Expression):
            refs.append(child.slot)
        elif isinstance(child, Element):
            for prop in child.props:
                if isinstance(prop, (ExpressionProp, SpreadProp)):
                    refs.append(prop.slot)
                elif isinstance(prop, MixedProp):
                    refs.extend(p.slot for p in prop.parts if isinstance(p, SlotPart))
            refs.extend(slot_refs(child))
    return refs
