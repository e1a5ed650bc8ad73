"""slotml parser: converts a token stream into an AST."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from slotml.ast import (
    BooleanProp,
    Element,
    Expression,
    ExpressionProp,
    MixedProp,
    Node,
    Prop,
    Root,
    SlotPart,
    SpreadProp,
    StaticPart,
    StaticProp,
    Text,
)
from slotml.config import ParseOptions
from slotml.errors import ParseError
from slotml.lexer import tokenize
from slotml.template import Template, split_template
from slotml.tokens import Position, Token, TokenType

logger = logging.getLogger(__name__)


class Parser:
    """Recursive descent parser for slotml token streams."""

    def __init__(
        self,
        tokens: list[Token],
        template: Template | None = None,
        options: ParseOptions | None = None,
    ) -> None:
        self._tokens = tokens
        self._template = template
        self._options = options if options is not None else ParseOptions()
        self._pos = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> Token | None:
        idx = self._pos + offset
        if idx < len(self._tokens):
            return self._tokens[idx]
        return None

    def _at(self, *types: TokenType) -> bool:
        tok = self._peek()
        return tok is not None and tok.type in types

    def _at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def _at_closing_tag(self) -> bool:
        if not self._at(TokenType.OPEN_TAG):
            return False
        nxt = self._peek(1)
        return nxt is not None and nxt.type == TokenType.SLASH

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _expect(self, tt: TokenType, context: str) -> Token:
        tok = self._peek()
        if tok is None or tok.type != tt:
            found = "end of input" if tok is None else tok.describe()
            raise self._error(f"expected {tt.name} {context}, found {found}", tt, tok)
        return self._advance()

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def parse(self) -> Root:
        try:
            children = self._parse_children(self._options.preserve_whitespace)
        except RecursionError:
            # Three frames per nesting level
            raise self._error("elements nested too deeply", None, self._peek()) from None

        if not self._at_end():
            # Only a closing tag stops the top-level loop early
            tok = self._peek()
            raise self._error("unexpected closing tag with no open element", None, tok)

        logger.debug(
            "parsed %d top-level node(s) from %d token(s)", len(children), len(self._tokens)
        )
        return Root(children)

    def _parse_children(self, preserve_whitespace: bool) -> tuple[Node, ...]:
        nodes: list[Node] = []
        while not self._at_end() and not self._at_closing_tag():
            nodes.append(self._parse_node())

        nodes = _coalesce_text(nodes)
        if not preserve_whitespace:
            nodes = _trim_whitespace(nodes)
        return tuple(nodes)

    def _parse_node(self) -> Node:
        tok = self._peek()
        assert tok is not None

        if tok.type == TokenType.TEXT:
            self._advance()
            return Text(tok.value)

        if tok.type == TokenType.EXPRESSION:
            self._advance()
            assert tok.slot is not None
            return Expression(tok.slot)

        if tok.type == TokenType.OPEN_TAG:
            return self._parse_element()

        raise self._error(f"unexpected {tok.describe()} in content", None, tok)

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def _parse_element(self) -> Element:
        self._advance()  # consume OPEN_TAG
        name = self._expect(TokenType.IDENTIFIER, "for element name after '<'").value
        props = self._parse_props()

        if self._at(TokenType.SLASH):
            self._advance()
            self._expect(TokenType.CLOSE_TAG, f"after '/' in <{name}>")
            return Element(name, props, (), True)

        self._expect(TokenType.CLOSE_TAG, f"to end tag <{name}>")

        if name in self._options.void_elements:
            return Element(name, props, ())

        preserve = (
            self._options.preserve_whitespace or name in self._options.raw_text_elements
        )
        children = self._parse_children(preserve)
        self._parse_closing_tag(name)
        return Element(name, props, children)

    def _parse_closing_tag(self, name: str) -> None:
        self._expect(TokenType.OPEN_TAG, f"for closing tag </{name}>")
        self._expect(TokenType.SLASH, f"for closing tag </{name}>")
        close = self._expect(TokenType.IDENTIFIER, f"for closing tag </{name}>")
        if self._options.strict_closing and close.value != name:
            raise self._error(
                f"mismatched closing tag: expected </{name}>, found </{close.value}>",
                TokenType.IDENTIFIER,
                close,
            )
        self._expect(TokenType.CLOSE_TAG, f"to end closing tag </{close.value}>")

    # ------------------------------------------------------------------
    # Props
    # ------------------------------------------------------------------

    def _parse_props(self) -> tuple[Prop, ...]:
        props: list[Prop] = []
        while True:
            tok = self._peek()
            if tok is None:
                break
            if tok.type == TokenType.EXPRESSION:
                self._advance()
                assert tok.slot is not None
                props.append(SpreadProp(tok.slot))
            elif tok.type == TokenType.IDENTIFIER:
                props.append(self._parse_prop())
            else:
                break
        return tuple(props)

    def _parse_prop(self) -> Prop:
        name = self._advance().value
        if not self._at(TokenType.EQUALS):
            return BooleanProp(name)
        self._advance()  # consume EQUALS

        parts: list[StaticPart | SlotPart] = []
        quote_char: str | None = None

        if self._at(TokenType.QUOTE):
            quote_char = self._advance().value
            while self._at(TokenType.ATTRIBUTE_VALUE, TokenType.ATTRIBUTE_EXPRESSION):
                tok = self._advance()
                if tok.type == TokenType.ATTRIBUTE_VALUE:
                    parts.append(StaticPart(tok.value))
                else:
                    assert tok.slot is not None
                    parts.append(SlotPart(tok.slot))
            self._expect(TokenType.QUOTE, f"to close the value of {name!r}")
        elif self._at(TokenType.EXPRESSION):
            # Unquoted: exactly one slot; a following slot is a spread
            tok = self._advance()
            assert tok.slot is not None
            parts.append(SlotPart(tok.slot))

        return _resolve_prop(name, parts, quote_char)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _error(self, message: str, expected: TokenType | None, tok: Token | None) -> ParseError:
        template = self._template
        if template is None:
            source = ""
            position = Position(1, 1, 0) if tok is None else Position(1, tok.offset + 1, tok.offset)
        else:
            source = template.source
            if tok is None:
                position = template.end_position()
            else:
                position = template.locate(tok.segment, tok.offset)
        return ParseError(message, expected, tok, position, source)


def _resolve_prop(
    name: str, parts: list[StaticPart | SlotPart], quote_char: str | None
) -> StaticProp | ExpressionProp | MixedProp:
    """Pick the prop shape for a collected attribute value."""
    meaningful = _coalesce_parts(p for p in parts if not (isinstance(p, StaticPart) and not p.text))

    if not meaningful:
        return StaticProp(name, "", quote_char)
    if len(meaningful) == 1:
        part = meaningful[0]
        if isinstance(part, StaticPart):
            return StaticProp(name, part.text, quote_char)
        return ExpressionProp(name, part.slot)
    return MixedProp(name, tuple(meaningful), quote_char)


def _coalesce_parts(parts: Iterable[StaticPart | SlotPart]) -> list[StaticPart | SlotPart]:
    """Merge adjacent static fragments of an attribute value."""
    result: list[StaticPart | SlotPart] = []
    for part in parts:
        if isinstance(part, StaticPart) and result and isinstance(result[-1], StaticPart):
            result[-1] = StaticPart(result[-1].text + part.text)
        else:
            result.append(part)
    return result


def _coalesce_text(nodes: list[Node]) -> list[Node]:
    """Coalesce adjacent Text nodes into single nodes."""
    result: list[Node] = []
    for node in nodes:
        if isinstance(node, Text) and result and isinstance(result[-1], Text):
            result[-1] = Text(result[-1].value + node.value)
        else:
            result.append(node)
    return result


def _trim_whitespace(nodes: list[Node]) -> list[Node]:
    """Drop whitespace-only text at the edges of a child list or next to an element."""
    last = len(nodes) - 1
    result: list[Node] = []
    for i, node in enumerate(nodes):
        if isinstance(node, Text) and not node.value.strip():
            if i == 0 or i == last:
                continue
            if isinstance(nodes[i - 1], Element) or isinstance(nodes[i + 1], Element):
                continue
        result.append(node)
    return result


def parse(
    segments: Sequence[str],
    slot_count: int | None = None,
    options: ParseOptions | None = None,
) -> Root:
    """Convenience function: parse template segments and return a Root AST.

    Slot *i* lies between ``segments[i]`` and ``segments[i + 1]``.
    """
    if slot_count is not None and slot_count != len(segments) - 1:
        raise ValueError(
            f"slot_count must be len(segments) - 1 ({len(segments) - 1}), got {slot_count}"
        )
    return parse_template(Template.from_segments(segments), options)


def parse_template(source: str | Template, options: ParseOptions | None = None) -> Root:
    """Parse text containing ``${...}`` slot markers, or an already split Template."""
    template = split_template(source) if isinstance(source, str) else source
    if options is None:
        options = ParseOptions()
    tokens = tokenize(template.segments, template.slot_count, options.raw_text_elements)
    return Parser(tokens, template, options).parse()
