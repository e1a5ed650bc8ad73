"""slotml lexer: converts template segments into a flat token stream."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from slotml.tokens import Token, TokenType, is_ident_char, is_tag_start

logger = logging.getLogger(__name__)


class Lexer:
    """Tokenize template segments into a stream of Token objects.

    Slot *i* sits between ``segments[i]`` and ``segments[i + 1]``. The lexer
    never raises: malformed markup produces a token stream the parser rejects.
    """

    def __init__(
        self,
        segments: Sequence[str],
        slot_count: int | None = None,
        raw_text_elements: Iterable[str] = (),
    ) -> None:
        self._segments = segments
        if slot_count is None:
            slot_count = max(len(segments) - 1, 0)
        self._slot_count = min(slot_count, max(len(segments) - 1, 0))
        self._raw_text_elements = frozenset(raw_text_elements)
        self._tokens: list[Token] = []

        # State carried across segment boundaries
        self._in_quotes = False
        self._quote_char = ""
        self._tag_depth = 0
        self._pending_raw: str | None = None  # raw-text element whose start tag is open
        self._raw_tag: str | None = None  # raw-text element whose body is being read

        # Per-segment cursor
        self._segment = 0
        self._text = ""
        self._lower = ""
        self._pos = 0

    def tokenize(self) -> list[Token]:
        """Tokenize every segment and return the token list."""
        for index, text in enumerate(self._segments):
            self._segment = index
            self._text = text
            self._lower = text.lower() if self._raw_text_elements else text
            self._pos = 0
            self._lex_segment()

            if index < self._slot_count:
                tt = TokenType.ATTRIBUTE_EXPRESSION if self._in_quotes else TokenType.EXPRESSION
                self._tokens.append(Token(tt, "", index, index, len(text)))

        logger.debug(
            "tokenized %d segment(s) into %d token(s)", len(self._segments), len(self._tokens)
        )
        return self._tokens

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _emit(self, tt: TokenType, value: str, start: int) -> Token:
        tok = Token(tt, value, None, self._segment, start)
        self._tokens.append(tok)
        return tok

    def _emit_char(self, tt: TokenType) -> Token:
        start = self._pos
        self._pos += 1
        return self._emit(tt, self._text[start], start)

    def _previous_type(self) -> TokenType | None:
        if self._tokens:
            return self._tokens[-1].type
        return None

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _lex_segment(self) -> None:
        text = self._text
        while self._pos < len(text):
            if self._raw_tag is not None:
                self._lex_raw_text()
                continue

            if self._in_quotes:
                self._lex_quoted()
                continue

            ch = text[self._pos]

            if ch == "<" and is_tag_start(text, self._pos):
                self._emit_char(TokenType.OPEN_TAG)
                self._tag_depth += 1
                continue

            if ch == ">" and self._tag_depth > 0:
                self._emit_char(TokenType.CLOSE_TAG)
                self._tag_depth -= 1
                if self._pending_raw is not None and self._tag_depth == 0:
                    self._raw_tag = self._pending_raw
                self._pending_raw = None
                continue

            if self._tag_depth > 0:
                self._lex_tag()
                continue

            self._lex_text()

    # ------------------------------------------------------------------
    # Inside a tag
    # ------------------------------------------------------------------

    def _lex_tag(self) -> None:
        ch = self._text[self._pos]

        if ch.isspace():
            self._pos += 1
            return

        if ch in "\"'":
            self._emit_char(TokenType.QUOTE)
            self._in_quotes = True
            self._quote_char = ch
            return

        if ch == "/":
            self._emit_char(TokenType.SLASH)
            self._pending_raw = None
            return

        if ch == "=":
            self._emit_char(TokenType.EQUALS)
            return

        if is_ident_char(ch):
            self._lex_identifier()
            return

        # Stray character inside a tag
        self._pos += 1

    def _lex_identifier(self) -> None:
        text = self._text
        start = self._pos
        while self._pos < len(text) and is_ident_char(text[self._pos]):
            self._pos += 1
        name = text[start : self._pos]
        opens_element = self._previous_type() == TokenType.OPEN_TAG
        self._emit(TokenType.IDENTIFIER, name, start)
        if opens_element and name in self._raw_text_elements:
            self._pending_raw = name

    def _lex_quoted(self) -> None:
        text = self._text
        start = self._pos
        end = text.find(self._quote_char, start)
        if end == -1:
            end = len(text)
        if end > start:
            self._emit(TokenType.ATTRIBUTE_VALUE, text[start:end], start)
        self._pos = end
        if end < len(text):
            self._emit_char(TokenType.QUOTE)
            self._in_quotes = False
            self._quote_char = ""

    # ------------------------------------------------------------------
    # Outside tags
    # ------------------------------------------------------------------

    def _lex_text(self) -> None:
        text = self._text
        start = self._pos
        self._pos += 1
        while self._pos < len(text):
            if text[self._pos] == "<" and is_tag_start(text, self._pos):
                break
            self._pos += 1
        self._emit(TokenType.TEXT, text[start : self._pos], start)

    def _lex_raw_text(self) -> None:
        """Emit the body of a raw-text element up to its closing tag."""
        assert self._raw_tag is not None
        start = self._pos
        end = self._find_raw_end(self._raw_tag.lower(), start)
        if end == -1:
            end = len(self._text)
        else:
            self._raw_tag = None
        if end > start:
            self._emit(TokenType.TEXT, self._text[start:end], start)
        self._pos = end

    def _find_raw_end(self, name: str, start: int) -> int:
        needle = "</" + name
        idx = self._lower.find(needle, start)
        while idx != -1:
            after = idx + len(needle)
            if after >= len(self._lower) or not is_ident_char(self._lower[after]):
                return idx
            idx = self._lower.find(needle, idx + 1)
        return -1


def tokenize(
    segments: Sequence[str],
    slot_count: int | None = None,
    raw_text_elements: Iterable[str] = (),
) -> list[Token]:
    """Convenience function: tokenize template segments and return the token list."""
    return Lexer(segments, slot_count, raw_text_elements).tokenize()
