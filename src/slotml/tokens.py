"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Tag structure (single-character)
    OPEN_TAG = auto()  # < starting a tag
    CLOSE_TAG = auto()  # > ending a tag
    SLASH = auto()  # / inside a tag
    EQUALS = auto()  # =

    # Tag content
    IDENTIFIER = auto()  # ident_char+ (letters, digits, . : _ -)
    QUOTE = auto()  # " or ' bounding an attribute value
    ATTRIBUTE_VALUE = auto()  # static text between quotes

    # Content outside tags
    TEXT = auto()

    # Slots
    EXPRESSION = auto()  # slot outside quotes
    ATTRIBUTE_EXPRESSION = auto()  # slot inside a quoted attribute value


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token.

    ``segment`` and ``offset`` locate the token inside the input segments.
    Slot tokens carry their index in ``slot`` and sit at the end of the
    segment they follow.
    """

    type: TokenType
    value: str = ""
    slot: int | None = None
    segment: int = 0
    offset: int = 0

    @property
    def is_slot(self) -> bool:
        return self.slot is not None

    def describe(self) -> str:
        """Short human-readable form used in error messages."""
        if self.slot is not None:
            return f"{self.type.name} ${{{self.slot}}}"
        if self.type in (TokenType.IDENTIFIER, TokenType.TEXT, TokenType.ATTRIBUTE_VALUE):
            return f"{self.type.name} {self.value!r}"
        return self.type.name


_IDENT_SPECIAL = frozenset(".:_-")


def is_ident_char(ch: str) -> bool:
    """Return True if ch may appear in a tag or attribute name."""
    return ch.isascii() and (ch.isalnum() or ch in _IDENT_SPECIAL)


def is_tag_start(text: str, pos: int) -> bool:
    """Return True if the '<' at text[pos] opens or closes a tag."""
    if pos + 1 >= len(text):
        return False
    nxt = text[pos + 1]
    return nxt == "/" or is_ident_char(nxt)
