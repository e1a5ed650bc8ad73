"""AST node types for parsed slotml templates."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text content, whitespace preserved."""

    value: str


@dataclass(frozen=True, slots=True)
class Expression:
    """Child position filled by the value of a slot."""

    slot: int


@dataclass(frozen=True, slots=True)
class StaticPart:
    """Literal fragment of an interpolated attribute value."""

    text: str


@dataclass(frozen=True, slots=True)
class SlotPart:
    """Slot fragment of an interpolated attribute value."""

    slot: int


@dataclass(frozen=True, slots=True)
class BooleanProp:
    """Attribute present without a value: <input checked>."""

    name: str

    @property
    def value(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class StaticProp:
    """Attribute with a fixed string value."""

    name: str
    value: str
    quote_char: str | None = '"'


@dataclass(frozen=True, slots=True)
class ExpressionProp:
    """Attribute whose value is exactly one slot."""

    name: str
    slot: int


@dataclass(frozen=True, slots=True)
class SpreadProp:
    """Slot standing in for a whole name -> value mapping."""

    slot: int


@dataclass(frozen=True, slots=True)
class MixedProp:
    """Attribute value interleaving static text and slots."""

    name: str
    parts: tuple[StaticPart | SlotPart, ...]
    quote_char: str | None = '"'


Prop = BooleanProp | StaticProp | ExpressionProp | SpreadProp | MixedProp


@dataclass(frozen=True, slots=True)
class Element:
    """A tag with its props and children."""

    name: str
    props: tuple[Prop, ...] = ()
    children: tuple[Element | Text | Expression, ...] = ()
    self_closing: bool = False


Node = Element | Text | Expression


@dataclass(frozen=True, slots=True)
class Root:
    """Root node: the top-level forest of a template."""

    children: tuple[Element | Text | Expression, ...] = ()
