"""Markup renderer: writes an AST back out with slot values substituted."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from slotml.ast import (
    BooleanProp,
    Element,
    Expression,
    ExpressionProp,
    MixedProp,
    Prop,
    Root,
    SlotPart,
    SpreadProp,
    StaticProp,
    Text,
)
from slotml.config import ParseOptions
from slotml.tokens import is_ident_char


def render(root: Root, values: Sequence[Any], options: ParseOptions | None = None) -> str:
    """Render *root* to markup, taking slot *i* from ``values[i]``.

    Literal text and static attribute values are written verbatim; slot
    values are escaped. ``None``, ``False`` and ``True`` render nothing as
    children; lists and tuples render each item.
    """
    void = options.void_elements if options is not None else frozenset()
    parts: list[str] = []
    for child in root.children:
        _render_node(child, values, void, parts)
    return "".join(parts)


def _render_node(
    node: Element | Text | Expression,
    values: Sequence[Any],
    void: frozenset[str],
    out: list[str],
) -> None:
    if isinstance(node, Text):
        out.append(node.value)
    elif isinstance(node, Expression):
        out.append(_render_value(values[node.slot]))
    elif isinstance(node, Element):
        out.append(f"<{node.name}")
        for prop in node.props:
            out.append(_render_prop(prop, values))
        if node.self_closing:
            out.append(" />")
            return
        out.append(">")
        if node.name in void and not node.children:
            return
        for child in node.children:
            _render_node(child, values, void, out)
        out.append(f"</{node.name}>")


def _render_prop(prop: Prop, values: Sequence[Any]) -> str:
    if isinstance(prop, BooleanProp):
        return f" {prop.name}"
    if isinstance(prop, StaticProp):
        quote = prop.quote_char or '"'
        return f" {prop.name}={quote}{prop.value}{quote}"
    if isinstance(prop, ExpressionProp):
        return _render_attr(prop.name, values[prop.slot])
    if isinstance(prop, SpreadProp):
        mapping = values[prop.slot]
        if not isinstance(mapping, Mapping):
            raise TypeError(
                f"spread slot {prop.slot} needs a mapping, got {type(mapping).__name__}"
            )
        return "".join(_render_attr(_attr_name(k, prop.slot), v) for k, v in mapping.items())
    if isinstance(prop, MixedProp):
        quote = prop.quote_char or '"'
        text = "".join(
            _escape_attr(_stringify(values[p.slot]), quote) if isinstance(p, SlotPart) else p.text
            for p in prop.parts
        )
        return f" {prop.name}={quote}{text}{quote}"
    raise TypeError(f"unknown prop {type(prop).__name__}")


def _attr_name(key: Any, slot: int) -> str:
    name = str(key)
    if not name or not all(is_ident_char(ch) for ch in name):
        raise ValueError(f"spread slot {slot} has invalid attribute name {name!r}")
    return name


def _render_attr(name: str, value: Any) -> str:
    if value is True:
        return f" {name}"
    if value is None or value is False:
        return ""
    escaped = _escape_attr(str(value), '"')
    return f' {name}="{escaped}"'


def _render_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "".join(_render_value(v) for v in value)
    return _escape_html(_stringify(value))


def _stringify(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    return str(value)


# ---------------------------------------------------------------------------
# HTML escaping
# ---------------------------------------------------------------------------


def _escape_html(text: str) -> str:
    """Escape text for element content."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        else:
            result.append(ch)
    return "".join(result)


def _escape_attr(text: str, quote: str) -> str:
    """Escape text for an attribute value bounded by *quote*."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == quote == '"':
            result.append("&quot;")
        elif ch == quote == "'":
            result.append("&#x27;")
        else:
            result.append(ch)
    return "".join(result)
