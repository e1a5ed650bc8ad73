"""Plain-data conversion of AST nodes, for JSON output and diffing."""

from __future__ import annotations

from typing import Any

from slotml.ast import (
    BooleanProp,
    Element,
    Expression,
    ExpressionProp,
    MixedProp,
    Root,
    SlotPart,
    SpreadProp,
    StaticPart,
    StaticProp,
    Text,
)


def to_data(node: Any) -> Any:
    """Convert an AST node (or tuple of nodes) to nested dicts and lists."""
    if isinstance(node, tuple):
        return [to_data(n) for n in node]
    if isinstance(node, Root):
        return {"type": "Root", "children": to_data(node.children)}
    if isinstance(node, Element):
        data: dict[str, Any] = {
            "type": "Element",
            "name": node.name,
            "props": to_data(node.props),
            "children": to_data(node.children),
        }
        if node.self_closing:
            data["selfClosing"] = True
        return data
    if isinstance(node, Text):
        return {"type": "Text", "value": node.value}
    if isinstance(node, Expression):
        return {"type": "Expression", "slot": node.slot}
    if isinstance(node, BooleanProp):
        return {"type": "Boolean", "name": node.name, "value": True}
    if isinstance(node, StaticProp):
        return {
            "type": "Static",
            "name": node.name,
            "value": node.value,
            "quoteChar": node.quote_char,
        }
    if isinstance(node, ExpressionProp):
        return {"type": "Expression", "name": node.name, "slot": node.slot}
    if isinstance(node, SpreadProp):
        return {"type": "Spread", "slot": node.slot}
    if isinstance(node, MixedProp):
        return {
            "type": "Mixed",
            "name": node.name,
            "parts": to_data(node.parts),
            "quoteChar": node.quote_char,
        }
    if isinstance(node, StaticPart):
        return {"type": "Static", "value": node.text}
    if isinstance(node, SlotPart):
        return {"type": "Slot", "slot": node.slot}
    raise TypeError(f"cannot serialize {type(node).__name__}")
