"""Human-readable AST and token dumps."""

from __future__ import annotations

import sys
from typing import TextIO

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
from slotml.tokens import Token


def dump_ast(root: Root, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    file.write("Root\n")
    for child in root.children:
        _dump_node(child, 1, file)


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one token per line as ``segment:offset TYPE value``."""
    for tok in tokens:
        file.write(f"{tok.segment}:{tok.offset} {tok.describe()}\n")


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_node(node: Element | Text | Expression, depth: int, f: TextIO) -> None:
    if isinstance(node, Text):
        f.write(f"{_indent(depth)}Text({node.value!r})\n")
    elif isinstance(node, Expression):
        f.write(f"{_indent(depth)}Expression(${{{node.slot}}})\n")
    elif isinstance(node, Element):
        closing = " /" if node.self_closing else ""
        f.write(f"{_indent(depth)}Element <{node.name}{closing}>\n")
        for prop in node.props:
            f.write(f"{_indent(depth + 1)}{_format_prop(prop)}\n")
        for child in node.children:
            _dump_node(child, depth + 1, f)


def _format_prop(prop: Prop) -> str:
    if isinstance(prop, BooleanProp):
        return f"Prop {prop.name}"
    if isinstance(prop, StaticProp):
        return f"Prop {prop.name}={prop.value!r}"
    if isinstance(prop, ExpressionProp):
        return f"Prop {prop.name}=${{{prop.slot}}}"
    if isinstance(prop, SpreadProp):
        return f"Spread ${{{prop.slot}}}"
    if isinstance(prop, MixedProp):
        parts = " + ".join(
            f"${{{p.slot}}}" if isinstance(p, SlotPart) else repr(p.text) for p in prop.parts
        )
        return f"Prop {prop.name}=[{parts}]"
    raise TypeError(f"unknown prop {type(prop).__name__}")
