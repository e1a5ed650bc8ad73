"""Tests for attribute parsing and value-shape resolution."""

from __future__ import annotations

from slotml.ast import (
    BooleanProp,
    Element,
    ExpressionProp,
    MixedProp,
    Root,
    SlotPart,
    SpreadProp,
    StaticPart,
    StaticProp,
)
from slotml.lexer import tokenize
from slotml.parser import Parser


def props_of(root: Root) -> tuple:
    return root.children[0].props


class TestStaticProps:
    def test_double_quoted(self, parse_source):
        root = parse_source('<div id="app"></div>')
        assert props_of(root) == (StaticProp("id", "app", '"'),)

    def test_single_quoted(self, parse_source):
        root = parse_source("<div id='app'></div>")
        assert props_of(root) == (StaticProp("id", "app", "'"),)

    def test_empty_quoted_value(self, parse_source):
        root = parse_source('<a href=""></a>')
        assert props_of(root) == (StaticProp("href", "", '"'),)

    def test_equals_without_value(self, parse_source):
        root = parse_source("<a href=></a>")
        assert props_of(root) == (StaticProp("href", "", None),)

    def test_value_keeps_whitespace(self, parse_source):
        root = parse_source('<a title="  two  words "></a>')
        assert props_of(root)[0].value == "  two  words "


class TestBooleanProps:
    def test_boolean(self, parse_source):
        root = parse_source("<input checked />")
        assert root == Root((Element("input", (BooleanProp("checked"),), (), True),))

    def test_boolean_value_is_true(self):
        assert BooleanProp("checked").value is True

    def test_boolean_between_others(self, parse_source):
        root = parse_source('<input a="1" disabled b="2" />')
        assert [type(p) for p in props_of(root)] == [StaticProp, BooleanProp, StaticProp]


class TestExpressionProps:
    def test_unquoted_slot(self, parse_source):
        root = parse_source("<div id=${id}></div>")
        assert props_of(root) == (ExpressionProp("id", 0),)

    def test_double_quoted_slot(self, parse_source):
        root = parse_source('<div id="${id}"></div>')
        assert props_of(root) == (ExpressionProp("id", 0),)

    def test_single_quoted_slot(self, parse_source):
        root = parse_source("<div id='${id}'></div>")
        assert props_of(root) == (ExpressionProp("id", 0),)

    def test_unquoted_takes_one_slot(self, parse_source):
        root = parse_source("<div a=${x}${y}></div>")
        assert props_of(root) == (ExpressionProp("a", 0), SpreadProp(1))


class TestMixedProps:
    def test_static_then_slot(self, parse_source):
        root = parse_source('<div class="btn ${active}"></div>')
        assert props_of(root) == (
            MixedProp("class", (StaticPart("btn "), SlotPart(0)), '"'),
        )

    def test_single_quotes_recorded(self, parse_source):
        root = parse_source("<div class='btn ${active}'></div>")
        assert props_of(root)[0].quote_char == "'"

    def test_two_slots_with_whitespace(self, parse_source):
        root = parse_source('<div class="${a}  ${b}"></div>')
        assert props_of(root) == (
            MixedProp("class", (SlotPart(0), StaticPart("  "), SlotPart(1)), '"'),
        )

    def test_adjacent_slots(self, parse_source):
        root = parse_source('<div class="${a}${b}"></div>')
        assert props_of(root)[0].parts == (SlotPart(0), SlotPart(1))

    def test_static_both_sides(self, parse_source):
        root = parse_source('<p style="width: ${w}px; height: ${h}px"></p>')
        assert props_of(root)[0].parts == (
            StaticPart("width: "),
            SlotPart(0),
            StaticPart("px; height: "),
            SlotPart(1),
            StaticPart("px"),
        )

    def test_adjacent_static_fragments_coalesced(self):
        # Two ATTRIBUTE_VALUE tokens only meet when segments join without a slot
        tokens = tokenize(['<a b="x', 'y"></a>'], 0)
        root = Parser(tokens).parse()
        assert props_of(root) == (StaticProp("b", "xy", '"'),)


class TestSpreadProps:
    def test_spread_alone(self, parse_source):
        root = parse_source("<div ${props} />")
        assert root == Root((Element("div", (SpreadProp(0),), (), True),))

    def test_spread_between_props(self, parse_source):
        root = parse_source('<div a="x" ${rest} b></div>')
        assert props_of(root) == (
            StaticProp("a", "x", '"'),
            SpreadProp(0),
            BooleanProp("b"),
        )

    def test_multiple_spreads(self, parse_source):
        root = parse_source("<div ${a} ${b}></div>")
        assert props_of(root) == (SpreadProp(0), SpreadProp(1))


class TestMultipleProps:
    def test_mixed_kinds(self, parse_source):
        root = parse_source('<input type="text" value=${value} disabled />')
        assert props_of(root) == (
            StaticProp("type", "text", '"'),
            ExpressionProp("value", 0),
            BooleanProp("disabled"),
        )

    def test_prop_order_follows_source(self, parse_source):
        root = parse_source('<a z="1" y="2" x="3"></a>')
        assert [p.name for p in props_of(root)] == ["z", "y", "x"]
