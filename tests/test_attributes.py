from typing import List

import pytest

from tagjsx.compiler.ast_nodes import (
    BooleanLiteral,
    Expression,
    ExpressionKind,
    JSXAttribute,
    JSXElement,
    JSXExpressionContainer,
    JSXIdentifierName,
    JSXNode,
    Literal,
    Property,
    Slot,
    StringValue,
    UnsupportedNode,
    string_literal,
)
from tagjsx.compiler.attributes.base import parse_attribute_name
from tagjsx.compiler.attributes.component import ComponentAttributeCompiler
from tagjsx.compiler.attributes.markup import MarkupAttributeCompiler
from tagjsx.compiler.exceptions import JSXCompileError


def expr(source: str, kind: ExpressionKind = ExpressionKind.IDENTIFIER) -> Expression:
    return Expression(kind=kind, source=source)


def container(source: str) -> JSXExpressionContainer:
    return JSXExpressionContainer(expr(source))


class TestAttributeNames:
    def test_plain_name(self) -> None:
        name = parse_attribute_name("value")
        assert name.plain == "value"
        assert not name.is_event

    def test_react_style_event(self) -> None:
        name = parse_attribute_name("onClick")
        assert name.is_event
        assert name.event == "Click"

    def test_dashed_event(self) -> None:
        assert parse_attribute_name("on-input").event == "input"

    def test_bare_prefix_is_neither(self) -> None:
        name = parse_attribute_name("on")
        assert not name.is_event
        assert name.plain is None


class TestMarkupAttributes:
    def setup_method(self) -> None:
        self.compiler = MarkupAttributeCompiler()

    def test_string_value_keeps_raw_text(self) -> None:
        parts = self.compiler.compile(JSXAttribute("value", StringValue('"&quot;"')))
        assert parts == [Literal(" "), Literal("value"), Literal("="), Literal('"&quot;"')]

    def test_single_quoted_string(self) -> None:
        parts = self.compiler.compile(JSXAttribute("value", StringValue("'foo'")))
        assert parts[-1] == Literal("'foo'")

    def test_class_name_is_renamed(self) -> None:
        parts = self.compiler.compile(JSXAttribute("className", StringValue('"a"')))
        assert parts[1] == Literal("class")

    def test_expression_value(self) -> None:
        parts = self.compiler.compile(JSXAttribute("value", container("val")))
        assert parts == [Literal(" "), Literal("value"), Literal("="), Slot(expr("val"))]

    def test_boolean_attribute(self) -> None:
        parts = self.compiler.compile(JSXAttribute("disabled"))
        assert parts == [Literal(" "), Literal("disabled")]

    @pytest.mark.parametrize(
        "name,expected", [("onClick", "onclick"), ("on-input", "oninput"), ("onKeyUp", "onkeyup")]
    )
    def test_events_are_lowercased(self, name: str, expected: str) -> None:
        parts = self.compiler.compile(JSXAttribute(name, container("handler")))
        assert parts == [Literal(" "), Literal(expected), Literal("="), Slot(expr("handler"))]

    def test_event_with_string_value(self) -> None:
        with pytest.raises(JSXCompileError, match="Event prop can't be a string literal"):
            self.compiler.compile(JSXAttribute("onClick", StringValue('"alert(1)"')))

    def test_event_without_value(self) -> None:
        with pytest.raises(JSXCompileError, match="Event prop must have a value"):
            self.compiler.compile(JSXAttribute("onClick"))

    def test_empty_expression(self) -> None:
        with pytest.raises(JSXCompileError, match="non-empty expression"):
            self.compiler.compile(JSXAttribute("value", JSXExpressionContainer(None)))

    def test_bare_event_prefix(self) -> None:
        with pytest.raises(JSXCompileError, match="Couldn't transform attribute 'on-'"):
            self.compiler.compile(JSXAttribute("on-", container("x")))

    def test_element_value(self) -> None:
        element = JSXElement(JSXIdentifierName("b"))
        with pytest.raises(JSXCompileError, match="Couldn't transform attribute 'value'"):
            self.compiler.compile(JSXAttribute("value", element))

    def test_spread_attribute(self) -> None:
        spread = UnsupportedNode("JSXSpreadAttribute", "{...props}", line=3, column=5)
        with pytest.raises(JSXCompileError, match="Unsupported attribute type") as info:
            self.compiler.compile(spread)  # type: ignore[arg-type]
        assert info.value.line == 3
        assert info.value.column == 5


class TestComponentAttributes:
    def setup_method(self) -> None:
        self.reserved: List[JSXNode] = []
        self.compiler = ComponentAttributeCompiler(self.reserved.append)

    def test_string_prop(self) -> None:
        props = self.compiler.compile(JSXAttribute("prop", StringValue('"test"')))
        assert props == [Property("prop", string_literal('"test"'))]

    def test_expression_prop(self) -> None:
        props = self.compiler.compile(JSXAttribute("items", container("list")))
        assert props == [Property("items", expr("list"))]

    def test_valueless_prop_is_true(self) -> None:
        props = self.compiler.compile(JSXAttribute("disabled"))
        assert props == [Property("disabled", BooleanLiteral(True))]

    def test_event_keeps_case(self) -> None:
        props = self.compiler.compile(JSXAttribute("onClick", container("console.log")))
        assert props == [Property("onClick", expr("console.log"))]

    def test_dashed_event(self) -> None:
        props = self.compiler.compile(JSXAttribute("on-change", container("cb")))
        assert props[0].key == "onchange"

    def test_class_name_is_not_renamed(self) -> None:
        props = self.compiler.compile(JSXAttribute("className", StringValue('"x"')))
        assert props[0].key == "className"

    def test_event_with_string_value(self) -> None:
        with pytest.raises(JSXCompileError, match="Event prop can't be a string literal"):
            self.compiler.compile(JSXAttribute("onClick", StringValue('"x"')))

    def test_jsx_value_is_reserved_and_kept(self) -> None:
        nested = JSXElement(JSXIdentifierName("Element"))
        value = Expression(ExpressionKind.JSX_ELEMENT, "<Element/>", jsx=nested)
        props = self.compiler.compile(JSXAttribute("render", JSXExpressionContainer(value)))

        assert self.reserved == [nested]
        assert props == [Property("render", value)]

    def test_plain_expression_is_not_reserved(self) -> None:
        self.compiler.compile(JSXAttribute("value", container("my")))
        assert self.reserved == []
