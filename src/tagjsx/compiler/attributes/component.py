"""Attributes of component references, compiled to call properties."""

from typing import Callable, List

from tagjsx.compiler.ast_nodes import (
    BooleanLiteral,
    ExpressionKind,
    JSXAttribute,
    JSXExpressionContainer,
    JSXNode,
    Property,
    StringValue,
    string_literal,
)
from tagjsx.compiler.attributes.base import AttributeCompiler


class ComponentAttributeCompiler(AttributeCompiler):
    """Produces ``name: value`` properties for a ``Component.for()`` call.

    ``reserve_nested`` is called for a prop whose value is a JSX element.
    It compiles the tree once (so errors surface and its fragment ids are
    taken) while the property keeps the live expression; the tree is compiled
    for real as its own root unit when the host renders the property.
    """

    def __init__(self, reserve_nested: Callable[[JSXNode], None]) -> None:
        self.reserve_nested = reserve_nested

    def compile(self, attr: JSXAttribute) -> List[Property]:
        name = self._parse(attr)
        value = attr.value

        if value is None:
            if name.is_event:
                raise self._valueless_event(attr)
            if name.plain:
                # valueless props default to true, like React
                return [Property(name.plain, BooleanLiteral(True))]
            raise self._untransformable(attr)

        if isinstance(value, StringValue):
            if name.is_event:
                raise self._string_event(attr)
            if name.plain:
                return [Property(name.plain, string_literal(value.raw))]

        if isinstance(value, JSXExpressionContainer):
            expression = value.expression
            if expression is None:
                raise self._error(
                    attr, "JSX attributes must only be assigned a non-empty expression"
                )
            if name.is_event:
                return [Property(f"on{name.event}", expression)]
            if name.plain:
                # fragments stay live expressions and reserve nothing
                if (
                    expression.kind is ExpressionKind.JSX_ELEMENT
                    and expression.jsx is not None
                ):
                    self.reserve_nested(expression.jsx)
                return [Property(name.plain, expression)]

        raise self._untransformable(attr)
