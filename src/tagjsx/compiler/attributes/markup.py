"""Attributes of markup tags, compiled to template parts."""

from typing import List

from tagjsx.compiler.ast_nodes import (
    JSXAttribute,
    JSXExpressionContainer,
    Literal,
    Part,
    Slot,
    StringValue,
)
from tagjsx.compiler.attributes.base import AttributeCompiler


class MarkupAttributeCompiler(AttributeCompiler):
    """Produces ``[" ", name, "=", value]`` parts for a markup tag."""

    def compile(self, attr: JSXAttribute) -> List[Part]:
        name = self._parse(attr)
        value = attr.value

        if value is None:
            if name.is_event:
                raise self._valueless_event(attr)
            if name.plain:
                # boolean attribute, rendered bare
                return [Literal(" "), Literal(self._html_name(name.plain))]
            raise self._untransformable(attr)

        if isinstance(value, StringValue):
            if name.is_event:
                raise self._string_event(attr)
            if name.plain:
                # raw source text, entities are left alone
                return [
                    Literal(" "),
                    Literal(self._html_name(name.plain)),
                    Literal("="),
                    Literal(value.raw),
                ]

        if isinstance(value, JSXExpressionContainer):
            if value.expression is None:
                raise self._error(
                    attr, "JSX attributes must only be assigned a non-empty expression"
                )
            if name.is_event:
                event = f"on{name.event.lower()}"  # type: ignore[union-attr]
                return [Literal(" "), Literal(event), Literal("="), Slot(value.expression)]
            if name.plain:
                return [
                    Literal(" "),
                    Literal(self._html_name(name.plain)),
                    Literal("="),
                    Slot(value.expression),
                ]

        raise self._untransformable(attr)

    def _html_name(self, name: str) -> str:
        # React style className
        return "class" if name == "className" else name
