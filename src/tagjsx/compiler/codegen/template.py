"""Template code generation: JSX trees to tagged template constructs."""

import logging
from typing import List, Optional, Sequence, Union

from tagjsx.compiler.ast_nodes import (
    ComponentCall,
    DynamicTag,
    Expression,
    ExpressionKind,
    JSXAttribute,
    JSXChild,
    JSXElement,
    JSXExpressionContainer,
    JSXFragment,
    JSXNode,
    JSXText,
    Literal,
    OutputExpression,
    Part,
    Property,
    Slot,
    StringValue,
    TaggedTemplate,
    TemplateLiteral,
    UnsupportedNode,
    string_literal,
)
from tagjsx.compiler.attributes.base import AS_ATTRIBUTE, KEY_ATTRIBUTE
from tagjsx.compiler.attributes.component import ComponentAttributeCompiler
from tagjsx.compiler.attributes.markup import MarkupAttributeCompiler
from tagjsx.compiler.codegen.assembler import TemplateMode, assemble
from tagjsx.compiler.exceptions import JSXCompileError
from tagjsx.compiler.state import CompilerState
from tagjsx.compiler.tags import TagInfo, classify_tag

logger = logging.getLogger(__name__)

# Placeholder the runtime substitutes with the dynamic tag name
DYNAMIC_TAG_PLACEHOLDER = "{tag}"


def fragment_token(fragment_id: int) -> str:
    """Synthesized component key for a fragment id, as a string literal."""
    return f'"_f{fragment_id}_"'


class TemplateCodegen:
    """Compiles JSX elements and fragments into tagged templates.

    The entry points (``compile_element_root`` / ``compile_fragment_root``) are
    called by the host walker for each outermost JSX node; everything else is
    the recursive machinery behind them. Fragment ids come from ``state``.
    """

    def __init__(
        self,
        state: Optional[CompilerState] = None,
        receiver: str = "self",
        root_accessor: bool = False,
    ) -> None:
        self.state = state if state is not None else CompilerState()
        self.receiver = receiver
        self.root_accessor = root_accessor
        self.markup_attributes = MarkupAttributeCompiler()
        self.component_attributes = ComponentAttributeCompiler(self._reserve_nested)

    # --- entry points ----------------------------------------------------

    def compile_element_root(self, node: JSXElement) -> OutputExpression:
        """Compile an outermost element into its replacement construct."""
        with self.state.entered() as depth:
            self.state.next_fragment_id()
            tag = classify_tag(node.name)

            if tag.is_component and depth == 1:
                return self.compile_component(node, tag)

            parts = self.compile_element(node)
            keyed = self._keyed_template(parts)
            if keyed is not None:
                return keyed

            # The first pass only reserves ids for nested units; the emitted
            # parts come from this second pass.
            parts = self.compile_element(node)
            return self._assemble_root(parts, depth)

    def compile_fragment_root(self, node: JSXFragment) -> OutputExpression:
        """Compile an outermost ``<>...</>`` fragment."""
        with self.state.entered() as depth:
            self.state.next_fragment_id()
            parts = self.compile_element(node)
            return self._assemble_root(parts, depth)

    # --- recursive compilation -------------------------------------------

    def compile_element(self, node: JSXNode) -> List[Part]:
        """Compile an element or fragment into a flat part sequence."""
        if isinstance(node, JSXFragment):
            return self._compile_children(node.children)

        if not isinstance(node, JSXElement):
            raise JSXCompileError(f"Unknown element type: {type(node).__name__}")

        tag = classify_tag(node.name)
        if tag.is_component:
            return [Slot(self.compile_component(node, tag))]
        return self._compile_markup(node, tag)

    def compile_child(self, child: JSXChild) -> List[Part]:
        if isinstance(child, JSXText):
            # text becomes part of the template, undecoded
            return [Literal(child.raw)]

        if isinstance(child, JSXExpressionContainer):
            if child.expression is None:
                return []
            return [Slot(child.expression)]

        if isinstance(child, (JSXElement, JSXFragment)):
            return self.compile_element(child)

        kind = child.kind if isinstance(child, UnsupportedNode) else type(child).__name__
        raise JSXCompileError(
            f"Unknown child type: {kind}",
            line=getattr(child, "line", None) or None,
            column=getattr(child, "column", None),
        )

    def compile_component(self, node: JSXElement, tag: TagInfo) -> ComponentCall:
        """Compile a component reference into ``Callee.for(receiver, key, props)``."""
        key: Optional[Expression] = None
        properties: List[Property] = []

        for attr in node.attributes:
            if isinstance(attr, JSXAttribute) and attr.name == KEY_ATTRIBUTE:
                key = self._special_value(attr)
                continue
            if isinstance(attr, JSXAttribute) and attr.name == AS_ATTRIBUTE:
                # no dynamic tag for components, `as` is an ordinary prop
                properties.append(Property(AS_ATTRIBUTE, self._special_value(attr)))
                continue
            properties.extend(self.component_attributes.compile(attr))

        children = self._compile_children(node.children)

        self.state.next_fragment_id()
        if node.children:
            fragment = self.state.next_fragment_id()
            properties.append(
                Property("children", assemble(children, fragment, self.receiver))
            )
            self.state.next_fragment_id()

        if key is None:
            key = string_literal(fragment_token(self.state.fragment_id))

        logger.debug("Compiled component %s with key %s", tag.callee, key.source)
        return ComponentCall(
            callee=tag.callee or tag.name,
            receiver=self.receiver,
            key=key,
            properties=properties,
        )

    # --- internals -------------------------------------------------------

    def _compile_markup(self, node: JSXElement, tag: TagInfo) -> List[Part]:
        key: Optional[Expression] = None
        dynamic_tag: Optional[Expression] = None
        attributes: List[Part] = []

        for attr in node.attributes:
            if isinstance(attr, JSXAttribute) and attr.name == KEY_ATTRIBUTE:
                key = self._special_value(attr)
            elif isinstance(attr, JSXAttribute) and attr.name == AS_ATTRIBUTE:
                if dynamic_tag is not None:
                    raise self._attribute_error(
                        attr, "Dynamic tag replacement is allowed only once."
                    )
                dynamic_tag = self._special_value(attr)
            else:
                attributes.extend(self.markup_attributes.compile(attr))

        children = [] if tag.is_void else self._compile_children(node.children)

        parts: List[Part]
        closing: List[Part]
        if dynamic_tag is not None:
            parts = [Literal(f"<{DYNAMIC_TAG_PLACEHOLDER}"), DynamicTag(dynamic_tag)]
            closing = [Literal(f"</{DYNAMIC_TAG_PLACEHOLDER}>")]
        else:
            parts = [Literal("<"), Literal(tag.name)]
            closing = [Literal("</"), Literal(tag.name), Literal(">")]

        parts.extend(attributes)
        parts.append(Literal(">"))
        if not tag.is_void:
            parts.extend(children)
            parts.extend(closing)

        if key is not None:
            # keyed elements are addressed by their key instead of the counter
            return [Slot(assemble(parts, key, self.receiver))]
        return parts

    def _compile_children(self, children: Sequence[JSXChild]) -> List[Part]:
        parts: List[Part] = []
        for child in children:
            parts.extend(self.compile_child(child))
        return parts

    def _reserve_nested(self, node: JSXNode) -> None:
        parts = self.compile_element(node)
        assemble(parts, self.state.fragment_id, self.receiver, TemplateMode.VALUE)
        self.state.next_fragment_id()

    def _assemble_root(
        self, parts: Sequence[Part], depth: int
    ) -> Union[TaggedTemplate, TemplateLiteral]:
        mode = TemplateMode.FRAGMENT
        if self.root_accessor and depth == 1:
            mode = TemplateMode.ROOT
        return assemble(parts, self.state.fragment_id, self.receiver, mode)

    def _keyed_template(self, parts: Sequence[Part]) -> Optional[TaggedTemplate]:
        if len(parts) == 1 and isinstance(parts[0], Slot):
            node = parts[0].node
            if isinstance(node, TaggedTemplate):
                return node
        return None

    def _special_value(self, attr: JSXAttribute) -> Expression:
        """Value of a ``key`` or ``as`` attribute as an expression."""
        value = attr.value
        if isinstance(value, StringValue):
            return Expression(
                kind=ExpressionKind.STRING,
                source=value.raw,
                line=value.line,
                column=value.column,
            )
        if isinstance(value, JSXExpressionContainer) and value.expression is not None:
            return value.expression
        raise self._attribute_error(attr, f"The {attr.name!r} attribute must have a value")

    def _attribute_error(self, attr: object, message: str) -> JSXCompileError:
        return JSXCompileError(
            message,
            line=getattr(attr, "line", None) or None,
            column=getattr(attr, "column", None),
        )
