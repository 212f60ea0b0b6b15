"""JSX parser built on tree-sitter.

The JavaScript grammar parses the whole file; this module converts the JSX
parts of the tree into the compiler's node model and keeps the source bytes
around so that replaced ranges can be spliced back together.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Node, Parser, Tree

from tagjsx.compiler.ast_nodes import (
    Expression,
    ExpressionKind,
    JSXAttribute,
    JSXChild,
    JSXElement,
    JSXExpressionContainer,
    JSXFragment,
    JSXIdentifierName,
    JSXMemberName,
    JSXNode,
    JSXText,
    StringValue,
    UnsupportedNode,
)
from tagjsx.compiler.exceptions import JSXSyntaxError

JS_LANGUAGE = Language(tsjs.language())

# jsx_fragment only exists in older grammar releases; newer ones produce a
# jsx_element whose opening tag has no name.
JSX_NODE_TYPES = frozenset({"jsx_element", "jsx_self_closing_element", "jsx_fragment"})

_EXPRESSION_KINDS: Dict[str, ExpressionKind] = {
    "identifier": ExpressionKind.IDENTIFIER,
    "undefined": ExpressionKind.IDENTIFIER,
    "member_expression": ExpressionKind.MEMBER,
    "subscript_expression": ExpressionKind.MEMBER,
    "ternary_expression": ExpressionKind.CONDITIONAL,
    "string": ExpressionKind.STRING,
    "template_string": ExpressionKind.TEMPLATE,
    "number": ExpressionKind.NUMBER,
    "call_expression": ExpressionKind.CALL,
    "arrow_function": ExpressionKind.FUNCTION,
    "function_expression": ExpressionKind.FUNCTION,
    "function": ExpressionKind.FUNCTION,
    "this": ExpressionKind.THIS,
}

_NAME_TYPES = frozenset({"identifier", "jsx_identifier", "property_identifier"})
_MEMBER_NAME_TYPES = frozenset({"member_expression", "nested_identifier"})


def is_jsx_node(node: Node) -> bool:
    return node.type in JSX_NODE_TYPES


def _named(node: Node) -> List[Node]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type != "comment"]


@dataclass
class ParsedSource:
    """A parsed file: the tree plus the bytes it was parsed from."""

    source: str
    data: bytes
    tree: Tree
    file_path: str = ""

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    def slice(self, start: int, end: int) -> str:
        return self.data[start:end].decode("utf-8")

    def text(self, node: Node) -> str:
        return self.slice(node.start_byte, node.end_byte)

    def position(self, offset: int) -> Tuple[int, int]:
        """1-based line and 0-based character column of a byte offset."""
        line_start = self.data.rfind(b"\n", 0, offset) + 1
        line = self.data.count(b"\n", 0, offset) + 1
        column = len(self.data[line_start:offset].decode("utf-8", "replace"))
        return line, column

    def iter_jsx_roots(self, node: Optional[Node] = None) -> Iterator[Node]:
        """Outermost JSX nodes under ``node`` in source order."""
        stack = [node if node is not None else self.root_node]
        while stack:
            current = stack.pop()
            if is_jsx_node(current):
                yield current
                continue
            stack.extend(reversed(current.children))

    # --- conversion to the node model ------------------------------------

    def jsx(self, node: Node) -> JSXNode:
        """Convert a JSX element or fragment node."""
        line, column = self.position(node.start_byte)

        if node.type == "jsx_self_closing_element":
            return JSXElement(
                name=self._tag_name(node.child_by_field_name("name")),
                attributes=self._attributes(node),
                children=[],
                line=line,
                column=column,
            )

        if node.type == "jsx_fragment":
            start = next(c.end_byte for c in node.children if c.type == ">")
            end = [c.start_byte for c in node.children if c.type == "<"][-1]
            return JSXFragment(
                children=self._children(node, start, end), line=line, column=column
            )

        open_tag = node.child_by_field_name("open_tag") or node.named_children[0]
        close_tag = node.child_by_field_name("close_tag") or node.named_children[-1]
        children = self._children(node, open_tag.end_byte, close_tag.start_byte)

        name = open_tag.child_by_field_name("name")
        if name is None:
            return JSXFragment(children=children, line=line, column=column)

        return JSXElement(
            name=self._tag_name(name),
            attributes=self._attributes(open_tag),
            children=children,
            line=line,
            column=column,
        )

    def expression(self, node: Node) -> Expression:
        """Wrap a JavaScript expression node, looking through parentheses."""
        inner = node
        while inner.type == "parenthesized_expression" and _named(inner):
            inner = _named(inner)[0]

        line, column = self.position(node.start_byte)
        jsx: Optional[JSXNode] = None
        if is_jsx_node(inner):
            jsx = self.jsx(inner)
            kind = (
                ExpressionKind.JSX_FRAGMENT
                if isinstance(jsx, JSXFragment)
                else ExpressionKind.JSX_ELEMENT
            )
        else:
            kind = _EXPRESSION_KINDS.get(inner.type, ExpressionKind.OTHER)

        return Expression(
            kind=kind, source=self.text(node), line=line, column=column, node=node, jsx=jsx
        )

    def _children(self, parent: Node, start: int, end: int) -> List[JSXChild]:
        children: List[JSXChild] = []
        pos = start
        for child in parent.named_children:
            if child.start_byte < start or child.end_byte > end:
                continue
            if not (is_jsx_node(child) or child.type == "jsx_expression"):
                # jsx_text and character references are covered by the gaps
                continue
            if child.start_byte > pos:
                children.append(self._text(pos, child.start_byte))
            if child.type == "jsx_expression":
                children.append(self._container(child, "JSXSpreadChild"))
            else:
                children.append(self.jsx(child))
            pos = child.end_byte
        if end > pos:
            children.append(self._text(pos, end))
        return children

    def _text(self, start: int, end: int) -> JSXText:
        line, column = self.position(start)
        return JSXText(raw=self.slice(start, end), line=line, column=column)

    def _container(
        self, node: Node, spread_kind: str
    ) -> Union[JSXExpressionContainer, UnsupportedNode]:
        line, column = self.position(node.start_byte)
        inner = _named(node)
        if not inner:
            return JSXExpressionContainer(expression=None, line=line, column=column)
        if inner[0].type == "spread_element":
            return UnsupportedNode(spread_kind, self.text(node), line, column)
        return JSXExpressionContainer(
            expression=self.expression(inner[0]), line=line, column=column
        )

    def _attributes(self, tag: Node) -> List[Union[JSXAttribute, UnsupportedNode]]:
        attributes: List[Union[JSXAttribute, UnsupportedNode]] = []
        for child in tag.named_children:
            if child.type == "jsx_attribute":
                attributes.append(self._attribute(child))
            elif child.type == "jsx_expression":
                line, column = self.position(child.start_byte)
                attributes.append(
                    UnsupportedNode("JSXSpreadAttribute", self.text(child), line, column)
                )
        return attributes

    def _attribute(self, node: Node) -> Union[JSXAttribute, UnsupportedNode]:
        line, column = self.position(node.start_byte)
        parts = _named(node)
        name_node = parts[0]
        if name_node.type == "jsx_namespace_name":
            return UnsupportedNode("JSXNamespacedName", self.text(name_node), line, column)

        value = None
        if len(parts) > 1:
            value_node = parts[1]
            v_line, v_column = self.position(value_node.start_byte)
            if value_node.type == "string":
                value = StringValue(raw=self.text(value_node), line=v_line, column=v_column)
            elif value_node.type == "jsx_expression":
                value = self._container(value_node, "JSXSpreadChild")
            elif is_jsx_node(value_node):
                value = self.jsx(value_node)
            else:
                value = UnsupportedNode(
                    value_node.type, self.text(value_node), v_line, v_column
                )

        return JSXAttribute(
            name=self.text(name_node), value=value, line=line, column=column
        )

    def _tag_name(
        self, node: Optional[Node]
    ) -> Union[JSXIdentifierName, JSXMemberName, UnsupportedNode]:
        if node is None:
            return UnsupportedNode("JSXEmptyName")

        line, column = self.position(node.start_byte)
        if node.type in _NAME_TYPES:
            return JSXIdentifierName(self.text(node), line, column)

        if node.type in _MEMBER_NAME_TYPES:
            segments = [segment.strip() for segment in self.text(node).split(".")]
            name: Union[JSXIdentifierName, JSXMemberName] = JSXIdentifierName(
                segments[0], line, column
            )
            for segment in segments[1:]:
                name = JSXMemberName(name, segment, line, column)
            return name

        if node.type == "jsx_namespace_name":
            return UnsupportedNode("JSXNamespacedName", self.text(node), line, column)
        return UnsupportedNode(node.type, self.text(node), line, column)


class JSXParser:
    """Parses JavaScript with JSX into a ``ParsedSource``."""

    def __init__(self) -> None:
        self._parser = Parser(JS_LANGUAGE)

    def parse_file(self, file_path: Path) -> ParsedSource:
        with open(file_path, "r", encoding="utf-8") as f:
            content = f.read()

        return self.parse(content, str(file_path))

    def parse(self, source: str, file_path: str = "") -> ParsedSource:
        data = source.encode("utf-8")
        tree = self._parser.parse(data)
        parsed = ParsedSource(source=source, data=data, tree=tree, file_path=file_path)

        if tree.root_node.has_error:
            error = _first_error(tree.root_node)
            line, column = parsed.position(error.start_byte if error else 0)
            if error is not None and error.is_missing:
                message = f"Missing {error.type!r}"
            else:
                message = "Unexpected token"
            raise JSXSyntaxError(message, line=line, column=column).with_context(
                source, file_path
            )

        return parsed


def _first_error(node: Node) -> Optional[Node]:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error:
            found = _first_error(child)
            if found is not None:
                return found
    return None
