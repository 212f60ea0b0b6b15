"""AST node definitions for JSX input trees and compiled template output."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Union


# --- Embedded JavaScript -------------------------------------------------


class ExpressionKind(Enum):
    IDENTIFIER = "Identifier"
    MEMBER = "MemberExpression"
    CONDITIONAL = "ConditionalExpression"
    STRING = "StringLiteral"
    TEMPLATE = "TemplateLiteral"
    NUMBER = "NumericLiteral"
    CALL = "CallExpression"
    FUNCTION = "FunctionExpression"
    THIS = "ThisExpression"
    JSX_ELEMENT = "JSXElement"
    JSX_FRAGMENT = "JSXFragment"
    OTHER = "Expression"


@dataclass(frozen=True)
class Expression:
    """Opaque JavaScript expression taken from the source.

    ``node`` is the host parser handle, used to re-render the expression with
    nested JSX compiled. ``jsx`` holds the converted tree when the expression
    is itself a JSX element or fragment.
    """

    kind: ExpressionKind
    source: str
    line: int = 0
    column: int = 0
    node: Any = field(default=None, compare=False, repr=False)
    jsx: Optional["JSXNode"] = field(default=None, compare=False, repr=False)

    @property
    def is_jsx(self) -> bool:
        return self.kind in (ExpressionKind.JSX_ELEMENT, ExpressionKind.JSX_FRAGMENT)


def string_literal(raw: str) -> Expression:
    """Build a synthetic string literal expression from its raw source."""
    return Expression(kind=ExpressionKind.STRING, source=raw)


# --- JSX input tree ------------------------------------------------------


@dataclass(frozen=True)
class JSXIdentifierName:
    name: str
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class JSXMemberName:
    """Dotted tag name such as ``Foo.Bar``."""

    object: Union[JSXIdentifierName, "JSXMemberName"]
    property: str
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class StringValue:
    """String literal attribute value; ``raw`` keeps the quotes."""

    raw: str
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class JSXExpressionContainer:
    """``{...}`` container. ``expression`` is None for empty containers."""

    expression: Optional[Expression]
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class JSXText:
    raw: str
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class UnsupportedNode:
    """Host construct the compiler does not handle (spreads, namespaces)."""

    kind: str
    source: str = ""
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class JSXAttribute:
    name: str
    value: Union[None, StringValue, JSXExpressionContainer, "JSXElement", UnsupportedNode] = None
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class JSXElement:
    name: Union[JSXIdentifierName, JSXMemberName, UnsupportedNode]
    attributes: List[Union[JSXAttribute, UnsupportedNode]] = field(default_factory=list)
    children: List["JSXChild"] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class JSXFragment:
    children: List["JSXChild"] = field(default_factory=list)
    line: int = 0
    column: int = 0


JSXNode = Union[JSXElement, JSXFragment]
JSXChild = Union[JSXText, JSXExpressionContainer, JSXElement, JSXFragment, UnsupportedNode]


# --- Compiled output -----------------------------------------------------


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool


@dataclass(frozen=True)
class TemplateLiteral:
    quasis: List[str]
    expressions: List["OutputExpression"]


ROOT_FRAGMENT = "root"
ACCESSOR_PART = "part"
ACCESSOR_DYNAMIC = "dtt"


@dataclass(frozen=True)
class Accessor:
    """Template tag such as ``receiver.part(fragment)``.

    ``fragment`` is a counter value, a key expression, or ``ROOT_FRAGMENT``.
    ``dtt`` accessors carry the dynamic tag expression, except in root mode.
    """

    receiver: str
    method: str
    fragment: Union[int, str, Expression]
    tag_expression: Optional[Expression] = None


@dataclass(frozen=True)
class TaggedTemplate:
    tag: Accessor
    quasi: TemplateLiteral


@dataclass(frozen=True)
class Property:
    key: str
    value: "OutputExpression"


@dataclass(frozen=True)
class ComponentCall:
    """``Callee.for(receiver, key, {properties})``."""

    callee: str
    receiver: str
    key: Expression
    properties: List[Property] = field(default_factory=list)


OutputExpression = Union[
    Expression, BooleanLiteral, TemplateLiteral, TaggedTemplate, ComponentCall
]


# --- Parts ---------------------------------------------------------------


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Slot:
    node: OutputExpression


@dataclass(frozen=True)
class DynamicTag:
    expression: Expression


Part = Union[Literal, Slot, DynamicTag]
