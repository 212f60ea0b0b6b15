"""JavaScript printer for compiled output constructs."""

import json
import re
from typing import Callable, List, Optional, Sequence, Union

from tagjsx.compiler.ast_nodes import (
    Accessor,
    BooleanLiteral,
    ComponentCall,
    Expression,
    OutputExpression,
    Property,
    TaggedTemplate,
    TemplateLiteral,
)

# Renders an embedded expression at the given object nesting level
ExpressionRenderer = Callable[[Expression, int], str]

IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


def source_renderer(expression: Expression, level: int) -> str:
    return expression.source


class CodeGenerator:
    """Prints output constructs the way a JavaScript pretty-printer would.

    Objects get one property per line with two-space indentation per level.
    Template quasis are already escaped and are emitted verbatim.
    """

    INDENT = "  "

    def __init__(self, expression_renderer: Optional[ExpressionRenderer] = None) -> None:
        self.expression_renderer = expression_renderer or source_renderer

    def generate(self, node: OutputExpression, level: int = 0) -> str:
        if isinstance(node, Expression):
            return self.expression_renderer(node, level)
        if isinstance(node, BooleanLiteral):
            return "true" if node.value else "false"
        if isinstance(node, TemplateLiteral):
            return self._template(node, level)
        if isinstance(node, TaggedTemplate):
            return self._accessor(node.tag, level) + self._template(node.quasi, level)
        if isinstance(node, ComponentCall):
            key = self.generate(node.key, level)
            props = self._object(node.properties, level)
            return f"{node.callee}.for({node.receiver}, {key}, {props})"
        raise TypeError(f"Cannot generate code for {type(node).__name__}")

    def _template(self, template: TemplateLiteral, level: int) -> str:
        out: List[str] = ["`"]
        for i, quasi in enumerate(template.quasis):
            out.append(quasi)
            if i < len(template.expressions):
                out.append("${" + self.generate(template.expressions[i], level) + "}")
        out.append("`")
        return "".join(out)

    def _accessor(self, accessor: Accessor, level: int) -> str:
        args = [self._fragment(accessor.fragment, level)]
        if accessor.tag_expression is not None:
            args.append(self.generate(accessor.tag_expression, level))
        return f"{accessor.receiver}.{accessor.method}({', '.join(args)})"

    def _fragment(self, fragment: Union[int, str, Expression], level: int) -> str:
        if isinstance(fragment, Expression):
            return self.generate(fragment, level)
        if isinstance(fragment, str):
            return json.dumps(fragment)
        return str(fragment)

    def _object(self, properties: Sequence[Property], level: int) -> str:
        if not properties:
            return "{}"
        indent = self.INDENT * (level + 1)
        lines = [
            f"{indent}{self._key(prop.key)}: {self.generate(prop.value, level + 1)}"
            for prop in properties
        ]
        return "{\n" + ",\n".join(lines) + "\n" + self.INDENT * level + "}"

    def _key(self, name: str) -> str:
        if IDENTIFIER_RE.match(name):
            return name
        return json.dumps(name)
