"""Groups a flat part sequence into a template literal."""

import logging
from enum import Enum
from typing import List, Optional, Sequence, Union

from tagjsx.compiler.ast_nodes import (
    ACCESSOR_DYNAMIC,
    ACCESSOR_PART,
    ROOT_FRAGMENT,
    Accessor,
    DynamicTag,
    Expression,
    ExpressionKind,
    Literal,
    OutputExpression,
    Part,
    Slot,
    TaggedTemplate,
    TemplateLiteral,
)
from tagjsx.compiler.escape import escape_literal
from tagjsx.compiler.exceptions import JSXCompileError

logger = logging.getLogger(__name__)

# Expression shapes accepted by the `as` attribute
DYNAMIC_TAG_KINDS = frozenset(
    {ExpressionKind.IDENTIFIER, ExpressionKind.MEMBER, ExpressionKind.CONDITIONAL}
)


class TemplateMode(Enum):
    FRAGMENT = "fragment"  # receiver.part(id) / receiver.dtt(id, tag)
    ROOT = "root"  # receiver.part("root") / receiver.dtt("root")
    VALUE = "value"  # untagged template literal


def assemble(
    parts: Sequence[Part],
    fragment: Union[int, Expression],
    receiver: str = "self",
    mode: TemplateMode = TemplateMode.FRAGMENT,
) -> Union[TaggedTemplate, TemplateLiteral]:
    """Split ``parts`` into quasis and expressions and wrap them in a template.

    Adjacent literals are escaped and joined. A dynamic tag marker is recorded
    without opening an expression slot. There is always one more quasi than
    expressions.
    """
    quasis: List[str] = []
    expressions: List[OutputExpression] = []
    dynamic_tag: Optional[Expression] = None
    quasi = ""

    for part in parts:
        if isinstance(part, Literal):
            quasi += escape_literal(part.text)
        elif isinstance(part, DynamicTag):
            if dynamic_tag is not None:
                raise _dynamic_tag_error(
                    part.expression, "Dynamic tag replacement is allowed only once."
                )
            if part.expression.kind not in DYNAMIC_TAG_KINDS:
                raise _dynamic_tag_error(
                    part.expression,
                    f"{part.expression.kind.value} is not allowed as a dynamic tag; "
                    "use an identifier, a member expression or a conditional expression.",
                )
            dynamic_tag = part.expression
        elif isinstance(part, Slot):
            quasis.append(quasi)
            expressions.append(part.node)
            quasi = ""
        else:
            raise JSXCompileError(f"Unknown template part: {type(part).__name__}")

    quasis.append(quasi)
    template = TemplateLiteral(quasis=quasis, expressions=expressions)

    if mode is TemplateMode.VALUE:
        return template

    target: Union[int, str, Expression] = fragment
    method = ACCESSOR_PART if dynamic_tag is None else ACCESSOR_DYNAMIC
    if mode is TemplateMode.ROOT:
        # root accessors are addressed by name and carry no tag expression
        target = ROOT_FRAGMENT
        dynamic_tag = None

    logger.debug(
        "Assembled fragment %s: %d quasis, %d expressions%s",
        target if isinstance(target, (int, str)) else target.source,
        len(quasis),
        len(expressions),
        " (dynamic tag)" if method == ACCESSOR_DYNAMIC else "",
    )
    return TaggedTemplate(
        tag=Accessor(
            receiver=receiver, method=method, fragment=target, tag_expression=dynamic_tag
        ),
        quasi=template,
    )


def _dynamic_tag_error(expression: Expression, message: str) -> JSXCompileError:
    return JSXCompileError(message, line=expression.line or None, column=expression.column)
