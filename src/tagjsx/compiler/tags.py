"""Tag name classification: markup tags vs component references."""

from dataclasses import dataclass
from typing import Optional, Union

from tagjsx.compiler.ast_nodes import JSXIdentifierName, JSXMemberName, UnsupportedNode
from tagjsx.compiler.exceptions import JSXCompileError

# HTML void elements that never have children or a closing tag
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "basefont",
        "bgsound",
        "br",
        "col",
        "command",
        "embed",
        "frame",
        "hr",
        "image",
        "img",
        "input",
        "isindex",
        "keygen",
        "link",
        "menuitem",
        "meta",
        "nextid",
        "param",
        "source",
        "track",
        "wbr",
    }
)


@dataclass(frozen=True)
class TagInfo:
    """Classification result.

    For markup tags ``name`` is the tag text; for component references
    ``callee`` is the JavaScript expression naming the component.
    """

    name: str
    is_component: bool = False
    is_void: bool = False
    callee: Optional[str] = None


def is_markup_tag(name: str) -> bool:
    """A simple name starting with a lowercase letter is a markup tag."""
    return bool(name) and "a" <= name[0] <= "z"


def classify_tag(
    name: Union[JSXIdentifierName, JSXMemberName, UnsupportedNode], root: bool = True
) -> TagInfo:
    """Classify a tag name node.

    ``root`` is False while resolving the object side of a dotted path, where
    every identifier is taken as a plain reference.
    """
    if isinstance(name, JSXIdentifierName):
        tag = name.name
        if root and is_markup_tag(tag):
            return TagInfo(name=tag, is_void=tag.lower() in VOID_ELEMENTS)
        return TagInfo(name=tag, is_component=True, callee=tag)

    if isinstance(name, JSXMemberName):
        obj = classify_tag(name.object, root=False)
        callee = f"{obj.callee}.{name.property}"
        return TagInfo(name=callee, is_component=True, callee=callee)

    kind = getattr(name, "kind", type(name).__name__)
    raise JSXCompileError(
        f"Unknown element tag type: {kind}",
        line=getattr(name, "line", None),
        column=getattr(name, "column", None),
    )
