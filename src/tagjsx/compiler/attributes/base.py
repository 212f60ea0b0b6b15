"""Shared attribute name parsing and checks."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional

from tagjsx.compiler.ast_nodes import JSXAttribute, UnsupportedNode
from tagjsx.compiler.exceptions import JSXCompileError

# on-input / onClick -> event, everything else -> plain attribute
ATTRIBUTE_NAME_RE = re.compile(r"^(?:on-?(.*)|(.*))$", re.DOTALL)

# Handled by the element and component compilers, never compiled as attributes
KEY_ATTRIBUTE = "key"
AS_ATTRIBUTE = "as"


@dataclass(frozen=True)
class AttributeName:
    raw: str
    event: Optional[str] = None
    plain: Optional[str] = None

    @property
    def is_event(self) -> bool:
        return bool(self.event)


def parse_attribute_name(name: str) -> AttributeName:
    match = ATTRIBUTE_NAME_RE.match(name)
    assert match is not None  # the pattern accepts any string
    return AttributeName(raw=name, event=match.group(1), plain=match.group(2))


class AttributeCompiler(ABC):
    """Base class for the markup and component attribute variants."""

    @abstractmethod
    def compile(self, attr: JSXAttribute) -> List[Any]:
        """Compile one attribute."""
        pass

    def _parse(self, attr: Any) -> AttributeName:
        if isinstance(attr, UnsupportedNode):
            raise self._error(attr, f"Unsupported attribute type: {attr.kind}")
        if isinstance(attr.value, UnsupportedNode):
            raise self._error(attr, f"Unsupported attribute value: {attr.value.kind}")
        return parse_attribute_name(attr.name)

    def _error(self, attr: Any, message: str) -> JSXCompileError:
        return JSXCompileError(message, line=attr.line or None, column=attr.column)

    def _untransformable(self, attr: JSXAttribute) -> JSXCompileError:
        return self._error(attr, f"Couldn't transform attribute {attr.name!r}")

    def _string_event(self, attr: JSXAttribute) -> JSXCompileError:
        # setting an event handler to a string doesn't make sense
        return self._error(attr, "Event prop can't be a string literal")

    def _valueless_event(self, attr: JSXAttribute) -> JSXCompileError:
        return self._error(attr, "Event prop must have a value")
