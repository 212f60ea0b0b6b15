import pytest

from tagjsx.compiler.ast_nodes import JSXIdentifierName, JSXMemberName, UnsupportedNode
from tagjsx.compiler.exceptions import JSXCompileError
from tagjsx.compiler.tags import VOID_ELEMENTS, classify_tag, is_markup_tag


def test_lowercase_identifier_is_markup() -> None:
    info = classify_tag(JSXIdentifierName("div"))
    assert not info.is_component
    assert not info.is_void
    assert info.name == "div"


def test_custom_element_names_are_markup() -> None:
    assert is_markup_tag("my-widget")
    assert not is_markup_tag("_private")
    assert not is_markup_tag("")


@pytest.mark.parametrize("tag", ["br", "img", "input", "wbr", "keygen"])
def test_void_elements(tag: str) -> None:
    assert tag in VOID_ELEMENTS
    assert classify_tag(JSXIdentifierName(tag)).is_void


def test_capitalized_identifier_is_component() -> None:
    info = classify_tag(JSXIdentifierName("MyComponent"))
    assert info.is_component
    assert info.callee == "MyComponent"


def test_void_names_in_capitals_are_components() -> None:
    info = classify_tag(JSXIdentifierName("BR"))
    assert info.is_component
    assert not info.is_void


def test_member_path_is_component() -> None:
    name = JSXMemberName(JSXMemberName(JSXIdentifierName("ui"), "forms"), "Input")
    info = classify_tag(name)
    assert info.is_component
    assert info.callee == "ui.forms.Input"


def test_lowercase_member_path_is_component() -> None:
    info = classify_tag(JSXMemberName(JSXIdentifierName("foo"), "bar"))
    assert info.is_component
    assert info.callee == "foo.bar"


def test_non_root_identifier_is_plain_reference() -> None:
    info = classify_tag(JSXIdentifierName("div"), root=False)
    assert info.is_component
    assert info.callee == "div"


def test_unknown_tag_shape() -> None:
    with pytest.raises(JSXCompileError, match="Unknown element tag type: JSXNamespacedName"):
        classify_tag(UnsupportedNode("JSXNamespacedName", "svg:rect", line=1, column=1))
