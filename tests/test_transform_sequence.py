"""End-to-end transforms sharing one fragment counter, in file order."""

from typing import List, Tuple

from tagjsx.compiler.state import CompilerState
from tagjsx.compiler.transform import SourceTransformer

CASES: List[Tuple[str, str, str]] = [
    # markup elements
    ("element", "<div/>;", "self.part(1)`<div></div>`;"),
    ("void element", "<br/>;", "self.part(2)`<br>`;"),
    ("void element drops content", "<br>test</br>;", "self.part(3)`<br>`;"),
    ("fragment", "<><div>foo</div></>;", "self.part(4)`<div>foo</div>`;"),
    # components embedded in markup take two ids per pass
    (
        "component in markup",
        '<div><MyComponent prop="test"/></div>;',
        'self.part(7)`<div>${MyComponent.for(self, "_f7_", {\n'
        '  prop: "test"\n'
        "})}</div>`;",
    ),
    # attributes
    (
        "string attributes",
        "<input type=\"text\" value='foo'/>;",
        "self.part(8)`<input type=\"text\" value='foo'>`;",
    ),
    ("expression attributes", "<input value={val}/>;", "self.part(9)`<input value=${val}>`;"),
    (
        "entities in string attributes",
        '<input value="&quot;"/>;',
        'self.part(10)`<input value="&quot;">`;',
    ),
    (
        "escaped string attributes",
        r"""<input value='\\' placeholder="`"/>;""",
        r"""self.part(11)`<input value='\\\\' placeholder="\`">`;""",
    ),
    ("boolean attribute", "<input disabled/>;", "self.part(12)`<input disabled>`;"),
    (
        "boolean attribute with string",
        '<input disabled="true"/>;',
        'self.part(13)`<input disabled="true">`;',
    ),
    ("expression attributes again", "<input value={val}/>;", "self.part(14)`<input value=${val}>`;"),
    (
        "component valued prop",
        "<Tag render={<Element value={my}/>}/>;",
        'Tag.for(self, "_f18_", {\n'
        '  render: Element.for(self, "_f20_", {\n'
        "    value: my\n"
        "  })\n"
        "});",
    ),
    # event handlers
    (
        "dashed event",
        "<input on-input={console.log}/>;",
        "self.part(21)`<input oninput=${console.log}>`;",
    ),
    (
        "react style event",
        "<button onClick={console.log}/>;",
        "self.part(22)`<button onclick=${console.log}></button>`;",
    ),
    (
        "component event",
        "<Button onClick={console.log}/>;",
        'Button.for(self, "_f24_", {\n  onClick: console.log\n});',
    ),
    # children
    ("text children", "<p> foo bar </p>;", "self.part(25)`<p> foo bar </p>`;"),
    ("escaped text children", "<p> `\\` </p>;", "self.part(26)`<p> \\`\\\\\\` </p>`;"),
    ("entities in text", "<p> &quot; </p>;", "self.part(27)`<p> &quot; </p>`;"),
    ("expression children", "<p> foo: {val} </p>;", "self.part(28)`<p> foo: ${val} </p>`;"),
    ("empty expressions", "<p>{ } { /* comment */ }</p>;", "self.part(29)`<p> </p>`;"),
    (
        "element children",
        "<p> foo: <b> {val} </b> </p>;",
        "self.part(30)`<p> foo: <b> ${val} </b> </p>`;",
    ),
    (
        "fragment children",
        "<p> foo: <>{val}</> </p>;",
        "self.part(31)`<p> foo: ${val} </p>`;",
    ),
    # react style properties, no trailing semicolon in the input
    (
        "className and onClick",
        '<div className="some-class" onClick={console.log}></div>',
        'self.part(32)`<div class="some-class" onclick=${console.log}></div>`;',
    ),
]


def test_sequential_run() -> None:
    transformer = SourceTransformer(state=CompilerState())
    for description, source, expected in CASES:
        assert transformer.transform(source) == expected, description


def test_fragment_prop_in_sequence() -> None:
    transformer = SourceTransformer(state=CompilerState())
    assert transformer.transform("<Tag render={<>x</>}/>;") == (
        'Tag.for(self, "_f2_", {\n  render: self.part(3)`x`\n});'
    )
    assert transformer.transform("<Tag render={<b>x</b>}/>;") == (
        'Tag.for(self, "_f6_", {\n  render: self.part(7)`<b>x</b>`\n});'
    )
    assert transformer.transform("<a/>;") == "self.part(8)`<a></a>`;"
