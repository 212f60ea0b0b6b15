from tagjsx.compiler.exceptions import JSXCompileError, JSXSyntaxError, format_code_frame

SOURCE = "const a = 1;\nconst b = <div on=\"x\"/>;\nconst c = 3;\n"


def test_code_frame() -> None:
    frame = format_code_frame(SOURCE, 2, 15)
    assert frame.splitlines() == [
        "  1 | const a = 1;",
        '> 2 | const b = <div on="x"/>;',
        "    | " + " " * 15 + "^",
        "  3 | const c = 3;",
    ]


def test_code_frame_out_of_range() -> None:
    assert format_code_frame(SOURCE, 10) == ""


def test_message_without_context() -> None:
    assert str(JSXCompileError("boom")) == "boom"


def test_with_context() -> None:
    error = JSXCompileError("boom", line=2, column=15).with_context(SOURCE, "a.jsx")
    text = str(error)
    assert text.startswith("a.jsx:2:15: boom\n\n")
    assert "> 2 |" in text
    assert error.args == (text,)


def test_context_does_not_override_path() -> None:
    error = JSXCompileError("boom", file_path="first.jsx", line=1)
    error.with_context(SOURCE, "second.jsx")
    assert error.file_path == "first.jsx"


def test_syntax_error_is_compile_error() -> None:
    assert issubclass(JSXSyntaxError, JSXCompileError)
