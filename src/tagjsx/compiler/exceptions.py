"""Compiler exceptions."""

from typing import Optional


class JSXCompileError(Exception):
    """Raised when a JSX tree cannot be compiled to a template."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code_frame: Optional[str] = None,
    ):
        self.message = message
        self.file_path = file_path
        self.line = line
        self.column = column
        self.code_frame = code_frame
        super().__init__(str(self))

    def __str__(self) -> str:
        text = self.message
        if self.file_path:
            location = self.file_path
            if self.line:
                location += f":{self.line}:{self.column or 0}"
            text = f"{location}: {text}"
        if self.code_frame:
            text += f"\n\n{self.code_frame}\n"
        return text

    def with_context(self, source: str, file_path: Optional[str] = None) -> "JSXCompileError":
        """Attach file path and a code frame built from ``source``."""
        if file_path and not self.file_path:
            self.file_path = file_path
        if self.line and not self.code_frame:
            self.code_frame = format_code_frame(source, self.line, self.column or 0)
        self.args = (str(self),)
        return self


class JSXSyntaxError(JSXCompileError):
    """Raised when the source cannot be parsed."""


def format_code_frame(source: str, line: int, column: int = 0, context: int = 2) -> str:
    """Render the lines around ``line`` with a marker and a caret under ``column``.

    ``line`` is 1-based, ``column`` 0-based.
    """
    lines = source.splitlines()
    if not lines or line < 1 or line > len(lines):
        return ""

    start = max(1, line - context)
    end = min(len(lines), line + context)
    width = len(str(end))

    out = []
    for num in range(start, end + 1):
        content = lines[num - 1]
        gutter = str(num).rjust(width)
        if num == line:
            out.append(f"> {gutter} | {content}".rstrip())
            pad = "".join(c if c == "\t" else " " for c in content[:column])
            out.append(f"  {' ' * width} | {pad}^")
        else:
            out.append(f"  {gutter} | {content}".rstrip())
    return "\n".join(out)
