"""Source-level JSX rewriting.

Every outermost JSX node of a file is compiled and replaced by the printed
construct. Embedded expressions are re-rendered from their own source with
the same machinery, so JSX nested inside them becomes a separate unit that is
compiled after its parent.
"""

import logging
from typing import Dict, List, Optional, Tuple

from tree_sitter import Node

from tagjsx.compiler.ast_nodes import Expression, JSXFragment
from tagjsx.compiler.codegen.generator import CodeGenerator
from tagjsx.compiler.codegen.template import TemplateCodegen
from tagjsx.compiler.exceptions import JSXCompileError
from tagjsx.compiler.parser import JSXParser, ParsedSource, is_jsx_node
from tagjsx.compiler.state import CompilerState
from tagjsx.config import TransformOptions

logger = logging.getLogger(__name__)

Edit = Tuple[int, int, str]


class SourceTransformer:
    """Rewrites JavaScript source, replacing JSX with tagged templates."""

    def __init__(
        self,
        options: Optional[TransformOptions] = None,
        state: Optional[CompilerState] = None,
    ) -> None:
        self.options = options or TransformOptions()
        self.parser = JSXParser()
        # None means a fresh counter per transformed file
        self.state = state

    def transform(self, source: str, file_path: str = "") -> str:
        parsed = self.parser.parse(source, file_path)
        state = self.state if self.state is not None else CompilerState()
        codegen = TemplateCodegen(
            state=state,
            receiver=self.options.receiver,
            root_accessor=self.options.root_accessor,
        )

        insertions: Dict[int, str] = {}
        if self.options.inject_receiver:
            insertions = find_receiver_insertions(parsed, self.options.receiver)

        rewriter = _Rewriter(parsed, codegen, insertions)
        try:
            result = rewriter.render(parsed.root_node, 0, len(parsed.data))
        except JSXCompileError as e:
            raise e.with_context(source, file_path)

        logger.debug(
            "Transformed %s: %d JSX units, %d receiver declarations",
            file_path or "<source>",
            rewriter.units,
            len(insertions),
        )
        return result


def transform_source(
    source: str,
    file_path: str = "",
    options: Optional[TransformOptions] = None,
    state: Optional[CompilerState] = None,
) -> str:
    """Compile all JSX in ``source`` and return the rewritten JavaScript."""
    return SourceTransformer(options, state).transform(source, file_path)


def find_receiver_insertions(parsed: ParsedSource, receiver: str) -> Dict[int, str]:
    """Byte offsets right after ``{`` of method bodies that contain JSX.

    Methods that sit inside a JSX expression container are skipped; their
    JSX is rendered by the enclosing method's receiver.
    """
    insertions: Dict[int, str] = {}
    stack: List[Tuple[Node, bool]] = [(parsed.root_node, False)]
    while stack:
        node, in_jsx_expression = stack.pop()
        if node.type == "method_definition" and not in_jsx_expression:
            body = node.child_by_field_name("body")
            if body is not None and _contains_jsx(body):
                insertions[body.start_byte + 1] = _declaration(parsed, body, receiver)
        nested = in_jsx_expression or node.type == "jsx_expression"
        stack.extend((child, nested) for child in reversed(node.children))
    return insertions


def _contains_jsx(node: Node) -> bool:
    stack = [node]
    while stack:
        current = stack.pop()
        if is_jsx_node(current):
            return True
        stack.extend(current.children)
    return False


def _declaration(parsed: ParsedSource, body: Node, receiver: str) -> str:
    statement = f"const {receiver} = this;"
    statements = [child for child in body.named_children if child.type != "comment"]
    if statements and statements[0].start_point[0] > body.start_point[0]:
        first = statements[0]
        line_start = parsed.data.rfind(b"\n", 0, first.start_byte) + 1
        indent = parsed.slice(line_start, first.start_byte)
        return f"\n{indent}{statement}"
    if body.end_point[0] > body.start_point[0]:
        # empty multi-line body: indent one level past the closing brace
        line_start = parsed.data.rfind(b"\n", 0, body.end_byte) + 1
        indent = parsed.slice(line_start, body.end_byte - 1)
        return f"\n{indent}  {statement}"
    return f" {statement}"


class _Rewriter:
    def __init__(
        self, parsed: ParsedSource, codegen: TemplateCodegen, insertions: Dict[int, str]
    ) -> None:
        self.parsed = parsed
        self.codegen = codegen
        self.insertions = insertions
        self.generator = CodeGenerator(self.render_expression)
        self.units = 0

    def render(
        self,
        node: Node,
        start: Optional[int] = None,
        end: Optional[int] = None,
        level: int = 0,
    ) -> str:
        """Source of ``node`` with its JSX compiled and receivers declared.

        ``start`` and ``end`` widen the copied byte range, the program node
        does not cover leading and trailing whitespace. ``level`` is the object
        nesting the result is printed at.
        """
        start = node.start_byte if start is None else start
        end = node.end_byte if end is None else end
        edits: List[Edit] = []
        for jsx_node in self.parsed.iter_jsx_roots(node):
            text = self.compile(jsx_node, level)
            if _needs_semicolon(jsx_node):
                text += ";"
            edits.append((jsx_node.start_byte, jsx_node.end_byte, text))

        for offset, text in self.insertions.items():
            if start < offset < end:
                edits.append((offset, offset, text))

        edits.sort(key=lambda edit: (edit[0], edit[1]))
        out: List[str] = []
        pos = start
        for edit_start, edit_end, text in edits:
            out.append(self.parsed.slice(pos, edit_start))
            out.append(text)
            pos = edit_end
        out.append(self.parsed.slice(pos, end))
        return "".join(out)

    def compile(self, jsx_node: Node, level: int = 0) -> str:
        tree = self.parsed.jsx(jsx_node)
        if isinstance(tree, JSXFragment):
            output = self.codegen.compile_fragment_root(tree)
        else:
            output = self.codegen.compile_element_root(tree)
        self.units += 1
        return self.generator.generate(output, level)

    def render_expression(self, expression: Expression, level: int) -> str:
        node = expression.node
        if node is None:
            return expression.source
        if is_jsx_node(node):
            # printed in place so nested objects line up with the parent
            return self.compile(node, level)
        return self.render(node, level=level)


def _needs_semicolon(node: Node) -> bool:
    parent = node.parent
    if parent is None or parent.type != "expression_statement":
        return False
    return not any(child.type == ";" for child in parent.children)
