"""Escaping for literal template text."""

import re

_TEMPLATE_SPECIALS = re.compile(r"[\\`]")
_NEWLINE_RUN = re.compile(r"\n+\s+")
_TAB = re.compile(r"\t")
_SPACE_RUN = re.compile(r" {2,}")


def escape_literal(text: str) -> str:
    """Prepare a literal piece for a template literal.

    Escapes: \\ `

    Then removes the first newline run followed by whitespace, the first tab,
    and collapses the first run of two or more spaces. Only the first match of
    each whitespace rule is touched, later runs in the same piece survive.

    Args:
        text: Raw literal text (attribute source text or JSX text)

    Returns:
        Text safe for embedding between backticks
    """
    s = _TEMPLATE_SPECIALS.sub(lambda m: "\\" + m.group(0), text)
    s = _NEWLINE_RUN.sub("", s, count=1)
    s = _TAB.sub("", s, count=1)
    return _SPACE_RUN.sub(" ", s, count=1)
