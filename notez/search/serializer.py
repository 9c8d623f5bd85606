"""Render an expression tree back into search syntax.

``And`` is written without parentheses and ``Or`` always with them, so
the loosest operator survives being embedded in an ``AND`` chain.
Right-nested ``AND`` chains and compound operands of ``NOT`` are
parenthesized too, which keeps ``parse(serialize(e)) == e`` for every
tree the parser can build.
"""

from __future__ import annotations

import re

from notez.search.ast_nodes import (
    And,
    Folder,
    Not,
    Or,
    Pinned,
    SearchExpression,
    Tag,
    Text,
)

_BARE_VALUE_RE = re.compile(r"[\w-]+")
_QUOTE_TRIGGERS = frozenset(" -()")


def _needs_quotes(value: str) -> bool:
    if any(char in _QUOTE_TRIGGERS for char in value):
        return True
    return _BARE_VALUE_RE.fullmatch(value) is None


def _render_value(value: str) -> str:
    return f'"{value}"' if _needs_quotes(value) else value


def serialize(expression: SearchExpression) -> str:
    """Serialize an expression into canonical search syntax.

    Args:
        expression: Expression tree to render.

    Returns:
        Query text that parses back into an equal tree.
    """
    if isinstance(expression, Tag):
        return f"tag:{_render_value(expression.name)}"
    if isinstance(expression, Folder):
        return f"folder:{_render_value(expression.name)}"
    if isinstance(expression, Text):
        # Parsed text terms are always bare words
        return expression.term
    if isinstance(expression, Pinned):
        return "pinned:true" if expression.flag else "pinned:false"
    if isinstance(expression, And):
        right = serialize(expression.right)
        if isinstance(expression.right, And):
            right = f"({right})"
        return f"{serialize(expression.left)} AND {right}"
    if isinstance(expression, Or):
        return f"({serialize(expression.left)} OR {serialize(expression.right)})"
    if isinstance(expression, Not):
        inner = serialize(expression.inner)
        if isinstance(expression.inner, (And, Not)):
            inner = f"({inner})"
        return f"NOT {inner}"
    raise TypeError(f"Not a search expression: {expression!r}")
