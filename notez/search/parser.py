"""Recursive-descent parser turning search tokens into an expression tree.

Precedence, loosest first::

    OR  <  AND (explicit or implicit)  <  NOT  <  atom

Parsing is forgiving. A sub-parse that cannot complete yields None and
the caller keeps what it already built; only when nothing at all was
built does the whole parse yield None.
"""

from __future__ import annotations

from collections.abc import Sequence

from notez.exceptions import SearchSyntaxError
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
from notez.search.tokenizer import tokenize
from notez.search.tokens import ATOM_START_KINDS, Token, TokenKind

_LEAF_BUILDERS = {
    TokenKind.TAG: Tag,
    TokenKind.FOLDER: Folder,
    TokenKind.TEXT: Text,
    TokenKind.PINNED: Pinned,
}


class _Parser:
    """Single-use parser state; one instance per :func:`parse` call."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = tokens
        self.position = 0

    def _peek(self) -> Token | None:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def _next_is(self, kind: TokenKind) -> bool:
        token = self._peek()
        return token is not None and token.kind is kind

    def parse_or(self) -> SearchExpression | None:
        left = self.parse_and()
        if left is None:
            return None

        while self._next_is(TokenKind.OR):
            self.position += 1
            right = self.parse_and()
            if right is None:
                return left
            left = Or(left, right)

        return left

    def parse_and(self) -> SearchExpression | None:
        left = self.parse_not()
        if left is None:
            return None

        while True:
            token = self._peek()
            if token is None:
                break
            if token.kind is TokenKind.AND:
                self.position += 1
            elif token.kind not in ATOM_START_KINDS:
                break
            # else: implicit AND, nothing to consume

            right = self.parse_not()
            if right is None:
                return left
            left = And(left, right)

        return left

    def parse_not(self) -> SearchExpression | None:
        if self._next_is(TokenKind.NOT):
            self.position += 1
            inner = self.parse_atom()
            if inner is None:
                return None
            return Not(inner)
        return self.parse_atom()

    def parse_atom(self) -> SearchExpression | None:
        token = self._peek()
        if token is None:
            return None

        builder = _LEAF_BUILDERS.get(token.kind)
        if builder is not None:
            self.position += 1
            return builder(token.value)

        if token.kind is TokenKind.OPEN_PAREN:
            self.position += 1
            expr = self.parse_or()
            # A missing closing paren is tolerated
            if self._next_is(TokenKind.CLOSE_PAREN):
                self.position += 1
            return expr

        return None


def parse(source: str | Sequence[Token]) -> SearchExpression | None:
    """Parse search text or a token sequence into an expression tree.

    Args:
        source: Raw query text (tokenized first) or tokens from
            :func:`~notez.search.tokenizer.tokenize`.

    Returns:
        The expression, or None when the input is empty or nothing
        could be parsed. Tokens left over after the expression are
        ignored.
    """
    tokens = tokenize(source) if isinstance(source, str) else source
    if not tokens:
        return None
    return _Parser(tokens).parse_or()


def parse_query(query_string: str) -> SearchExpression | None:
    """Parse user-entered search text, reporting invalid syntax.

    Args:
        query_string: The search query to parse.

    Returns:
        The expression, or None for blank input (no filter).

    Raises:
        SearchSyntaxError: If non-blank input yields no expression.
    """
    if not query_string.strip():
        return None

    expression = parse(query_string)
    if expression is None:
        raise SearchSyntaxError(query_string)
    return expression
