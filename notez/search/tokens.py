"""Token types produced by the search tokenizer."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenKind(enum.Enum):
    TAG = "tag"
    FOLDER = "folder"
    TEXT = "text"
    PINNED = "pinned"
    AND = "and"
    OR = "or"
    NOT = "not"
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"


# Token kinds that can begin an atom (used for implicit AND)
ATOM_START_KINDS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.TAG,
        TokenKind.FOLDER,
        TokenKind.TEXT,
        TokenKind.PINNED,
        TokenKind.OPEN_PAREN,
    }
)


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    ``value`` holds the payload for ``TAG``/``FOLDER``/``TEXT`` (str) and
    ``PINNED`` (bool); it is None for operators and parentheses.
    """

    kind: TokenKind
    value: str | bool | None = None

    @classmethod
    def tag(cls, name: str) -> Token:
        return cls(TokenKind.TAG, name)

    @classmethod
    def folder(cls, name: str) -> Token:
        return cls(TokenKind.FOLDER, name)

    @classmethod
    def text(cls, term: str) -> Token:
        return cls(TokenKind.TEXT, term)

    @classmethod
    def pinned(cls, flag: bool) -> Token:
        return cls(TokenKind.PINNED, flag)


AND = Token(TokenKind.AND)
OR = Token(TokenKind.OR)
NOT = Token(TokenKind.NOT)
OPEN_PAREN = Token(TokenKind.OPEN_PAREN)
CLOSE_PAREN = Token(TokenKind.CLOSE_PAREN)
