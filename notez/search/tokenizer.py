"""Scan raw search text into a flat token sequence.

The scan never fails: characters that start no token are dropped.
Rules are tried in order at each position after skipping whitespace:

1. ``(`` and ``)``
2. ``AND`` / ``OR`` / ``NOT`` (case-insensitive, whole word)
3. ``tag:`` followed by a quoted string or bare word
4. ``folder:`` followed by a quoted string or bare word
5. ``pinned:true`` / ``pinned:false`` (case-insensitive, whole word)
6. a bare word as a text term

Quotes are only read after ``tag:`` and ``folder:``; anywhere else a
``"`` is noise, so ``"rye bread"`` is two text terms.
"""

from __future__ import annotations

import re

from notez.search.tokens import (
    AND,
    CLOSE_PAREN,
    NOT,
    OPEN_PAREN,
    OR,
    Token,
)

_WORD_RE = re.compile(r"[\w-]+")

_KEYWORDS: tuple[tuple[str, Token], ...] = (
    ("AND", AND),
    ("OR", OR),
    ("NOT", NOT),
)

_PINNED_KEYWORDS: tuple[tuple[str, Token], ...] = (
    ("pinned:true", Token.pinned(True)),
    ("pinned:false", Token.pinned(False)),
)


def tokenize(text: str) -> list[Token]:
    """Tokenize a search query.

    Args:
        text: Raw query text as typed by the user.

    Returns:
        Tokens in input order. Empty for blank input.
    """
    tokens: list[Token] = []
    pos = 0
    length = len(text)

    while pos < length:
        if text[pos].isspace():
            pos += 1
            continue

        char = text[pos]
        if char == "(":
            tokens.append(OPEN_PAREN)
            pos += 1
            continue
        if char == ")":
            tokens.append(CLOSE_PAREN)
            pos += 1
            continue

        scanned = _scan_keyword(text, pos, _KEYWORDS)
        if scanned is None:
            scanned = _scan_prefixed(text, pos, "tag:", Token.tag)
        if scanned is None:
            scanned = _scan_prefixed(text, pos, "folder:", Token.folder)
        if scanned is None:
            scanned = _scan_keyword(text, pos, _PINNED_KEYWORDS)
        if scanned is None:
            scanned = _scan_word(text, pos)

        if scanned is None:
            # Lexical noise
            pos += 1
            continue

        token, pos = scanned
        tokens.append(token)

    return tokens


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def _scan_keyword(
    text: str, pos: int, keywords: tuple[tuple[str, Token], ...]
) -> tuple[Token, int] | None:
    """Match a case-insensitive keyword not followed by a word character."""
    for keyword, token in keywords:
        end = pos + len(keyword)
        if text[pos:end].lower() != keyword.lower():
            continue
        if end < len(text) and _is_word_char(text[end]):
            continue
        return token, end
    return None


def _scan_prefixed(text: str, pos: int, prefix: str, make) -> tuple[Token, int] | None:
    """Match ``prefix`` plus a quoted or bare value.

    Returns None (leaving the cursor untouched) when no non-empty value
    follows, so the text is rescanned by the later rules.
    """
    start = pos + len(prefix)
    if text[pos:start].lower() != prefix:
        return None

    scanned = _scan_value(text, start)
    if scanned is None:
        return None

    value, end = scanned
    return make(value), end


def _scan_quoted(text: str, pos: int) -> tuple[str, int]:
    """Scan a double-quoted string starting at ``pos``.

    An unterminated quote runs to the end of input.
    """
    close = text.find('"', pos + 1)
    if close == -1:
        return text[pos + 1 :], len(text)
    return text[pos + 1 : close], close + 1


def _scan_value(text: str, pos: int) -> tuple[str, int] | None:
    if pos < len(text) and text[pos] == '"':
        value, end = _scan_quoted(text, pos)
        if not value:
            return None
        return value, end

    match = _WORD_RE.match(text, pos)
    if match is None:
        return None
    return match.group(0), match.end()


def _scan_word(text: str, pos: int) -> tuple[Token, int] | None:
    match = _WORD_RE.match(text, pos)
    if match is None:
        return None
    return Token.text(match.group(0)), match.end()
