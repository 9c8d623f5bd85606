"""Plain-text snippets from Markdown note bodies."""

from __future__ import annotations

import re

DEFAULT_MAX_LENGTH = 120

# Applied in order; images must be stripped before links.
_MARKDOWN_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^#{1,6}\s+", re.MULTILINE), ""),
    (re.compile(r"\*{1,3}([^*]+)\*{1,3}"), r"\1"),
    (re.compile(r"_{1,3}([^_]+)_{1,3}"), r"\1"),
    (re.compile(r"`([^`]+)`"), r"\1"),
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), r"\1"),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"^\s*[-*+]\s+", re.MULTILINE), ""),
    (re.compile(r"^\s*\d+\.\s+", re.MULTILINE), ""),
    (re.compile(r"~~([^~]+)~~"), r"\1"),
    (re.compile(r"\n+"), " "),
    (re.compile(r"\s{2,}"), " "),
]


def generate_snippet(markdown: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Generate a plain-text snippet from Markdown source.

    Strips common Markdown syntax, collapses whitespace and truncates to
    ``max_length`` characters, appending ``...`` when truncated.

    Args:
        markdown: Note body in Markdown.
        max_length: Maximum snippet length before the ellipsis.

    Returns:
        Single-line plain-text snippet.
    """
    text = markdown
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    text = text.strip()

    if len(text) > max_length:
        text = text[:max_length].rstrip()
        if not text.endswith("..."):
            text += "..."

    return text
