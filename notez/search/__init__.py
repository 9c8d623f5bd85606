"""Search query language: tokenize, parse, serialize and compile."""

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
from notez.search.chips import ChipKind, ChipLogic, FilterChip, build_expression
from notez.search.compiler import MATCH_ALL, Predicate, compile_expression, execute_search
from notez.search.parser import parse, parse_query
from notez.search.serializer import serialize
from notez.search.state import SearchMode, SearchSession
from notez.search.tokenizer import tokenize

__all__ = [
    "MATCH_ALL",
    "And",
    "ChipKind",
    "ChipLogic",
    "FilterChip",
    "Folder",
    "Not",
    "Or",
    "Pinned",
    "Predicate",
    "SearchExpression",
    "SearchMode",
    "SearchSession",
    "Tag",
    "Text",
    "build_expression",
    "compile_expression",
    "execute_search",
    "parse",
    "parse_query",
    "serialize",
    "tokenize",
]
