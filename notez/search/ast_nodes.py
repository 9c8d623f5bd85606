"""AST data classes for parsed search expressions.

A search expression is an immutable tree. Leaves (:class:`Tag`,
:class:`Folder`, :class:`Text`, :class:`Pinned`) carry a payload;
:class:`And`, :class:`Or` and :class:`Not` own their sub-expressions.
Equality is structural, so two independently built trees compare equal
when they have the same shape and payloads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Tag:
    """Notes carrying a tag with this name (case-insensitive)."""

    name: str


@dataclass(frozen=True)
class Folder:
    """Notes filed in a folder with this name (case-insensitive)."""

    name: str


@dataclass(frozen=True)
class Text:
    """Notes whose title or body contains ``term`` (case-insensitive)."""

    term: str


@dataclass(frozen=True)
class Pinned:
    """Notes whose pinned state equals ``flag``."""

    flag: bool


@dataclass(frozen=True)
class And:
    left: SearchExpression
    right: SearchExpression


@dataclass(frozen=True)
class Or:
    left: SearchExpression
    right: SearchExpression


@dataclass(frozen=True)
class Not:
    inner: SearchExpression


SearchExpression = Union[Tag, Folder, Text, Pinned, And, Or, Not]
