"""Visual filter chips: a constrained way to build search expressions.

A chip list plus one shared logic operator folds left into a single
expression, e.g. ``[tag:work, -folder:x]`` with AND becomes
``And(Tag("work"), Not(Folder("x")))``. Text terms and mixed operators
have no chip form.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

from notez.search.ast_nodes import (
    And,
    Folder,
    Not,
    Or,
    Pinned,
    SearchExpression,
    Tag,
)


class ChipKind(enum.Enum):
    TAG = "tag"
    FOLDER = "folder"
    PINNED = "pinned"


class ChipLogic(enum.Enum):
    AND = "and"
    OR = "or"


@dataclass(frozen=True)
class FilterChip:
    """One user-selected filter.

    Tag and folder chips need a non-empty name. Pinned chips carry
    ``"true"`` or ``"false"``; any other value counts as unpinned.
    """

    kind: ChipKind
    value: str
    negated: bool = False

    def __post_init__(self) -> None:
        if self.kind is not ChipKind.PINNED and not self.value:
            raise ValueError(f"{self.kind.value} chip needs a name")

    @classmethod
    def tag(cls, name: str, negated: bool = False) -> FilterChip:
        return cls(ChipKind.TAG, name, negated)

    @classmethod
    def folder(cls, name: str, negated: bool = False) -> FilterChip:
        return cls(ChipKind.FOLDER, name, negated)

    @classmethod
    def pinned(cls, flag: bool = True, negated: bool = False) -> FilterChip:
        return cls(ChipKind.PINNED, "true" if flag else "false", negated)

    def to_expression(self) -> SearchExpression:
        base: SearchExpression
        if self.kind is ChipKind.TAG:
            base = Tag(self.value)
        elif self.kind is ChipKind.FOLDER:
            base = Folder(self.value)
        else:
            base = Pinned(self.value == "true")
        return Not(base) if self.negated else base


def build_expression(
    chips: Sequence[FilterChip], logic: ChipLogic = ChipLogic.AND
) -> SearchExpression | None:
    """Fold chips left into one expression.

    Args:
        chips: Chips in display order.
        logic: Operator joining every pair of chips.

    Returns:
        The expression, or None for an empty chip list.
    """
    if not chips:
        return None

    combine = And if logic is ChipLogic.AND else Or
    result = chips[0].to_expression()
    for chip in chips[1:]:
        result = combine(result, chip.to_expression())
    return result


def _chip_from_leaf(expression: SearchExpression) -> FilterChip | None:
    negated = False
    if isinstance(expression, Not):
        negated = True
        expression = expression.inner

    if isinstance(expression, (Tag, Folder)) and not expression.name:
        return None
    if isinstance(expression, Tag):
        return FilterChip.tag(expression.name, negated)
    if isinstance(expression, Folder):
        return FilterChip.folder(expression.name, negated)
    if isinstance(expression, Pinned):
        return FilterChip.pinned(expression.flag, negated)
    return None


def chips_from_expression(
    expression: SearchExpression | None,
) -> tuple[list[FilterChip], ChipLogic] | None:
    """Recover chips from an expression built the way chips build them.

    Accepts a single (possibly negated) tag/folder/pinned leaf, or a
    left-nested chain of such leaves under one operator.

    Returns:
        ``(chips, logic)``, ``([], ChipLogic.AND)`` for None, or None
        when the expression has no chip form.
    """
    if expression is None:
        return [], ChipLogic.AND

    if isinstance(expression, (And, Or)):
        operator = type(expression)
        logic = ChipLogic.AND if operator is And else ChipLogic.OR
    else:
        operator = None
        logic = ChipLogic.AND

    chips: list[FilterChip] = []
    node = expression
    while operator is not None and isinstance(node, operator):
        chip = _chip_from_leaf(node.right)
        if chip is None:
            return None
        chips.append(chip)
        node = node.left

    chip = _chip_from_leaf(node)
    if chip is None:
        return None
    chips.append(chip)

    chips.reverse()
    return chips, logic
