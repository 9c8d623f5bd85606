"""Unit tests for filter chips."""

from __future__ import annotations

import pytest

from notez.search.ast_nodes import And, Folder, Not, Or, Pinned, Tag, Text
from notez.search.chips import (
    ChipKind,
    ChipLogic,
    FilterChip,
    build_expression,
    chips_from_expression,
)
from notez.search.parser import parse
from notez.search.serializer import serialize


class TestFilterChip:
    def test_tag(self) -> None:
        chip = FilterChip.tag("work")
        assert chip.kind is ChipKind.TAG
        assert chip.to_expression() == Tag("work")

    def test_excluded_folder(self) -> None:
        chip = FilterChip.folder("archive", negated=True)
        assert chip.to_expression() == Not(Folder("archive"))

    def test_pinned(self) -> None:
        assert FilterChip.pinned().value == "true"
        assert FilterChip.pinned().to_expression() == Pinned(True)
        assert FilterChip.pinned(False).to_expression() == Pinned(False)

    def test_pinned_unknown_value_is_unpinned(self) -> None:
        chip = FilterChip(ChipKind.PINNED, "yes")
        assert chip.to_expression() == Pinned(False)

    @pytest.mark.parametrize("make", [FilterChip.tag, FilterChip.folder])
    def test_empty_name_rejected(self, make) -> None:
        with pytest.raises(ValueError):
            make("")
        with pytest.raises(ValueError):
            make("", negated=True)


class TestBuildExpression:
    def test_empty(self) -> None:
        assert build_expression([]) is None

    def test_single_chip(self) -> None:
        assert build_expression([FilterChip.tag("work")]) == Tag("work")

    def test_and_with_exclusion(self) -> None:
        chips = [FilterChip.tag("work"), FilterChip.folder("x", negated=True)]
        expr = build_expression(chips, ChipLogic.AND)
        assert expr == And(Tag("work"), Not(Folder("x")))
        assert serialize(expr) == "tag:work AND NOT folder:x"

    def test_or_folds_left(self) -> None:
        chips = [FilterChip.tag("a"), FilterChip.tag("b"), FilterChip.tag("c")]
        assert build_expression(chips, ChipLogic.OR) == Or(Or(Tag("a"), Tag("b")), Tag("c"))

    def test_and_folds_left(self) -> None:
        chips = [FilterChip.tag("a"), FilterChip.folder("b"), FilterChip.pinned()]
        assert build_expression(chips) == And(And(Tag("a"), Folder("b")), Pinned(True))

    def test_serialized_chips_parse_back(self) -> None:
        chips = [FilterChip.tag("co op"), FilterChip.folder("x", negated=True), FilterChip.pinned()]
        expr = build_expression(chips, ChipLogic.OR)
        assert parse(serialize(expr)) == expr


class TestChipsFromExpression:
    def test_none(self) -> None:
        assert chips_from_expression(None) == ([], ChipLogic.AND)

    def test_single_leaf(self) -> None:
        assert chips_from_expression(Not(Tag("x"))) == (
            [FilterChip.tag("x", negated=True)],
            ChipLogic.AND,
        )

    def test_or_chain(self) -> None:
        expr = parse("tag:a OR folder:b OR pinned:false")
        assert chips_from_expression(expr) == (
            [FilterChip.tag("a"), FilterChip.folder("b"), FilterChip.pinned(False)],
            ChipLogic.OR,
        )

    @pytest.mark.parametrize(
        "expr",
        [
            Text("hello"),
            And(Tag("a"), Text("b")),
            And(Tag("a"), Or(Tag("b"), Tag("c"))),
            Or(And(Tag("a"), Tag("b")), Tag("c")),
            Not(Not(Tag("a"))),
            Not(Or(Tag("a"), Tag("b"))),
            Tag(""),
            And(Tag("a"), Not(Folder(""))),
        ],
    )
    def test_no_chip_form(self, expr) -> None:
        assert chips_from_expression(expr) is None

    def test_inverse_of_build_expression(self) -> None:
        chips = [FilterChip.tag("a"), FilterChip.folder("b", negated=True), FilterChip.pinned()]
        for logic in ChipLogic:
            assert chips_from_expression(build_expression(chips, logic)) == (chips, logic)
