"""Search state shared by the text and visual (chip) search modes."""

from __future__ import annotations

import enum
import logging

from notez.exceptions import DatabaseError, SearchSyntaxError
from notez.search.ast_nodes import SearchExpression
from notez.search.chips import (
    ChipLogic,
    FilterChip,
    build_expression,
    chips_from_expression,
)
from notez.search.compiler import NoteSource, execute_search
from notez.search.parser import parse
from notez.search.serializer import serialize
from notez.store.repository import NoteWithTags

log = logging.getLogger(__name__)


class SearchMode(enum.Enum):
    VISUAL = "visual"
    TEXT = "text"


class SearchSession:
    """Holds one user's search inputs and the latest results.

    Each :meth:`search` call issues a single read against ``source``;
    a newer call simply replaces the previous results.
    """

    def __init__(self, source: NoteSource, chip_logic: ChipLogic = ChipLogic.AND) -> None:
        self.source = source
        self.mode = SearchMode.VISUAL
        self.text_query = ""
        self.chips: list[FilterChip] = []
        self.chip_logic = chip_logic
        self.results: list[NoteWithTags] = []
        self.parse_error: str | None = None
        self.error: str | None = None

    def current_expression(self) -> SearchExpression | None:
        """Expression for the active mode (None = no filter or unparseable)."""
        if self.mode is SearchMode.TEXT:
            return parse(self.text_query)
        return build_expression(self.chips, self.chip_logic)

    def search(self) -> list[NoteWithTags]:
        """Run the search for the active mode and store the results."""
        self.error = None

        if self.mode is SearchMode.TEXT:
            if not self.text_query.strip():
                self.results = []
                self.parse_error = None
                return self.results
            expression = parse(self.text_query)
            if expression is None:
                self.parse_error = SearchSyntaxError.MESSAGE
                self.results = []
                return self.results
            self.parse_error = None
        else:
            self.parse_error = None
            expression = build_expression(self.chips, self.chip_logic)

        try:
            self.results = execute_search(self.source, expression)
        except DatabaseError as e:
            log.warning("Search failed: %s", e)
            self.error = str(e)
            self.results = []

        return self.results

    def add_chip(self, chip: FilterChip) -> None:
        self.chips.append(chip)
        self.search()

    def add_tag_chip(self, name: str) -> None:
        self.add_chip(FilterChip.tag(name))

    def add_folder_chip(self, name: str) -> None:
        self.add_chip(FilterChip.folder(name))

    def add_exclude_folder_chip(self, name: str) -> None:
        self.add_chip(FilterChip.folder(name, negated=True))

    def add_pinned_chip(self, flag: bool = True) -> None:
        self.add_chip(FilterChip.pinned(flag))

    def remove_chip(self, index: int) -> None:
        del self.chips[index]
        self.search()

    def set_chip_logic(self, logic: ChipLogic) -> None:
        self.chip_logic = logic
        self.search()

    def switch_to_text_mode(self) -> None:
        """Switch to text mode, carrying the chips over as query text."""
        expression = build_expression(self.chips, self.chip_logic)
        if expression is not None:
            self.text_query = serialize(expression)
        self.mode = SearchMode.TEXT

    def switch_to_visual_mode(self) -> None:
        """Switch to visual mode.

        When the query text has a chip form the chips are replaced by it;
        otherwise the existing chips are kept.
        """
        recovered = chips_from_expression(parse(self.text_query))
        if recovered is not None and self.text_query.strip():
            self.chips, self.chip_logic = recovered
        self.mode = SearchMode.VISUAL

    def clear_all(self) -> None:
        self.chips = []
        self.text_query = ""
        self.results = []
        self.parse_error = None
        self.error = None
