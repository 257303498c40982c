"""
Notes API — Query Engine Unit Tests
====================================

What:  Tests for NoteQuery normalization and the statements it builds.
How:   No database; statements are compiled to SQL text and inspected.
       Result ordering against real rows is covered in test_note_service.py.
"""

import pytest

from notes_api.exceptions import ValidationError
from notes_api.services.note_query import NoteQuery, normalize_filter
from notes_api.services.validation import SortDirection, SortKey


def compiled(stmt) -> str:
    return " ".join(str(stmt).split())


class TestNormalization:

    def test_defaults(self):
        query = NoteQuery.from_params()
        assert query.term is None
        assert (query.page, query.page_size) == (1, 10)
        assert query.sort_key is SortKey.UPDATED
        assert query.direction is SortDirection.DESC

    def test_paging_is_clamped_not_rejected(self):
        query = NoteQuery.from_params(page=0, page_size=1000)
        assert (query.page, query.page_size) == (1, 100)

        query = NoteQuery.from_params(page=-3, page_size=0)
        assert (query.page, query.page_size) == (1, 1)

    def test_offset(self):
        assert NoteQuery.from_params(page=3, page_size=20).offset == 40
        assert NoteQuery.from_params(page=0, page_size=20).offset == 0

    def test_offset_of_huge_page_fits_64_bits(self):
        assert NoteQuery.from_params(page=10**19, page_size=100).offset <= 2**63 - 1

    @pytest.mark.parametrize("raw,expected", [
        (None, None),
        ("", None),
        ("   ", None),
        ("  SHOP ", "shop"),
        ("Shopping List", "shopping list"),
    ])
    def test_filter_term(self, raw, expected):
        assert normalize_filter(raw) == expected

    def test_invalid_sort_rejected(self):
        with pytest.raises(ValidationError, match="invalid sort key"):
            NoteQuery.from_params(sort="bogus")

    def test_invalid_direction_rejected(self):
        with pytest.raises(ValidationError, match="invalid sort direction"):
            NoteQuery.from_params(direction="random")

    def test_query_is_immutable(self):
        query = NoteQuery.from_params()
        with pytest.raises(AttributeError):
            query.page = 5


class TestStatements:

    def test_no_filter_has_no_where(self):
        query = NoteQuery.from_params()
        assert "WHERE" not in compiled(query.page_statement())
        assert "WHERE" not in compiled(query.count_statement())

    def test_filter_applies_to_page_and_count(self):
        query = NoteQuery.from_params(filter_text="shop")
        for stmt in (query.page_statement(), query.count_statement()):
            sql = compiled(stmt)
            assert "lower(notes.title) LIKE" in sql
            assert "lower(notes.content) LIKE" in sql
            assert " OR " in sql

    def test_count_ignores_window(self):
        sql = compiled(NoteQuery.from_params(page=4, page_size=5).count_statement())
        assert "LIMIT" not in sql
        assert "OFFSET" not in sql
        assert "ORDER BY" not in sql

    @pytest.mark.parametrize("sort,direction,expected", [
        ("updated", "desc", "ORDER BY coalesce(notes.updated_at, notes.created_at) DESC, notes.id DESC"),
        ("updated", "asc", "ORDER BY coalesce(notes.updated_at, notes.created_at) ASC, notes.id ASC"),
        ("created", "desc", "ORDER BY notes.created_at DESC, notes.id DESC"),
        ("title", "asc", "ORDER BY notes.title ASC, notes.id ASC"),
        ("id", "desc", "ORDER BY notes.id DESC, notes.id DESC"),
    ])
    def test_order_by_has_id_tiebreak_in_same_direction(self, sort, direction, expected):
        query = NoteQuery.from_params(sort=sort, direction=direction)
        assert expected in compiled(query.page_statement())

    def test_page_window(self):
        sql = compiled(NoteQuery.from_params(page=2, page_size=25).page_statement())
        assert "LIMIT" in sql
        assert "OFFSET" in sql
