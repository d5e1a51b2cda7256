"""
Tests for list query normalization.

Pure functions, no database or client needed.
"""

import math

import pytest
from starlette.datastructures import QueryParams

from app.services.query import (
    MAX_BOOK_ID,
    MAX_SKIP,
    ListQuery,
    first_value,
    normalize_list_query,
    parse_book_id,
    parse_int,
)


class TestFirstValue:
    def test_plain_string(self):
        assert first_value({"take": "5"}, "take") == "5"

    def test_list_takes_first(self):
        assert first_value({"take": ["5", "7"]}, "take") == "5"

    def test_empty_list_counts_as_empty_string(self):
        assert first_value({"title": []}, "title") == ""

    def test_absent_key(self):
        assert first_value({}, "take") is None

    def test_query_params_takes_first(self):
        params = QueryParams("take=5&take=7")
        assert first_value(params, "take") == "5"

    def test_query_params_blank_value_is_present(self):
        params = QueryParams("title=")
        assert first_value(params, "title") == ""


class TestParseInt:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("5", 5),
            (" 12 ", 12),
            ("+3", 3),
            ("-4", -4),
            ("0", 0),
        ],
    )
    def test_valid(self, raw, expected):
        assert parse_int(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "5abc", "1.5", "1_000", "0x10", None])
    def test_malformed(self, raw):
        assert parse_int(raw) is None


class TestParseBookId:
    def test_absent(self):
        assert parse_book_id({}) is None

    def test_valid(self):
        assert parse_book_id({"id": "42"}) == 42

    def test_malformed_is_zero(self):
        assert parse_book_id({"id": "forty"}) == 0

    def test_empty_is_zero(self):
        assert parse_book_id({"id": ""}) == 0

    def test_beyond_id_column_range_is_zero(self):
        assert parse_book_id({"id": str(MAX_BOOK_ID)}) == MAX_BOOK_ID
        assert parse_book_id({"id": str(MAX_BOOK_ID + 1)}) == 0
        assert parse_book_id({"id": "99999999999999999999"}) == 0


class TestNormalizeListQuery:
    def test_defaults(self):
        query = normalize_list_query({})

        assert query == ListQuery(take=10, page=1, filter={})
        assert query.skip == 0

    def test_take_clamped_to_max(self):
        assert normalize_list_query({"take": "20"}).take == 20
        assert normalize_list_query({"take": "21"}).take == 20
        assert normalize_list_query({"take": "19"}).take == 19

    def test_take_clamped_to_one(self):
        assert normalize_list_query({"take": "0"}).take == 1
        assert normalize_list_query({"take": "-5"}).take == 1

    def test_page_clamped_to_one(self):
        query = normalize_list_query({"page": "-2"})

        assert query.page == 1
        assert query.skip == 0

    def test_huge_page_keeps_skip_in_range(self):
        for take in (1, 7, 20):
            query = normalize_list_query({"take": str(take), "page": "9" * 30})

            assert 0 <= query.skip <= MAX_SKIP
            assert query.skip > MAX_SKIP - take

    def test_malformed_values_use_defaults(self):
        query = normalize_list_query({"take": "ten", "page": "two"})

        assert query.take == 10
        assert query.page == 1

    def test_custom_limits(self):
        query = normalize_list_query({"take": "80"}, default_take=25, max_take=50)
        assert query.take == 50

        query = normalize_list_query({}, default_take=25, max_take=50)
        assert query.take == 25

    def test_filter_keeps_only_supplied_keys(self):
        query = normalize_list_query({"title": "Dune", "desc": "", "isbn": "123"})

        assert query.filter == {"title": "Dune", "desc": ""}

    def test_filter_takes_first_value(self):
        query = normalize_list_query({"author": ["Herbert", "Asimov"]})

        assert query.filter == {"author": "Herbert"}

    def test_skip_for_every_page(self):
        for take in range(1, 21):
            for page in range(1, 30):
                query = normalize_list_query({"take": str(take), "page": str(page)})
                assert query.skip == take * (page - 1)
                assert query.skip >= 0


class TestTotalPages:
    def test_zero_total_is_one_page(self):
        assert ListQuery(take=10).total_pages(0) == 1

    def test_exact_and_partial_pages(self):
        assert ListQuery(take=5).total_pages(10) == 2
        assert ListQuery(take=5).total_pages(12) == 3

    def test_matches_ceiling(self):
        for take in range(1, 21):
            query = ListQuery(take=take)
            for total in range(0, 100):
                assert query.total_pages(total) == max(1, math.ceil(total / take))
