"""
Tests for book payload validation.
"""

from datetime import UTC, datetime

import pytest

from app.exceptions import ValidationFailed
from app.services.validation import validate_book_payload, violations_from_errors


def fields_of(exc_info) -> list[str]:
    return [violation.field for violation in exc_info.value.errors]


class TestValidPayloads:
    def test_minimal_payload(self):
        payload = validate_book_payload({"title": "Dune", "author": "Frank Herbert"})

        assert payload.title == "Dune"
        assert payload.author == "Frank Herbert"
        assert payload.desc is None
        assert payload.created_at is None

    def test_full_payload(self):
        payload = validate_book_payload(
            {
                "title": "Dune",
                "author": "Frank Herbert",
                "desc": "Spice and sandworms",
                "createdAt": "2024-01-15T10:30:00Z",
                "updatedAt": "2024-01-16T11:00:00Z",
            }
        )

        assert payload.created_at == datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
        assert payload.updated_at == datetime(2024, 1, 16, 11, 0, tzinfo=UTC)

    def test_boundary_lengths(self):
        payload = validate_book_payload(
            {"title": "t" * 50, "author": "a", "desc": "d" * 255}
        )

        assert len(payload.title) == 50
        assert len(payload.desc) == 255

    def test_empty_desc_allowed(self):
        assert validate_book_payload({"title": "Dune", "author": "F", "desc": ""}).desc == ""

    def test_unknown_keys_ignored(self):
        payload = validate_book_payload(
            {"id": 9, "title": "Dune", "author": "Frank Herbert", "isbn": "123"}
        )

        assert "id" not in payload.to_columns()
        assert "isbn" not in payload.to_columns()

    def test_to_columns_leaves_out_missing_timestamps(self):
        payload = validate_book_payload({"title": "Dune", "author": "Frank Herbert"})

        assert payload.to_columns() == {
            "title": "Dune",
            "author": "Frank Herbert",
            "desc": None,
        }


class TestInvalidPayloads:
    def test_title_too_long(self):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_book_payload({"title": "x" * 51, "author": "Frank Herbert"})

        assert fields_of(exc_info) == ["title"]
        assert exc_info.value.status_code == 422

    def test_desc_too_long(self):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_book_payload({"title": "Dune", "author": "F", "desc": "d" * 256})

        assert fields_of(exc_info) == ["desc"]

    @pytest.mark.parametrize("title", ["", "Dune!", "Dune: Part Two", "Dune_2", "Düne"])
    def test_title_characters(self, title):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_book_payload({"title": title, "author": "Frank Herbert"})

        assert fields_of(exc_info) == ["title"]

    def test_wrong_types(self):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_book_payload({"title": 1984, "author": ["Orwell"]})

        assert sorted(fields_of(exc_info)) == ["author", "title"]

    @pytest.mark.parametrize(
        "value",
        [
            "2024-01-15",
            "2024-01-15T10:30:00",
            "2024-01-15T10:30:00+00:00",
            "2024-01-15T10:30:00.123Z",
            "2024-13-01T10:30:00Z",
            "2024-1-5T1:2:3Z",
            " 2024-01-15T10:30:00Z",
            1705314600,
        ],
    )
    def test_timestamp_format(self, value):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_book_payload(
                {"title": "Dune", "author": "Frank Herbert", "updatedAt": value}
            )

        assert fields_of(exc_info) == ["updatedAt"]

    def test_collects_every_violation(self):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_book_payload(
                {"title": "", "desc": "bad!", "createdAt": "yesterday"}
            )

        assert sorted(fields_of(exc_info)) == ["author", "createdAt", "desc", "title"]

    def test_missing_body(self):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_book_payload(None)

        assert fields_of(exc_info) == ["body"]

    def test_non_object_body(self):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_book_payload("Dune by Frank Herbert")

        assert fields_of(exc_info) == ["body"]


class TestViolationsFromErrors:
    def test_strips_prefix(self):
        errors = [{"loc": ("body", "title"), "msg": "Field required"}]

        violations = violations_from_errors(errors, skip_prefix=("body",))

        assert violations[0].field == "title"
        assert violations[0].message == "Field required"

    def test_prefix_only_means_body(self):
        errors = [{"loc": ("body",), "msg": "JSON decode error"}]

        violations = violations_from_errors(errors, skip_prefix=("body",))

        assert violations[0].field == "body"
