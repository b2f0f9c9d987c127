from datetime import date, datetime, timezone

import pytest

from recordbase.domain.entities.schema import SchemaDefinition
from recordbase.domain.services.record_validator import RecordValidator


@pytest.fixture
def users(blog_schema):
    return SchemaDefinition.model_validate(blog_schema).resources["users"]


@pytest.fixture
def posts(blog_schema):
    return SchemaDefinition.model_validate(blog_schema).resources["posts"]


class TestRecordValidator:

    # --- Type Validation ---

    def test_validate_string(self):
        assert RecordValidator.validate_string("hello", "f") is None
        assert RecordValidator.validate_string("", "f") is None
        assert RecordValidator.validate_string(123, "f").code == "invalid_type"

    def test_validate_number(self):
        assert RecordValidator.validate_number(123, "f") is None
        assert RecordValidator.validate_number(12.34, "f") is None
        assert RecordValidator.validate_number("123", "f").code == "invalid_type"
        assert RecordValidator.validate_number(True, "f").code == "invalid_type"  # bool is instance of int in Python

    def test_validate_boolean(self):
        assert RecordValidator.validate_boolean(True, "f") is None
        assert RecordValidator.validate_boolean(False, "f") is None
        assert RecordValidator.validate_boolean("true", "f").code == "invalid_type"
        assert RecordValidator.validate_boolean(1, "f").code == "invalid_type"

    def test_validate_date(self):
        assert RecordValidator.validate_date(datetime.now(timezone.utc), "f") is None
        assert RecordValidator.validate_date(date(2024, 1, 1), "f") is None
        assert RecordValidator.validate_date("2024-01-01", "f") is None
        assert RecordValidator.validate_date("2024-01-01T12:00:00Z", "f") is None
        assert RecordValidator.validate_date("2024-01-01T12:00:00.5+00:00", "f") is None
        assert RecordValidator.validate_date("20240101", "f") is None
        assert RecordValidator.validate_date("not-a-date", "f").code == "invalid_date_format"
        assert RecordValidator.validate_date(123, "f").code == "invalid_type"

    def test_validate_enum(self):
        allowed = ("admin", "viewer")
        assert RecordValidator.validate_enum("admin", allowed, "role") is None
        error = RecordValidator.validate_enum("owner", allowed, "role")
        assert error.code == "invalid_enum"
        assert error.allowed == allowed
        assert "admin, viewer" in error.message

    # --- Full Record Validation ---

    def test_valid_record(self, users):
        data = {"email": "a@b.com", "name": "A", "role": "admin", "age": 30, "active": True}
        assert RecordValidator.validate(users, data) == []

    def test_reports_all_missing_required_fields(self, posts):
        errors = RecordValidator.validate(posts, {})
        assert [e.field for e in errors] == ["title", "authorId"]
        assert all(e.code == "required_missing" for e in errors)

    def test_partial_skips_required_check(self, posts):
        assert RecordValidator.validate(posts, {"title": "New"}, partial=True) == []

    def test_partial_still_checks_types(self, users):
        errors = RecordValidator.validate(users, {"age": "old"}, partial=True)
        assert len(errors) == 1
        assert errors[0].field == "age"
        assert "expected number" in errors[0].message

    def test_required_null_counts_as_supplied(self, users):
        assert RecordValidator.validate(users, {"email": None}) == []
        assert RecordValidator.validate(users, {"email": None}, partial=True) == []

    def test_optional_null_allowed(self, users):
        assert RecordValidator.validate(users, {"email": "a@b.com", "name": None, "role": None}) == []

    def test_system_and_unknown_fields_ignored(self, users):
        data = {
            "email": "a@b.com",
            "id": 42,
            "createdAt": object(),
            "updatedAt": None,
            "nickname": 7,
        }
        assert RecordValidator.validate(users, data) == []

    def test_enum_checked_after_type(self, users):
        errors = RecordValidator.validate(users, {"email": "a@b.com", "role": 5})
        assert len(errors) == 1
        assert errors[0].code == "invalid_type"
