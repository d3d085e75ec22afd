"""Tests for field maps, identifier validation and SQL statement builders."""

import pytest

from sqldao.dao import FieldMap
from sqldao.db.sql import build_count, build_delete, build_insert, build_select, build_update, where_clause
from sqldao.exceptions import UnknownFieldError
from sqldao.users import USER_FIELDS
from sqldao.utils.validators import is_valid_identifier, quote_identifier, validate_identifier


class TestFieldMap:
    def test_to_columns_translates_and_keeps_order(self):
        columns = USER_FIELDS.to_columns({"lastName": "Doe", "firstName": "John"}, table_name="users")
        assert list(columns.items()) == [("last_name", "Doe"), ("first_name", "John")]

    def test_unknown_field_raises(self):
        with pytest.raises(UnknownFieldError, match="'nickname' for table 'users'"):
            USER_FIELDS.to_columns({"nickname": "jd"}, table_name="users")

    def test_column_names_are_not_field_names(self):
        with pytest.raises(UnknownFieldError):
            USER_FIELDS.column_for("first_name")

    def test_to_fields_projects_declared_columns(self):
        fields = USER_FIELDS.to_fields({"id": 1, "first_name": "John", "extra": True})
        assert fields == {"id": 1, "firstName": "John"}

    def test_container_protocol(self):
        assert "email" in USER_FIELDS
        assert "first_name" not in USER_FIELDS
        assert len(USER_FIELDS) == 5
        assert list(USER_FIELDS) == ["id", "firstName", "lastName", "email", "dateCreated"]

    @pytest.mark.parametrize(
        "fields",
        [
            {},
            {"name": "bad column"},
            {"name": "1st"},
            {"": "name"},
            {"a": "col", "b": "col"},
            {"name": "name\n"},
        ],
    )
    def test_invalid_declarations_are_rejected(self, fields):
        with pytest.raises(ValueError):
            FieldMap(fields)


class TestValidators:
    @pytest.mark.parametrize("name", ["users", "_private", "date_created", "T1"])
    def test_valid_identifiers(self, name):
        assert is_valid_identifier(name)
        assert validate_identifier(name) == name

    @pytest.mark.parametrize("name", ["", "1users", "users;", "users\n", "first name", 'x"y', None, "a" * 65])
    def test_invalid_identifiers(self, name):
        assert not is_valid_identifier(name)
        with pytest.raises(ValueError):
            validate_identifier(name)

    def test_quote_identifier(self):
        assert quote_identifier("users") == '"users"'


class TestBuilders:
    def test_where_clause_uses_equality_and_is_null(self):
        sql, params = where_clause({"last_name": "Doe", "first_name": None})
        assert sql == ' WHERE "last_name" = ? AND "first_name" IS NULL'
        assert params == ["Doe"]

    def test_empty_where_clause(self):
        assert where_clause({}) == ("", [])

    def test_insert_single_row(self):
        sql, params = build_insert("users", ["first_name", "email"], [["John", "j@example.com"]])
        assert sql == 'INSERT INTO "users" ("first_name", "email") VALUES (?, ?)'
        assert params == ["John", "j@example.com"]

    def test_insert_many_rows_is_one_statement(self):
        sql, params = build_insert("users", ["email"], [["a@example.com"], ["b@example.com"]])
        assert sql == 'INSERT INTO "users" ("email") VALUES (?), (?)'
        assert params == ["a@example.com", "b@example.com"]

    def test_insert_without_columns_uses_defaults(self):
        assert build_insert("users", [], [[]]) == ('INSERT INTO "users" DEFAULT VALUES', [])

    def test_insert_rejects_ragged_rows(self):
        with pytest.raises(ValueError):
            build_insert("users", ["a", "b"], [[1]])

    def test_insert_requires_rows(self):
        with pytest.raises(ValueError):
            build_insert("users", ["a"], [])

    def test_select_with_order_and_limit(self):
        sql, params = build_select("users", {"email": "x@example.com"}, order_by="id", limit=1)
        assert sql == 'SELECT * FROM "users" WHERE "email" = ? ORDER BY "id" LIMIT 1'
        assert params == ["x@example.com"]

    def test_count(self):
        sql, params = build_count("users", {"last_name": "Doe"})
        assert sql == 'SELECT COUNT(*) AS total FROM "users" WHERE "last_name" = ?'
        assert params == ["Doe"]

    def test_update_all_matches(self):
        sql, params = build_update("users", {"first_name": "joe"}, {"last_name": "Doe"})
        assert sql == 'UPDATE "users" SET "first_name" = ? WHERE "last_name" = ?'
        assert params == ["joe", "Doe"]

    def test_update_first_match_is_scoped_by_key(self):
        sql, params = build_update("users", {"first_name": "joe"}, {"last_name": "Doe"}, first_by="id")
        assert sql == (
            'UPDATE "users" SET "first_name" = ? WHERE "id" IN '
            '(SELECT "id" FROM "users" WHERE "last_name" = ? ORDER BY "id" LIMIT 1)'
        )
        assert params == ["joe", "Doe"]

    def test_update_requires_values(self):
        with pytest.raises(ValueError):
            build_update("users", {}, {"id": 1})

    def test_delete_first_match(self):
        sql, params = build_delete("users", {"first_name": "John"}, first_by="id")
        assert sql == (
            'DELETE FROM "users" WHERE "id" IN '
            '(SELECT "id" FROM "users" WHERE "first_name" = ? ORDER BY "id" LIMIT 1)'
        )
        assert params == ["John"]

    def test_identifiers_are_validated(self):
        with pytest.raises(ValueError):
            build_select("users; DROP TABLE users")
