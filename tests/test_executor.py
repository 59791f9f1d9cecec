"""Tests for db/executor.py placeholder rewriting and error translation."""

from unittest.mock import MagicMock

import pytest
from psycopg2 import errors

from db.executor import QueryRunner, to_pyformat
from errors import DuplicateError


def test_rewrites_dollar_placeholders():
    sql, params = to_pyformat("SELECT * FROM users WHERE id = $1 AND email = $2", [3, "a@b.c"])

    assert sql == "SELECT * FROM users WHERE id = %(p1)s AND email = %(p2)s"
    assert params == {"p1": 3, "p2": "a@b.c"}


def test_repeated_placeholder_binds_once():
    sql, params = to_pyformat("WHERE wo_name ILIKE $1 OR wo_description ILIKE $1", ["%press%"])

    assert sql == "WHERE wo_name ILIKE %(p1)s OR wo_description ILIKE %(p1)s"
    assert params == {"p1": "%press%"}


def test_literal_percent_is_escaped():
    sql, _ = to_pyformat("SELECT '100%' WHERE id = $1", [1])
    assert sql == "SELECT '100%%' WHERE id = %(p1)s"


def test_no_params_leaves_text_untouched():
    assert to_pyformat("SELECT '100%'") == ("SELECT '100%'", None)


def test_missing_value_raises():
    with pytest.raises(ValueError):
        to_pyformat("WHERE a = $1 AND b = $2", [1])


def test_fetch_one_returns_dict_or_none():
    cur = MagicMock()
    cur.fetchone.return_value = {"id": 1}
    runner = QueryRunner(cur)

    assert runner.fetch_one("SELECT id FROM users WHERE id = $1", [1]) == {"id": 1}
    cur.execute.assert_called_once_with("SELECT id FROM users WHERE id = %(p1)s", {"p1": 1})

    cur.fetchone.return_value = None
    assert runner.fetch_one("SELECT id FROM users WHERE id = $1", [2]) is None


def test_unique_violation_becomes_duplicate_error():
    class FakeUniqueViolation(errors.UniqueViolation):
        diag = MagicMock(message_detail="Key (user_id, family_id)=(1, 2) already exists.")

    cur = MagicMock()
    cur.execute.side_effect = FakeUniqueViolation()
    runner = QueryRunner(cur)

    with pytest.raises(DuplicateError) as exc:
        runner.execute("INSERT INTO users_families (user_id, family_id) VALUES ($1, $2)", [1, 2])
    assert "already exists" in exc.value.message
