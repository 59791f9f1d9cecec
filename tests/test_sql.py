"""Tests for the SQL fragment builders in utils/sql.py."""

import pytest

from errors import BadRequestError, EmptyInputError
from utils.sql import (
    CompareMode,
    Field,
    FieldMap,
    QueryParams,
    build_filter_query,
    build_insert_query,
    build_update_query,
    date_column,
)

FIELDS = FieldMap(
    Field("family_name", "family_name", CompareMode.PARTIAL_MATCH),
    Field("user_id", "user_id"),
    Field("post_date", "post_date", CompareMode.DATE_EQUALS),
    Field("image_url", "image_url"),
)


# ---------------------------------------------------------------------------
# FieldMap
# ---------------------------------------------------------------------------


def test_field_map_lookup_and_order():
    assert "user_id" in FIELDS
    assert "nope" not in FIELDS
    assert FIELDS.column("family_name") == "family_name"
    assert [f.name for f in FIELDS] == ["family_name", "user_id", "post_date", "image_url"]


def test_field_map_only_keeps_requested_fields():
    subset = FIELDS.only("user_id", "image_url")
    assert len(subset) == 2
    assert "family_name" not in subset


def test_field_map_only_rejects_unknown_names():
    with pytest.raises(KeyError):
        FIELDS.only("user_id", "bogus")


def test_field_map_rejects_duplicate_names():
    with pytest.raises(ValueError):
        FieldMap(Field("a", "a"), Field("a", "b"))


# ---------------------------------------------------------------------------
# build_insert_query
# ---------------------------------------------------------------------------


def test_insert_keeps_input_order():
    frag = build_insert_query({"user_id": 3, "family_name": "Smiths", "image_url": "x.png"}, FIELDS)

    assert frag.sql == "(user_id, family_name, image_url) VALUES ($1, $2, $3)"
    assert frag.values == [3, "Smiths", "x.png"]


def test_insert_placeholders_line_up_with_values():
    data = {"image_url": "a", "post_date": "2024-01-02", "user_id": 9, "family_name": "F"}
    frag = build_insert_query(data, FIELDS)

    columns = frag.sql.split(" VALUES ")[0].strip("()").split(", ")
    placeholders = frag.sql.split(" VALUES ")[1].strip("()").split(", ")
    assert len(placeholders) == len(data)
    for i, column in enumerate(columns):
        assert placeholders[i] == f"${i + 1}"
        name = next(f.name for f in FIELDS if f.column == column)
        assert frag.values[i] == data[name]


def test_insert_ignores_unknown_fields():
    frag = build_insert_query({"bogus": 1, "user_id": 2}, FIELDS)

    assert frag.sql == "(user_id) VALUES ($1)"
    assert frag.values == [2]


def test_insert_binds_none_as_null():
    data = {"user_id": 2, "image_url": None}
    frag = build_insert_query(data, FIELDS)

    assert frag.sql == "(user_id, image_url) VALUES ($1, $2)"
    assert frag.values == [2, None]
    assert len(frag.values) == len(data)


def test_insert_empty_raises():
    with pytest.raises(EmptyInputError):
        build_insert_query({}, FIELDS)


def test_insert_with_only_unknown_fields_raises():
    with pytest.raises(EmptyInputError):
        build_insert_query({"bogus": 1}, FIELDS)


def test_empty_input_error_is_bad_request():
    with pytest.raises(BadRequestError) as exc:
        build_insert_query({}, FIELDS)
    assert exc.value.status == 400


# ---------------------------------------------------------------------------
# build_filter_query
# ---------------------------------------------------------------------------


def test_filter_empty_returns_empty_clause():
    frag = build_filter_query({}, FIELDS)
    assert frag.sql == ""
    assert frag.values == []


def test_filter_none_returns_empty_clause():
    assert build_filter_query(None, FIELDS).sql == ""


def test_filter_equals():
    frag = build_filter_query({"user_id": 5}, FIELDS)
    assert frag.sql == "WHERE user_id = $1"
    assert frag.values == [5]


def test_filter_partial_match_wraps_value():
    frag = build_filter_query({"family_name": "abc"}, FIELDS)
    assert frag.sql == "WHERE family_name ILIKE $1"
    assert frag.values == ["%abc%"]


def test_filter_date_equals_casts_column():
    frag = build_filter_query({"post_date": "2024-03-05"}, FIELDS)
    assert frag.sql == "WHERE post_date::date = $1"
    assert frag.values == ["2024-03-05"]


def test_filter_joins_with_and_in_input_order():
    frag = build_filter_query({"post_date": "2024-03-05", "user_id": 1, "family_name": "x"}, FIELDS)

    assert frag.sql == "WHERE post_date::date = $1 AND user_id = $2 AND family_name ILIKE $3"
    assert frag.values == ["2024-03-05", 1, "%x%"]


def test_filter_skips_unknown_and_none():
    frag = build_filter_query({"bogus": 1, "user_id": None}, FIELDS)
    assert frag.sql == ""


def test_filter_false_is_a_value():
    fields = FieldMap(Field("is_admin", "is_admin"))
    frag = build_filter_query({"is_admin": False}, fields)
    assert frag.sql == "WHERE is_admin = $1"
    assert frag.values == [False]


# ---------------------------------------------------------------------------
# build_update_query
# ---------------------------------------------------------------------------


def test_update_set_clause():
    frag = build_update_query({"family_name": "New", "image_url": "y"}, FIELDS)
    assert frag.sql == "SET family_name = $1, image_url = $2"
    assert frag.values == ["New", "y"]


def test_update_keeps_none_as_null():
    frag = build_update_query({"image_url": None}, FIELDS)
    assert frag.sql == "SET image_url = $1"
    assert frag.values == [None]


def test_update_ignores_unknown_fields():
    frag = build_update_query({"image_url": "a", "password": "x"}, FIELDS)
    assert frag.sql == "SET image_url = $1"


def test_update_empty_raises():
    with pytest.raises(EmptyInputError):
        build_update_query({}, FIELDS)


# ---------------------------------------------------------------------------
# QueryParams composition
# ---------------------------------------------------------------------------


def test_shared_params_continue_numbering():
    params = QueryParams()
    set_clause = build_update_query({"family_name": "A", "image_url": "b"}, FIELDS, params)
    id_ph = params.add(42)

    assert set_clause.sql == "SET family_name = $1, image_url = $2"
    assert set_clause.values == ["A", "b"]
    assert id_ph == "$3"
    assert params.values == ["A", "b", 42]


def test_filter_after_existing_params():
    params = QueryParams(["first"])
    frag = build_filter_query({"user_id": 7}, FIELDS, params)

    assert frag.sql == "WHERE user_id = $2"
    assert frag.values == [7]
    assert params.values == ["first", 7]


def test_date_column():
    assert date_column("p.post_date", "post_date") == "TO_CHAR(p.post_date, 'YYYYMMDD') AS post_date"
