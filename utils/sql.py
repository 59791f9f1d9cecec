"""
utils/sql.py
------------
Helpers that turn a sparse mapping of application fields into parameterized
SQL fragments.

Each repository declares a `FieldMap` describing which application fields it
knows about, which column each one lives in and how it is compared when used
as a filter. The builders only emit fragments for keys that are present both
in the input data and in the map; anything else is ignored.

Placeholders use the `$1, $2, ...` style. All builders accept an optional
`QueryParams` so that several fragments (and any hand-written clauses a
repository adds afterwards) share one contiguous numbering.

Example:
    >>> fields = FieldMap(
    ...     Field("family_name", "family_name", CompareMode.PARTIAL_MATCH),
    ...     Field("join_code", "join_code"),
    ... )
    >>> build_filter_query({"family_name": "smith"}, fields)
    Fragment(sql='WHERE family_name ILIKE $1', values=['%smith%'])
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Mapping, NamedTuple, Optional

from errors import EmptyInputError


class CompareMode(Enum):
    """How a field is compared when it appears in a filter."""

    EQUALS = "equals"
    PARTIAL_MATCH = "partial_match"
    DATE_EQUALS = "date_equals"


@dataclass(frozen=True)
class Field:
    """One application field and the column that stores it."""

    name: str
    column: str
    mode: CompareMode = CompareMode.EQUALS


class FieldMap:
    """
    Ordered, read-only table of `Field` descriptors.

    Lookups by application name; iteration follows declaration order.
    """

    def __init__(self, *fields: Field):
        self._fields: dict[str, Field] = {}
        for f in fields:
            if f.name in self._fields:
                raise ValueError(f"Field declared twice: {f.name}")
            self._fields[f.name] = f

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, name: str) -> Field:
        return self._fields[name]

    def column(self, name: str) -> str:
        return self._fields[name].column

    def only(self, *names: str) -> "FieldMap":
        """Return a new map limited to `names` (e.g. the updatable fields)."""
        missing = [n for n in names if n not in self._fields]
        if missing:
            raise KeyError(f"Unknown fields: {', '.join(missing)}")
        return FieldMap(*(self._fields[n] for n in names))

    def present(self, data: Optional[Mapping[str, Any]], skip_none: bool = False) -> list[tuple[Field, Any]]:
        """Pair each known key of `data` with its descriptor, in `data` order."""
        if not data:
            return []
        return [
            (self._fields[key], value)
            for key, value in data.items()
            if key in self._fields and not (skip_none and value is None)
        ]


class Fragment(NamedTuple):
    """SQL text and the values bound to its placeholders, in order."""

    sql: str
    values: list


class QueryParams:
    """
    Append-only list of bound values.

    `add()` stores a value and returns its placeholder, so the placeholder
    number and the position of the value can never drift apart.
    """

    def __init__(self, values: Optional[list] = None):
        self._values: list = list(values or [])

    def add(self, value: Any) -> str:
        self._values.append(value)
        return f"${len(self._values)}"

    @property
    def values(self) -> list:
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)


def _tail(params: QueryParams, start: int) -> list:
    """Values added to `params` since `start`."""
    return params.values[start:]


def build_insert_query(
    data: Mapping[str, Any], fields: FieldMap, params: Optional[QueryParams] = None
) -> Fragment:
    """
    Build the column list and VALUES clause of an INSERT.

    Keys are emitted in the order they appear in `data`; a None value binds
    as NULL. Callers that want a column default leave the key out.

    Returns:
        Fragment like ``(col_a, col_b) VALUES ($1, $2)``.

    Raises:
        EmptyInputError: If no known field is present.
    """
    pairs = fields.present(data)
    if not pairs:
        raise EmptyInputError("No data")

    params = params if params is not None else QueryParams()
    start = len(params)
    columns = [f.column for f, _ in pairs]
    placeholders = [params.add(value) for _, value in pairs]

    sql = f"({', '.join(columns)}) VALUES ({', '.join(placeholders)})"
    return Fragment(sql, _tail(params, start))


def build_filter_query(
    data: Optional[Mapping[str, Any]], fields: FieldMap, params: Optional[QueryParams] = None
) -> Fragment:
    """
    Build a WHERE clause from the filters present in `data`.

    Conditions are joined with AND. PARTIAL_MATCH fields match
    case-insensitively anywhere in the column; DATE_EQUALS fields compare the
    date part of the column with the value as given.

    Returns:
        Fragment like ``WHERE col_a = $1 AND col_b ILIKE $2``, or an empty
        fragment when nothing applies.
    """
    params = params if params is not None else QueryParams()
    start = len(params)
    conditions = []

    for f, value in fields.present(data, skip_none=True):
        if f.mode is CompareMode.PARTIAL_MATCH:
            conditions.append(f"{f.column} ILIKE {params.add(f'%{value}%')}")
        elif f.mode is CompareMode.DATE_EQUALS:
            conditions.append(f"{f.column}::date = {params.add(value)}")
        else:
            conditions.append(f"{f.column} = {params.add(value)}")

    if not conditions:
        return Fragment("", [])
    return Fragment("WHERE " + " AND ".join(conditions), _tail(params, start))


def build_update_query(
    data: Mapping[str, Any], fields: FieldMap, params: Optional[QueryParams] = None
) -> Fragment:
    """
    Build the SET clause of an UPDATE.

    None values are kept and set the column to NULL.

    Returns:
        Fragment like ``SET col_a = $1, col_b = $2``.

    Raises:
        EmptyInputError: If no known field is present.
    """
    pairs = fields.present(data)
    if not pairs:
        raise EmptyInputError("No data")

    params = params if params is not None else QueryParams()
    start = len(params)
    assignments = [f"{f.column} = {params.add(value)}" for f, value in pairs]

    return Fragment("SET " + ", ".join(assignments), _tail(params, start))


def date_column(column: str, alias: str) -> str:
    """Select a timestamp column as a ``YYYYMMDD`` string."""
    return f"TO_CHAR({column}, 'YYYYMMDD') AS {alias}"
