"""
repositories/result_repo.py
----------------------------
Data access layer for workout results.
All SQL queries related to the `results` table live here.
"""

from typing import Optional

from errors import NotFoundError
from models.result import Result
from repositories.base import Repository
from utils.dates import normalize_dates
from utils.logger import get_logger
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

logger = get_logger(__name__)

RESULT_FIELDS = FieldMap(
    Field("user_id", "user_id"),
    Field("family_id", "family_id"),
    Field("workout_id", "workout_id"),
    Field("score", "score"),
    Field("notes", "notes", CompareMode.PARTIAL_MATCH),
    Field("complete_date", "complete_date", CompareMode.DATE_EQUALS),
)
RESULT_UPDATES = RESULT_FIELDS.only("score", "notes", "complete_date")

RESULT_COLUMNS = f"""
    id, user_id, family_id, workout_id, score, notes,
    {date_column("complete_date", "complete_date")},
    {date_column("create_date", "create_date")},
    {date_column("modify_date", "modify_date")}
"""


class ResultRepository(Repository):
    """Repository for CRUD operations on the results table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, data: dict) -> Result:
        """
        Log a result.

        Args:
            data: Must include user_id, family_id and workout_id; may include
                score, notes and complete_date (date or ISO-8601 timestamp).

        Raises:
            NotFoundError: If the user, family or workout does not exist.
        """
        data = normalize_dates(data, ["complete_date"])
        with self._transaction() as db:
            self._ensure_exists(db, "users", data.get("user_id"), "user")
            self._ensure_exists(db, "families", data.get("family_id"), "family")
            self._ensure_exists(db, "workouts", data.get("workout_id"), "workout")

            insert = build_insert_query(data, RESULT_FIELDS)
            row = db.fetch_one(
                f"INSERT INTO results {insert.sql} RETURNING {RESULT_COLUMNS}",
                insert.values,
            )
        logger.info(f"User {row['user_id']} logged result #{row['id']} for workout {row['workout_id']}")
        return Result.from_row(row)

    # ── READ ──────────────────────────────────────────────

    def find_all(self, filters: Optional[dict] = None) -> list[Result]:
        """
        Fetch results matching optional filters.

        Filters: user_id, family_id, workout_id, score (exact), notes
        (partial match), complete_date (same day).
        """
        where = build_filter_query(filters, RESULT_FIELDS)
        with self._transaction() as db:
            rows = db.fetch_all(
                f"SELECT {RESULT_COLUMNS} FROM results {where.sql} ORDER BY id",
                where.values,
            )
        return [Result.from_row(r) for r in rows]

    def find(self, result_id: int) -> Result:
        """
        Raises:
            NotFoundError: If there is no such result.
        """
        with self._transaction() as db:
            row = db.fetch_one(f"SELECT {RESULT_COLUMNS} FROM results WHERE id = $1", [result_id])
        if not row:
            raise NotFoundError(f"No result: {result_id}")
        return Result.from_row(row)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, result_id: int, data: dict) -> Result:
        """
        Update a result.

        Args:
            data: Any of score, notes, complete_date.

        Raises:
            EmptyInputError: If no updatable field is supplied.
            NotFoundError: If there is no such result.
        """
        params = QueryParams()
        set_clause = build_update_query(normalize_dates(data, ["complete_date"]), RESULT_UPDATES, params)
        id_ph = params.add(result_id)
        with self._transaction() as db:
            row = db.fetch_one(
                f"""
                UPDATE results
                {set_clause.sql}, modify_date = CURRENT_TIMESTAMP
                WHERE id = {id_ph}
                RETURNING {RESULT_COLUMNS}
                """,
                params.values,
            )
        if not row:
            raise NotFoundError(f"No result: {result_id}")
        logger.info(f"Updated result #{result_id}")
        return Result.from_row(row)

    # ── DELETE ────────────────────────────────────────────

    def remove(self, result_id: int) -> None:
        """
        Delete a result and its comments.

        Raises:
            NotFoundError: If there is no such result.
        """
        with self._transaction() as db:
            self._ensure_exists(db, "results", result_id, "result")
            db.execute("DELETE FROM comments WHERE result_id = $1", [result_id])
            if not db.fetch_one("DELETE FROM results WHERE id = $1 RETURNING id", [result_id]):
                raise NotFoundError(f"No result: {result_id}")
        logger.info(f"Deleted result #{result_id}")
