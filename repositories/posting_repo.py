"""
repositories/posting_repo.py
-----------------------------
Data access layer for postings (workouts assigned to a family on a date).

Postings are always read joined with their workout so callers get the
workout's name, description and score type without a second lookup.
"""

from typing import Optional

from errors import NotFoundError
from models.posting import Posting
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

POSTING_FIELDS = FieldMap(
    Field("family_id", "family_id"),
    Field("workout_id", "wo_id"),
    Field("post_date", "post_date", CompareMode.DATE_EQUALS),
    Field("post_by", "post_by"),
)
POSTING_UPDATES = POSTING_FIELDS.only("post_date")

# Filters run against the joined view, so columns are qualified.
POSTING_FILTERS = FieldMap(
    Field("family_id", "p.family_id"),
    Field("workout_id", "p.wo_id"),
    Field("post_date", "p.post_date", CompareMode.DATE_EQUALS),
    Field("post_by", "p.post_by"),
)

POSTING_VIEW = f"""
    SELECT p.id, p.family_id, p.wo_id AS workout_id, p.post_by,
           {date_column("p.post_date", "post_date")},
           {date_column("p.create_date", "create_date")},
           {date_column("p.modify_date", "modify_date")},
           w.wo_name AS workout_name,
           w.wo_description AS workout_description,
           w.score_type
    FROM postings p
    JOIN workouts w ON w.id = p.wo_id
"""


class PostingRepository(Repository):
    """Repository for CRUD operations on the postings table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, data: dict) -> Posting:
        """
        Post a workout to a family.

        Args:
            data: Must include family_id and workout_id; may include
                post_date and post_by.

        Raises:
            NotFoundError: If the family, workout or poster does not exist.
        """
        data = normalize_dates(data, ["post_date"])
        with self._transaction() as db:
            self._ensure_exists(db, "families", data.get("family_id"), "family")
            self._ensure_exists(db, "workouts", data.get("workout_id"), "workout")
            if data.get("post_by") is not None:
                self._ensure_exists(db, "users", data["post_by"], "user")

            insert = build_insert_query(data, POSTING_FIELDS)
            row = db.fetch_one(f"INSERT INTO postings {insert.sql} RETURNING id", insert.values)
            posting = self._find(db, row["id"])
        logger.info(f"Posted workout {posting.workout_id} to family {posting.family_id} (#{posting.id})")
        return posting

    # ── READ ──────────────────────────────────────────────

    def find_all(self, filters: Optional[dict] = None) -> list[Posting]:
        """
        Fetch postings matching optional filters.

        Filters: family_id, workout_id, post_by (exact), post_date (same day).
        """
        where = build_filter_query(filters, POSTING_FILTERS)
        with self._transaction() as db:
            rows = db.fetch_all(
                f"{POSTING_VIEW} {where.sql} ORDER BY p.post_date DESC, p.id",
                where.values,
            )
        return [Posting.from_row(r) for r in rows]

    def find(self, posting_id: int) -> Posting:
        """
        Raises:
            NotFoundError: If there is no such posting.
        """
        with self._transaction() as db:
            return self._find(db, posting_id)

    def _find(self, db, posting_id: int) -> Posting:
        row = db.fetch_one(f"{POSTING_VIEW} WHERE p.id = $1", [posting_id])
        if not row:
            raise NotFoundError(f"No posting: {posting_id}")
        return Posting.from_row(row)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, posting_id: int, data: dict) -> Posting:
        """
        Reschedule a posting. Only post_date can change.

        Raises:
            EmptyInputError: If post_date is not supplied.
            NotFoundError: If there is no such posting.
        """
        params = QueryParams()
        set_clause = build_update_query(normalize_dates(data, ["post_date"]), POSTING_UPDATES, params)
        id_ph = params.add(posting_id)
        with self._transaction() as db:
            row = db.fetch_one(
                f"""
                UPDATE postings
                {set_clause.sql}, modify_date = CURRENT_TIMESTAMP
                WHERE id = {id_ph}
                RETURNING id
                """,
                params.values,
            )
            if not row:
                raise NotFoundError(f"No posting: {posting_id}")
            posting = self._find(db, posting_id)
        logger.info(f"Updated posting #{posting_id}")
        return posting

    # ── DELETE ────────────────────────────────────────────

    def remove(self, posting_id: int) -> None:
        """
        Raises:
            NotFoundError: If there is no such posting.
        """
        with self._transaction() as db:
            if not db.fetch_one("DELETE FROM postings WHERE id = $1 RETURNING id", [posting_id]):
                raise NotFoundError(f"No posting: {posting_id}")
        logger.info(f"Deleted posting #{posting_id}")
