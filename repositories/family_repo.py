"""
repositories/family_repo.py
----------------------------
Data access layer for families.
All SQL queries related to the `families` table live here.
"""

from typing import Optional

from errors import NotFoundError
from models.family import Family
from repositories.base import Repository
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

FAMILY_FIELDS = FieldMap(
    Field("family_name", "family_name", CompareMode.PARTIAL_MATCH),
    Field("join_code", "join_code"),
    Field("image_url", "image_url"),
    Field("bio", "bio", CompareMode.PARTIAL_MATCH),
)
FAMILY_FILTERS = FAMILY_FIELDS.only("family_name", "join_code", "bio")

FAMILY_COLUMNS = f"""
    id, family_name, join_code, image_url, bio,
    {date_column("create_date", "create_date")},
    {date_column("modify_date", "modify_date")}
"""


class FamilyRepository(Repository):
    """Repository for CRUD operations on the families table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, data: dict) -> Family:
        """
        Insert a new family.

        Args:
            data: Must include family_name; may include join_code, image_url, bio.

        Raises:
            DuplicateError: If the join code is already taken.
        """
        insert = build_insert_query(data, FAMILY_FIELDS)
        with self._transaction() as db:
            row = db.fetch_one(
                f"INSERT INTO families {insert.sql} RETURNING {FAMILY_COLUMNS}",
                insert.values,
            )
        logger.info(f"Created family #{row['id']} '{row['family_name']}'")
        return Family.from_row(row)

    # ── READ ──────────────────────────────────────────────

    def find_all(self, filters: Optional[dict] = None) -> list[Family]:
        """
        Fetch all families matching optional filters.

        Filters: family_name, bio (partial match), join_code (exact).
        """
        where = build_filter_query(filters, FAMILY_FILTERS)
        with self._transaction() as db:
            rows = db.fetch_all(
                f"SELECT {FAMILY_COLUMNS} FROM families {where.sql} ORDER BY family_name, id",
                where.values,
            )
        return [Family.from_row(r) for r in rows]

    def find(self, family_id: int) -> Family:
        """
        Fetch a family with a summary of its members.

        Raises:
            NotFoundError: If there is no such family.
        """
        with self._transaction() as db:
            return self._find(db, family_id)

    def _find(self, db, family_id: int) -> Family:
        row = db.fetch_one(f"SELECT {FAMILY_COLUMNS} FROM families WHERE id = $1", [family_id])
        if not row:
            raise NotFoundError(f"No family: {family_id}")

        users = db.fetch_all(
            """
            SELECT uf.user_id, u.first_name, u.last_name, uf.mem_status, uf.is_admin
            FROM users_families uf
            JOIN users u ON uf.user_id = u.id
            WHERE uf.family_id = $1
            ORDER BY u.last_name, u.first_name, uf.user_id
            """,
            [family_id],
        )
        return Family.from_row(row, users=users)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, family_id: int, data: dict) -> Family:
        """
        Update a family.

        Args:
            data: Any of family_name, join_code, image_url, bio.

        Raises:
            EmptyInputError: If no updatable field is supplied.
            NotFoundError: If there is no such family.
        """
        params = QueryParams()
        set_clause = build_update_query(data, FAMILY_FIELDS, params)
        id_ph = params.add(family_id)
        with self._transaction() as db:
            row = db.fetch_one(
                f"""
                UPDATE families
                {set_clause.sql}, modify_date = CURRENT_TIMESTAMP
                WHERE id = {id_ph}
                RETURNING id
                """,
                params.values,
            )
            if not row:
                raise NotFoundError(f"No family: {family_id}")
            family = self._find(db, family_id)
        logger.info(f"Updated family #{family_id}")
        return family

    # ── DELETE ────────────────────────────────────────────

    def remove(self, family_id: int) -> None:
        """
        Delete a family with its memberships, postings, results and the
        comments on those results.

        Raises:
            NotFoundError: If there is no such family.
        """
        with self._transaction() as db:
            self._ensure_exists(db, "families", family_id, "family")
            db.execute(
                "DELETE FROM comments WHERE result_id IN (SELECT id FROM results WHERE family_id = $1)",
                [family_id],
            )
            db.execute("DELETE FROM results WHERE family_id = $1", [family_id])
            db.execute("DELETE FROM postings WHERE family_id = $1", [family_id])
            db.execute("DELETE FROM users_families WHERE family_id = $1", [family_id])
            if not db.fetch_one("DELETE FROM families WHERE id = $1 RETURNING id", [family_id]):
                raise NotFoundError(f"No family: {family_id}")
        logger.info(f"Deleted family #{family_id}")
