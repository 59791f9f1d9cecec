"""
repositories/membership_repo.py
--------------------------------
Data access layer for memberships (the `users_families` table).

A membership is identified by the (user_id, family_id) pair; there is at
most one row per pair.
"""

from typing import Optional

from errors import DuplicateError, NotFoundError
from models.membership import Membership
from repositories.base import Repository
from utils.logger import get_logger
from utils.sql import (
    Field,
    FieldMap,
    QueryParams,
    build_filter_query,
    build_insert_query,
    build_update_query,
    date_column,
)

logger = get_logger(__name__)

MEMBERSHIP_FIELDS = FieldMap(
    Field("user_id", "user_id"),
    Field("family_id", "family_id"),
    Field("mem_status", "mem_status"),
    Field("is_admin", "is_admin"),
    Field("primary_family", "primary_family"),
)
MEMBERSHIP_UPDATES = MEMBERSHIP_FIELDS.only("mem_status", "is_admin", "primary_family")

MEMBERSHIP_COLUMNS = f"""
    user_id, family_id, mem_status, is_admin, primary_family,
    {date_column("create_date", "create_date")},
    {date_column("modify_date", "modify_date")}
"""


class MembershipRepository(Repository):
    """Repository for CRUD operations on the users_families table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, data: dict) -> Membership:
        """
        Add a user to a family.

        The user and the family are checked first so the error names the
        missing record; the duplicate check comes after. The primary key is
        the final guard against concurrent inserts of the same pair.

        Args:
            data: Must include user_id and family_id; may include
                mem_status, is_admin, primary_family.

        Raises:
            NotFoundError: If the user or the family does not exist.
            DuplicateError: If the user is already a member of the family.
        """
        user_id, family_id = data.get("user_id"), data.get("family_id")
        with self._transaction() as db:
            self._ensure_exists(db, "users", user_id, "user")
            self._ensure_exists(db, "families", family_id, "family")

            if db.fetch_one(
                "SELECT user_id FROM users_families WHERE user_id = $1 AND family_id = $2",
                [user_id, family_id],
            ):
                raise DuplicateError(f"User {user_id} is already a member of family: {family_id}")

            insert = build_insert_query(data, MEMBERSHIP_FIELDS)
            row = db.fetch_one(
                f"INSERT INTO users_families {insert.sql} RETURNING {MEMBERSHIP_COLUMNS}",
                insert.values,
            )
        logger.info(f"User {user_id} joined family {family_id}")
        return Membership.from_row(row)

    # ── READ ──────────────────────────────────────────────

    def find_all(self, filters: Optional[dict] = None) -> list[Membership]:
        """
        Fetch memberships matching optional filters.

        Filters (all exact): user_id, family_id, mem_status, is_admin,
        primary_family.
        """
        where = build_filter_query(filters, MEMBERSHIP_FIELDS)
        with self._transaction() as db:
            rows = db.fetch_all(
                f"""
                SELECT {MEMBERSHIP_COLUMNS}
                FROM users_families
                {where.sql}
                ORDER BY user_id, family_id
                """,
                where.values,
            )
        return [Membership.from_row(r) for r in rows]

    def find(self, user_id: int, family_id: int) -> Membership:
        """
        Fetch one membership.

        Raises:
            NotFoundError: If the user, the family or the membership does not exist.
        """
        with self._transaction() as db:
            self._ensure_exists(db, "users", user_id, "user")
            self._ensure_exists(db, "families", family_id, "family")
            return self._find(db, user_id, family_id)

    def _find(self, db, user_id: int, family_id: int) -> Membership:
        row = db.fetch_one(
            f"""
            SELECT {MEMBERSHIP_COLUMNS}
            FROM users_families
            WHERE user_id = $1 AND family_id = $2
            """,
            [user_id, family_id],
        )
        if not row:
            raise NotFoundError(f"User {user_id} is not a member of family: {family_id}")
        return Membership.from_row(row)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, user_id: int, family_id: int, data: dict) -> Membership:
        """
        Update a membership.

        Args:
            data: Any of mem_status, is_admin, primary_family.

        Raises:
            EmptyInputError: If no updatable field is supplied.
            NotFoundError: If the membership does not exist.
        """
        params = QueryParams()
        set_clause = build_update_query(data, MEMBERSHIP_UPDATES, params)
        user_ph, family_ph = params.add(user_id), params.add(family_id)
        with self._transaction() as db:
            row = db.fetch_one(
                f"""
                UPDATE users_families
                {set_clause.sql}, modify_date = CURRENT_TIMESTAMP
                WHERE user_id = {user_ph} AND family_id = {family_ph}
                RETURNING user_id
                """,
                params.values,
            )
            if not row:
                raise NotFoundError(f"User {user_id} is not a member of family: {family_id}")
            membership = self._find(db, user_id, family_id)
        logger.info(f"Updated membership {user_id}-{family_id}")
        return membership

    # ── DELETE ────────────────────────────────────────────

    def remove(self, user_id: int, family_id: int) -> None:
        """
        Remove a user from a family. Results logged in the family are kept.

        Raises:
            NotFoundError: If the membership does not exist.
        """
        with self._transaction() as db:
            row = db.fetch_one(
                """
                DELETE FROM users_families
                WHERE user_id = $1 AND family_id = $2
                RETURNING user_id
                """,
                [user_id, family_id],
            )
            if not row:
                raise NotFoundError(f"User {user_id} is not a member of family: {family_id}")
        logger.info(f"User {user_id} left family {family_id}")
