"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
All SQL queries related to the `users` table live here.
"""

from typing import Optional

from errors import DuplicateError, NotFoundError
from models.user import User
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

USER_FIELDS = FieldMap(
    Field("email", "email", CompareMode.PARTIAL_MATCH),
    Field("password", "user_password"),
    Field("first_name", "first_name", CompareMode.PARTIAL_MATCH),
    Field("last_name", "last_name", CompareMode.PARTIAL_MATCH),
    Field("is_admin", "is_admin"),
    Field("user_status", "user_status"),
    Field("image_url", "image_url"),
    Field("bio", "bio", CompareMode.PARTIAL_MATCH),
)
USER_FILTERS = USER_FIELDS.only("email", "first_name", "last_name", "is_admin", "user_status", "bio")
USER_UPDATES = USER_FIELDS.only("password", "first_name", "last_name", "user_status", "image_url", "bio")

USER_COLUMNS = f"""
    id, email, first_name, last_name, is_admin, user_status, image_url, bio,
    {date_column("create_date", "create_date")},
    {date_column("modify_date", "modify_date")}
"""


class UserRepository(Repository):
    """Repository for CRUD operations on the users table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, data: dict) -> User:
        """
        Insert a new user.

        Args:
            data: Must include email, password (already hashed), first_name
                and last_name; may include is_admin, user_status, image_url, bio.

        Returns:
            The created User (without families).

        Raises:
            DuplicateError: If the email is already registered.
        """
        with self._transaction() as db:
            if db.fetch_one("SELECT id FROM users WHERE email = $1", [data.get("email")]):
                raise DuplicateError(f"Duplicate email: {data.get('email')}")

            insert = build_insert_query(data, USER_FIELDS)
            row = db.fetch_one(
                f"INSERT INTO users {insert.sql} RETURNING {USER_COLUMNS}",
                insert.values,
            )
        logger.info(f"Created user #{row['id']}")
        return User.from_row(row)

    # ── READ ──────────────────────────────────────────────

    def find_all(self, filters: Optional[dict] = None) -> list[User]:
        """
        Fetch all users matching optional filters.

        Filters: email, first_name, last_name, bio (partial match),
        is_admin, user_status (exact).
        """
        where = build_filter_query(filters, USER_FILTERS)
        with self._transaction() as db:
            rows = db.fetch_all(
                f"SELECT {USER_COLUMNS} FROM users {where.sql} ORDER BY id",
                where.values,
            )
        return [User.from_row(r) for r in rows]

    def find(self, user_id: int) -> User:
        """
        Fetch a user with the families they belong to.

        Raises:
            NotFoundError: If there is no such user.
        """
        with self._transaction() as db:
            return self._find(db, user_id)

    def _find(self, db, user_id: int) -> User:
        row = db.fetch_one(f"SELECT {USER_COLUMNS} FROM users WHERE id = $1", [user_id])
        if not row:
            raise NotFoundError(f"No user: {user_id}")

        families = db.fetch_all(
            """
            SELECT uf.family_id, f.family_name, uf.mem_status, uf.is_admin, uf.primary_family
            FROM users_families uf
            JOIN families f ON uf.family_id = f.id
            WHERE uf.user_id = $1
            ORDER BY uf.family_id
            """,
            [user_id],
        )
        return User.from_row(row, families=families)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, user_id: int, data: dict) -> User:
        """
        Update a user's profile.

        Args:
            data: Any of password, first_name, last_name, user_status,
                image_url, bio. At least one is required.

        Raises:
            EmptyInputError: If no updatable field is supplied.
            NotFoundError: If there is no such user.
        """
        params = QueryParams()
        set_clause = build_update_query(data, USER_UPDATES, params)
        id_ph = params.add(user_id)
        with self._transaction() as db:
            row = db.fetch_one(
                f"""
                UPDATE users
                {set_clause.sql}, modify_date = CURRENT_TIMESTAMP
                WHERE id = {id_ph}
                RETURNING id
                """,
                params.values,
            )
            if not row:
                raise NotFoundError(f"No user: {user_id}")
            user = self._find(db, user_id)
        logger.info(f"Updated user #{user_id}")
        return user

    # ── DELETE ────────────────────────────────────────────

    def remove(self, user_id: int) -> None:
        """
        Delete a user together with everything that hangs off them:
        comments they wrote, comments on their results, their results and
        memberships. Postings and workouts they created are kept and lose
        their creator reference.

        Raises:
            NotFoundError: If there is no such user.
        """
        with self._transaction() as db:
            self._ensure_exists(db, "users", user_id, "user")
            db.execute(
                """
                DELETE FROM comments
                WHERE user_id = $1
                   OR result_id IN (SELECT id FROM results WHERE user_id = $1)
                """,
                [user_id],
            )
            db.execute("DELETE FROM results WHERE user_id = $1", [user_id])
            db.execute("DELETE FROM users_families WHERE user_id = $1", [user_id])
            db.execute("UPDATE postings SET post_by = NULL WHERE post_by = $1", [user_id])
            db.execute("UPDATE workouts SET create_by = NULL WHERE create_by = $1", [user_id])
            if not db.fetch_one("DELETE FROM users WHERE id = $1 RETURNING id", [user_id]):
                raise NotFoundError(f"No user: {user_id}")
        logger.info(f"Deleted user #{user_id}")
