"""
repositories/comment_repo.py
-----------------------------
Data access layer for comments on results.
"""

from typing import Optional

from errors import NotFoundError
from models.comment import Comment
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

COMMENT_FIELDS = FieldMap(
    Field("result_id", "result_id"),
    Field("user_id", "user_id"),
    Field("content", "content", CompareMode.PARTIAL_MATCH),
)
COMMENT_UPDATES = COMMENT_FIELDS.only("content")

COMMENT_COLUMNS = f"""
    id, result_id, user_id, content,
    {date_column("create_date", "create_date")},
    {date_column("modify_date", "modify_date")}
"""


class CommentRepository(Repository):
    """Repository for CRUD operations on the comments table."""

    def create(self, data: dict) -> Comment:
        """
        Add a comment to a result.

        Args:
            data: Must include result_id, user_id and content.

        Raises:
            NotFoundError: If the result or the user does not exist.
        """
        with self._transaction() as db:
            self._ensure_exists(db, "results", data.get("result_id"), "result")
            self._ensure_exists(db, "users", data.get("user_id"), "user")

            insert = build_insert_query(data, COMMENT_FIELDS)
            row = db.fetch_one(
                f"INSERT INTO comments {insert.sql} RETURNING {COMMENT_COLUMNS}",
                insert.values,
            )
        logger.info(f"User {row['user_id']} commented on result {row['result_id']} (#{row['id']})")
        return Comment.from_row(row)

    def find_all(self, filters: Optional[dict] = None) -> list[Comment]:
        """Filters: result_id, user_id (exact), content (partial match)."""
        where = build_filter_query(filters, COMMENT_FIELDS)
        with self._transaction() as db:
            rows = db.fetch_all(
                f"SELECT {COMMENT_COLUMNS} FROM comments {where.sql} ORDER BY id",
                where.values,
            )
        return [Comment.from_row(r) for r in rows]

    def find(self, comment_id: int) -> Comment:
        with self._transaction() as db:
            row = db.fetch_one(f"SELECT {COMMENT_COLUMNS} FROM comments WHERE id = $1", [comment_id])
        if not row:
            raise NotFoundError(f"No comment: {comment_id}")
        return Comment.from_row(row)

    def update(self, comment_id: int, data: dict) -> Comment:
        """Edit a comment's content."""
        params = QueryParams()
        set_clause = build_update_query(data, COMMENT_UPDATES, params)
        id_ph = params.add(comment_id)
        with self._transaction() as db:
            row = db.fetch_one(
                f"""
                UPDATE comments
                {set_clause.sql}, modify_date = CURRENT_TIMESTAMP
                WHERE id = {id_ph}
                RETURNING {COMMENT_COLUMNS}
                """,
                params.values,
            )
        if not row:
            raise NotFoundError(f"No comment: {comment_id}")
        return Comment.from_row(row)

    def remove(self, comment_id: int) -> None:
        with self._transaction() as db:
            if not db.fetch_one("DELETE FROM comments WHERE id = $1 RETURNING id", [comment_id]):
                raise NotFoundError(f"No comment: {comment_id}")
        logger.info(f"Deleted comment #{comment_id}")
