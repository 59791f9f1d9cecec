"""
db/executor.py
--------------
Runs `$n`-style parameterized queries on a psycopg2 cursor.

psycopg2 only understands ``%s`` / ``%(name)s`` placeholders, so each
``$n`` is rewritten to ``%(pn)s`` and the positional values are passed as a
mapping. A placeholder may therefore appear more than once in the same
statement (e.g. a keyword matched against two columns).
"""

import re
from typing import Any, Optional, Sequence

from psycopg2 import errors

from errors import DuplicateError
from utils.logger import get_logger

logger = get_logger(__name__)

_PLACEHOLDER = re.compile(r"\$(\d+)")


def to_pyformat(sql: str, params: Optional[Sequence[Any]] = None) -> tuple[str, Optional[dict]]:
    """
    Rewrite ``$n`` placeholders for psycopg2.

    Literal ``%`` characters in the SQL text are escaped.

    Returns:
        Tuple of (rewritten SQL, {"p1": value1, ...}). The mapping is None
        when there is nothing to bind, in which case the text is untouched.
    """
    params = list(params or [])
    if not params and not _PLACEHOLDER.search(sql):
        return sql, None
    used = {int(n) for n in _PLACEHOLDER.findall(sql)}
    if used and max(used) > len(params):
        raise ValueError(f"Query uses ${max(used)} but only {len(params)} values were given")

    text = _PLACEHOLDER.sub(lambda m: f"%(p{m.group(1)})s", sql.replace("%", "%%"))
    return text, {f"p{i}": value for i, value in enumerate(params, start=1)}


class QueryRunner:
    """Thin wrapper around a dict cursor; one instance per transaction."""

    def __init__(self, cursor):
        self._cur = cursor

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> int:
        """
        Execute a statement.

        Returns:
            Number of rows affected.

        Raises:
            DuplicateError: On a unique constraint violation.
        """
        text, named = to_pyformat(sql, params)
        logger.debug(f"SQL ({len(params or [])} values): {' '.join(sql.split())}")
        try:
            self._cur.execute(text, named)
        except errors.UniqueViolation as e:
            detail = e.diag.message_detail or e.diag.message_primary
            logger.warning(f"Unique constraint violated: {detail}")
            raise DuplicateError(f"Duplicate: {detail}") from e
        return self._cur.rowcount

    def fetch_all(self, sql: str, params: Optional[Sequence[Any]] = None) -> list[dict]:
        """Execute a query and return every row as a dict."""
        self.execute(sql, params)
        return [dict(row) for row in self._cur.fetchall()]

    def fetch_one(self, sql: str, params: Optional[Sequence[Any]] = None) -> Optional[dict]:
        """Execute a query and return the first row, or None."""
        self.execute(sql, params)
        row = self._cur.fetchone()
        return dict(row) if row else None
