"""
repositories/base.py
--------------------
Common wiring for repositories: the transaction factory and existence checks.
"""

from typing import Callable, ContextManager, Optional

from db.connection import transaction as pooled_transaction
from db.executor import QueryRunner
from errors import NotFoundError

TransactionFactory = Callable[[], ContextManager[QueryRunner]]


class Repository:
    """
    Base class for repositories.

    Args:
        transaction: Factory returning a context manager that yields a
            `QueryRunner`. Defaults to the pooled `db.connection.transaction`.
    """

    def __init__(self, transaction: Optional[TransactionFactory] = None):
        self._transaction = transaction or pooled_transaction

    @staticmethod
    def _ensure_exists(db: QueryRunner, table: str, record_id, kind: str) -> None:
        """Raise NotFoundError(``No <kind>: <id>``) unless `table` has the id."""
        if not db.fetch_one(f"SELECT id FROM {table} WHERE id = $1", [record_id]):
            raise NotFoundError(f"No {kind}: {record_id}")
