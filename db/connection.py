"""
db/connection.py
----------------
Owns the psycopg2 SimpleConnectionPool and hands out one pooled connection
per transaction. Repositories never touch connections directly; they open
`transaction()` and talk to the `QueryRunner` it yields.

Call `init_pool()` once at startup (tests pass TEST_DATABASE_URL as `dsn`)
and `close_pool()` on shutdown.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import pool, extras

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from db.executor import QueryRunner
from errors import AppError
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None


def init_pool(
    min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX, dsn: Optional[str] = None
) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
        dsn: Connection string; defaults to DATABASE_URL.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, dsn or DATABASE_URL)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_connection():
    """
    Borrow a connection; pair every call with `release_connection`.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """Give a borrowed connection back. A no-op once the pool is closed."""
    if _pool is not None:
        _pool.putconn(conn)


@contextmanager
def transaction() -> Iterator[QueryRunner]:
    """
    Run a block of queries in a single transaction.

    Commits when the block exits normally; rolls back and re-raises on any
    exception. Application errors (not found, duplicate, ...) are expected
    outcomes and are not logged here. The connection always goes back to
    the pool.

    Usage:
        with transaction() as db:
            row = db.fetch_one("SELECT id FROM users WHERE id = $1", [user_id])
    """
    conn = get_connection()
    try:
        with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
            yield QueryRunner(cur)
        conn.commit()
    except AppError:
        conn.rollback()
        raise
    except Exception as e:
        conn.rollback()
        logger.error(f"Transaction rolled back: {e}")
        raise
    finally:
        release_connection(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")
