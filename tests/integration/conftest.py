"""
Fixtures for tests that run against a real PostgreSQL database.

The database named by TEST_DATABASE_URL is wiped and recreated for every
test. When it cannot be reached the whole module is skipped.
"""

import psycopg2
import pytest

from config import TEST_DATABASE_URL
from db.connection import close_pool, init_pool
from db.init_db import create_tables, drop_tables


@pytest.fixture(scope="session")
def database():
    try:
        init_pool(dsn=TEST_DATABASE_URL)
    except psycopg2.OperationalError:
        pytest.skip("Database not available for tests")
    yield
    drop_tables()
    close_pool()


@pytest.fixture(autouse=True)
def fresh_schema(database):
    drop_tables()
    create_tables()
