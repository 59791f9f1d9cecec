"""
Shared fixtures.

Unit tests run repositories against `FakeDatabase`, which hands out a
scripted runner instead of a pooled connection: each query pops the next
canned result (a list of row dicts) and is recorded for assertions.
"""

from contextlib import contextmanager

import pytest


def squash(sql: str) -> str:
    """Collapse whitespace so SQL can be compared as one line."""
    return " ".join(sql.split())


class FakeRunner:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls: list[tuple[str, list]] = []

    def _next(self, sql, params):
        self.calls.append((squash(sql), list(params or [])))
        if not self.responses:
            raise AssertionError(f"Unexpected query: {squash(sql)}")
        return list(self.responses.pop(0))

    def execute(self, sql, params=None):
        return len(self._next(sql, params))

    def fetch_all(self, sql, params=None):
        return self._next(sql, params)

    def fetch_one(self, sql, params=None):
        rows = self._next(sql, params)
        return rows[0] if rows else None


class FakeDatabase:
    def __init__(self, *responses):
        self.runner = FakeRunner(responses)
        self.commits = 0
        self.rollbacks = 0

    @contextmanager
    def transaction(self):
        try:
            yield self.runner
        except Exception:
            self.rollbacks += 1
            raise
        self.commits += 1

    @property
    def calls(self):
        return self.runner.calls

    @property
    def sql(self):
        return [sql for sql, _ in self.runner.calls]


@pytest.fixture
def fake_db():
    """Factory: ``db = fake_db([row], [], ...)`` scripts one response per query."""
    return FakeDatabase
