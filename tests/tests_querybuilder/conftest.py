"""
Shared fixtures and fake collaborators for querybuilder tests.

Key fixtures:
- fake_executor: records every execute() call and replays scripted results.
- fake_db: database handle whose connection is the fake executor.
- disconnected_db: database handle with no connection.
"""

from types import SimpleNamespace

import pytest


class FakeExecutor:
    """
    Stand-in for SQLAlchemyExecutor.

    results: list consumed one item per execute() call; an Exception item is
    raised instead of returned. When exhausted, default_result is returned.
    """

    def __init__(self, results=None, default_result=None):
        self.calls = []
        self._results = list(results or [])
        self.default_result = default_result if default_result is not None else SimpleNamespace(affected_rows=1)

    def execute(self, sql, params=None):
        self.calls.append((sql, list(params or [])))
        if self._results:
            result = self._results.pop(0)
            if isinstance(result, Exception):
                raise result
            return result
        return self.default_result

    @property
    def statements(self):
        return [sql for sql, _ in self.calls]


@pytest.fixture
def fake_executor():
    return FakeExecutor()


@pytest.fixture
def executor_factory():
    """Factory building a FakeExecutor with scripted results."""
    def factory(results=None, default_result=None):
        return FakeExecutor(results=results, default_result=default_result)
    return factory


@pytest.fixture
def fake_db(fake_executor):
    return SimpleNamespace(connection=fake_executor)


@pytest.fixture
def disconnected_db():
    return SimpleNamespace(connection=None)
