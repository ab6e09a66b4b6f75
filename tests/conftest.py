"""Shared fixtures for the todos test suite."""

from datetime import datetime

import pytest

from todos.models import Task
from todos.storage import Store


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's own TODOS_* settings out of the tests."""
    monkeypatch.delenv("TODOS_DIR", raising=False)
    monkeypatch.delenv("TODOS_STRICT", raising=False)


@pytest.fixture
def store(tmp_path):
    return Store(str(tmp_path))


@pytest.fixture
def sample_tasks():
    """alpha (done), bravo (open), charlie (done), already in canonical order."""
    return [
        Task(
            short_desc="alpha",
            long_desc="first one",
            completed=True,
            created_at=datetime(2024, 1, 1, 9, 0, 0, 123456).astimezone(),
        ),
        Task(
            short_desc="bravo",
            created_at=datetime(2024, 1, 2, 9, 0).astimezone(),
        ),
        Task(
            short_desc="charlie",
            long_desc="",
            completed=True,
            created_at=datetime(2024, 1, 3, 9, 0).astimezone(),
        ),
    ]


@pytest.fixture
def feed_input(monkeypatch):
    """Script the answers given to input(); EOF once they run out."""

    def _feed(*answers):
        queue = list(answers)

        def fake_input(prompt=""):
            if not queue:
                raise EOFError
            return queue.pop(0)

        monkeypatch.setattr("builtins.input", fake_input)
        return queue

    return _feed
