"""Data models, errors and constants for todos."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

STORE_FILENAME = "todos.json"


def now() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()


@dataclass(frozen=True, eq=False)
class Task:
    """A single todo record.

    Identity is the ``id`` alone: two Task objects with the same id compare
    equal even if their other fields differ. ``long_desc`` of None means the
    user gave no details, which is not the same as an empty string.
    """

    short_desc: str
    long_desc: Optional[str] = None
    completed: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=now)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class TodoError(Exception):
    """Base class for every error the store reports."""


class PersistenceError(TodoError):
    """The store file could not be read, parsed or written."""


class UnreadableStoreError(PersistenceError):
    """The store file exists but could not be read."""


class MalformedStoreError(PersistenceError):
    """The store file was read but is not a valid collection."""


class SelectionError(TodoError):
    """A task id used to relocate a record is not in the collection."""


class EmptyDescriptionError(TodoError, ValueError):
    """Strict mode rejected an empty short description."""


class PromptCancelled(TodoError):
    """The user aborted an interactive prompt."""
