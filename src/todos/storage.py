"""File I/O for the todo store."""

import json
import logging
import os
import tempfile
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from .models import (
    STORE_FILENAME,
    MalformedStoreError,
    PersistenceError,
    Task,
    UnreadableStoreError,
)

log = logging.getLogger(__name__)


def task_to_dict(task: Task) -> Dict[str, Any]:
    return {
        "id": str(task.id),
        "short_desc": task.short_desc,
        "long_desc": task.long_desc,
        "completed": task.completed,
        "created_at": task.created_at.isoformat(timespec="microseconds"),
    }


def task_from_dict(raw: Any) -> Task:
    """Build a Task from one decoded JSON record.

    Raises MalformedStoreError on missing keys or wrong types.
    """
    if not isinstance(raw, dict):
        raise MalformedStoreError(f"expected an object, got {type(raw).__name__}")
    try:
        tid, short_desc, completed, created = (
            raw["id"],
            raw["short_desc"],
            raw["completed"],
            raw["created_at"],
        )
    except KeyError as e:
        raise MalformedStoreError(f"record is missing field {e.args[0]!r}") from e
    long_desc = raw.get("long_desc")

    if not isinstance(short_desc, str):
        raise MalformedStoreError("short_desc must be a string")
    if long_desc is not None and not isinstance(long_desc, str):
        raise MalformedStoreError("long_desc must be a string or null")
    if not isinstance(completed, bool):
        raise MalformedStoreError("completed must be a boolean")
    if not isinstance(tid, str) or not isinstance(created, str):
        raise MalformedStoreError("id and created_at must be strings")
    try:
        parsed_id = uuid.UUID(tid)
        created_at = datetime.fromisoformat(created)
    except ValueError as e:
        raise MalformedStoreError(f"bad id or timestamp: {e}") from e

    return Task(
        id=parsed_id,
        short_desc=short_desc,
        long_desc=long_desc,
        completed=completed,
        created_at=created_at,
    )


def canonical_order(tasks: List[Task]) -> List[Task]:
    """Sort by short description (case-sensitive), then id."""
    return sorted(tasks, key=lambda t: (t.short_desc, str(t.id)))


class Store:
    """Handle on one todos file, resolved against a base directory."""

    def __init__(self, base_dir: str):
        self.base_dir = os.path.abspath(base_dir)
        self.path = os.path.join(self.base_dir, STORE_FILENAME)

    @classmethod
    def from_cwd(cls, base_dir: Optional[str] = None) -> "Store":
        """Store in ``base_dir`` or, when omitted, the current directory now."""
        return cls(base_dir if base_dir else os.getcwd())

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def load(self) -> List[Task]:
        """Load every task from disk.

        A missing file is an empty list. Read failures raise
        UnreadableStoreError; bad content raises MalformedStoreError.
        """
        if not self.exists():
            log.debug("no store at %s, starting empty", self.path)
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise MalformedStoreError(f"{self.path} is not valid UTF-8") from e
        except OSError as e:
            raise UnreadableStoreError(f"cannot read {self.path}: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedStoreError(f"{self.path} is not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise MalformedStoreError(f"{self.path} must hold a JSON array")

        tasks: List[Task] = []
        seen = set()
        for raw in data:
            task = task_from_dict(raw)
            if task.id in seen:
                raise MalformedStoreError(f"duplicate id {task.id} in {self.path}")
            seen.add(task.id)
            tasks.append(task)

        log.debug("loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: List[Task]) -> None:
        """Rewrite the whole file from in-memory state, atomically."""
        ids = [t.id for t in tasks]
        if len(set(ids)) != len(ids):
            raise PersistenceError("refusing to save a collection with duplicate ids")

        try:
            payload = json.dumps(
                [task_to_dict(t) for t in canonical_order(tasks)],
                indent=2,
                ensure_ascii=False,
            )
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"cannot serialize tasks: {e}") from e

        # Write through a symlinked todos.json to its target.
        target = os.path.realpath(self.path)
        tmp_path = None
        try:
            mode = _file_mode(target)
            try:
                fd, tmp_path = tempfile.mkstemp(
                    prefix=".todos-", suffix=".tmp", dir=os.path.dirname(target)
                )
            except PermissionError:
                if not (os.path.exists(target) and os.access(target, os.W_OK)):
                    raise
                # Directory is read-only but the file is writable.
                log.debug("cannot create temp file next to %s, writing in place", target)
                with open(target, "w", encoding="utf-8") as f:
                    f.write(payload + "\n")
            else:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload + "\n")
                    f.flush()
                    os.fsync(f.fileno())
                os.chmod(tmp_path, mode)
                os.replace(tmp_path, target)
                tmp_path = None
        except OSError as e:
            raise PersistenceError(f"cannot write {self.path}: {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)

        log.debug("saved %d task(s) to %s", len(tasks), self.path)


def _file_mode(path: str) -> int:
    """Permission bits of ``path``, or what the umask gives a new file."""
    try:
        return os.stat(path).st_mode & 0o7777
    except FileNotFoundError:
        mask = os.umask(0)
        os.umask(mask)
        return 0o666 & ~mask
