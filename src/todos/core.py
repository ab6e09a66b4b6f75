"""Todo mutation helpers (pure functions, no I/O)."""

import dataclasses
import logging
import uuid
from datetime import datetime
from typing import Iterable, List, Optional, Set, Tuple

from .models import EmptyDescriptionError, SelectionError, Task, now as _now

log = logging.getLogger(__name__)


def check_description(short_desc: str, strict: bool) -> None:
    """In strict mode, reject a blank short description."""
    if strict and not short_desc.strip():
        raise EmptyDescriptionError("short description must not be empty")


def index_of(tasks: List[Task], task_id: uuid.UUID) -> int:
    """Return the 0-based position of the task with ``task_id``."""
    for i, t in enumerate(tasks):
        if t.id == task_id:
            return i
    raise SelectionError(f"task {task_id} is not in the collection")


def completed_ids(tasks: List[Task]) -> Set[uuid.UUID]:
    return {t.id for t in tasks if t.completed}


def add_task(
    tasks: List[Task],
    short_desc: str,
    long_desc: Optional[str] = None,
    now: Optional[datetime] = None,
    strict: bool = False,
) -> Tuple[List[Task], Task]:
    """Append a new open task; returns (new list, new task)."""
    check_description(short_desc, strict)
    task = Task(
        short_desc=short_desc,
        long_desc=long_desc,
        completed=False,
        created_at=now or _now(),
    )
    log.debug("adding task %s", task.id)
    return tasks + [task], task


def quick_edit(tasks: List[Task], selected_ids: Iterable[uuid.UUID]) -> List[Task]:
    """Re-derive every completion flag from one selection.

    Selected tasks become completed, all others become open. This is not a
    toggle: an empty selection marks everything open.
    """
    selected = set(selected_ids)
    for task_id in selected:
        index_of(tasks, task_id)
    return [
        t if t.completed == (t.id in selected)
        else dataclasses.replace(t, completed=t.id in selected)
        for t in tasks
    ]


def full_edit(
    tasks: List[Task],
    task_id: uuid.UUID,
    short_desc: str,
    long_desc: Optional[str],
    completed: bool,
    strict: bool = False,
) -> List[Task]:
    """Replace every mutable field of one task, located by id.

    ``id`` and ``created_at`` are carried over from the existing record.
    """
    check_description(short_desc, strict)
    idx = index_of(tasks, task_id)
    updated = dataclasses.replace(
        tasks[idx], short_desc=short_desc, long_desc=long_desc, completed=completed
    )
    result = list(tasks)
    result[idx] = updated
    log.debug("edited task %s", task_id)
    return result


def remove_selected(
    tasks: List[Task], selected_ids: Iterable[uuid.UUID]
) -> List[Task]:
    """Drop exactly the selected ids; everything else keeps its order."""
    selected = set(selected_ids)
    for task_id in selected:
        index_of(tasks, task_id)
    log.debug("removing %d task(s)", len(selected))
    return [t for t in tasks if t.id not in selected]


def remove_all(tasks: List[Task], confirmed: bool) -> List[Task]:
    """Clear the collection if confirmed, otherwise return it unchanged."""
    if not confirmed:
        return list(tasks)
    log.debug("removing all %d task(s)", len(tasks))
    return []
