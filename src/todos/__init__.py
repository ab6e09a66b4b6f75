"""todos - a small per-directory todo list."""

__version__ = "0.1.0"

from .models import (
    STORE_FILENAME,
    Task,
    TodoError,
    PersistenceError,
    UnreadableStoreError,
    MalformedStoreError,
    SelectionError,
    EmptyDescriptionError,
    PromptCancelled,
)
from .storage import Store
from .core import (
    add_task,
    quick_edit,
    full_edit,
    remove_selected,
    remove_all,
    completed_ids,
)
from .display import format_task, render_list

__all__ = [
    "STORE_FILENAME",
    "Task",
    "TodoError",
    "PersistenceError",
    "UnreadableStoreError",
    "MalformedStoreError",
    "SelectionError",
    "EmptyDescriptionError",
    "PromptCancelled",
    "Store",
    "add_task",
    "quick_edit",
    "full_edit",
    "remove_selected",
    "remove_all",
    "completed_ids",
    "format_task",
    "render_list",
]
