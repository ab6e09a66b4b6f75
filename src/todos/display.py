"""Plain-text rendering of tasks."""

from typing import List

from .models import Task

EMPTY_LISTING = "(no todos)"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


def format_task(task: Task, show_created: bool = False) -> str:
    """One-line view: completion marker, short description, optional date."""
    marker = "[x]" if task.completed else "[ ]"
    line = f"{marker} {task.short_desc}"
    if show_created:
        line += f"  ({task.created_at.astimezone().strftime(TIMESTAMP_FORMAT)})"
    return line


def render_list(
    tasks: List[Task], show_created: bool = False, show_long: bool = False
) -> List[str]:
    if not tasks:
        return [EMPTY_LISTING]
    lines = []
    for t in tasks:
        lines.append(format_task(t, show_created))
        if show_long and t.long_desc:
            lines.extend(f"      {part}" for part in t.long_desc.splitlines())
    return lines
