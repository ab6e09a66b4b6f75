"""todos command-line interface."""

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from . import __version__
from .core import (
    add_task,
    completed_ids,
    full_edit,
    quick_edit,
    remove_all,
    remove_selected,
)
from .display import EMPTY_LISTING, format_task, render_list
from .models import STORE_FILENAME, PromptCancelled, TodoError
from .prompts import (
    prompt_multi_select,
    prompt_optional_text,
    prompt_select,
    prompt_text,
    prompt_yes_no,
)
from .storage import Store

log = logging.getLogger(__name__)

# Interactive menu shown when no subcommand is given: (label, subcommand).
MENU = [
    ("Add a new todo", "add"),
    ("Edit an existing todo", "edit"),
    ("Remove todos", "remove"),
    ("List all todos", "list"),
]


def _truthy_env(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def cmd_add(args: argparse.Namespace) -> None:
    """Add one todo. Surrounding whitespace is stripped, inner text kept as typed."""
    if args.text is not None:
        short_desc, long_desc = args.text.strip(), None
    else:
        short_desc = prompt_text("What do you need to do?")
        long_desc = prompt_optional_text("Any additional details?")
    tasks = args.store.load()
    tasks, task = add_task(tasks, short_desc, long_desc, strict=args.strict)
    args.store.save(tasks)
    print(f"Added: {task.short_desc}")


def cmd_edit(args: argparse.Namespace) -> None:
    tasks = args.store.load()
    if not tasks:
        print(f"{EMPTY_LISTING} Nothing to edit.")
        return

    if not args.full:
        done = completed_ids(tasks)
        chosen = prompt_multi_select(
            "Which todos are complete?",
            tasks,
            format_task,
            defaults=[t for t in tasks if t.id in done],
        )
        tasks = quick_edit(tasks, [t.id for t in chosen])
        args.store.save(tasks)
        print(f"{len(chosen)} of {len(tasks)} todo(s) marked complete.")
        return

    selection = prompt_select("Select a todo", tasks, format_task)
    short_desc = prompt_text("What do you need to do?", default=selection.short_desc)
    long_desc = prompt_optional_text(
        "Any additional details?", default=selection.long_desc
    )
    completed = prompt_yes_no("Complete?", default=selection.completed)
    tasks = full_edit(
        tasks, selection.id, short_desc, long_desc, completed, strict=args.strict
    )
    args.store.save(tasks)
    print(f"Edited: {short_desc}")


def cmd_remove(args: argparse.Namespace) -> None:
    tasks = args.store.load()
    if not tasks:
        print(EMPTY_LISTING)
        return

    if args.all:
        confirmed = prompt_yes_no(f"Remove all {len(tasks)} todo(s)?", default=False)
        if not confirmed:
            print("Nothing removed.")
            return
        args.store.save(remove_all(tasks, confirmed))
        print(f"Removed {len(tasks)} todo(s).")
        return

    while True:
        chosen = prompt_multi_select("Which todos should be removed?", tasks, format_task)
        if not chosen:
            print("Nothing removed.")
            return
        if prompt_yes_no(f"Remove {len(chosen)} todo(s)?", default=False):
            break

    args.store.save(remove_selected(tasks, [t.id for t in chosen]))
    print(f"Removed {len(chosen)} todo(s).")


def cmd_list(args: argparse.Namespace) -> None:
    tasks = args.store.load()
    for line in render_list(tasks, show_created=args.created, show_long=args.long):
        print(line)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    p = argparse.ArgumentParser(
        prog="todos",
        description=(
            "Manage a list of todos kept in the current directory. "
            "Running with no subcommand starts an interactive menu."
        ),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument(
        "-d",
        "--dir",
        default=os.environ.get("TODOS_DIR"),
        help=f"Directory holding {STORE_FILENAME} (default: current directory, or $TODOS_DIR)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    sub = p.add_subparsers(dest="cmd")

    s_add = sub.add_parser("add", help="Add a new todo to the list")
    s_add.add_argument("text", nargs="?", help="Short description; prompts if omitted")
    s_add.set_defaults(func=cmd_add)

    s_edit = sub.add_parser("edit", help="Edit existing todos")
    s_edit.add_argument(
        "--full", action="store_true", help="Edit every field of one todo"
    )
    s_edit.set_defaults(func=cmd_edit)

    s_remove = sub.add_parser("remove", aliases=["rm"], help="Remove todos from the list")
    s_remove.add_argument("--all", action="store_true", help="Remove every todo")
    s_remove.set_defaults(func=cmd_remove)

    s_list = sub.add_parser("list", aliases=["ls"], help="List all todos")
    s_list.add_argument("--created", action="store_true", help="Show creation times")
    s_list.add_argument("--long", action="store_true", help="Show long descriptions")
    s_list.set_defaults(func=cmd_list)

    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point. Shows the menu if no subcommand is given."""
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    try:
        if args.cmd is None:
            _, cmd = prompt_select("What would you like to do?", MENU, lambda m: m[0])
            args = parser.parse_args(argv + [cmd])

        args.store = Store.from_cwd(args.dir)
        args.strict = _truthy_env(os.environ.get("TODOS_STRICT"))
        log.debug("running %s against %s", args.cmd, args.store.path)
        args.func(args)
    except PromptCancelled:
        print("Cancelled.", file=sys.stderr)
        sys.exit(130)
    except TodoError as e:
        sys.exit(f"todos: {e}")


if __name__ == "__main__":
    main()
