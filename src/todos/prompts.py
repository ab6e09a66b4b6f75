"""Terminal prompts. Every function returns already-resolved values."""

import re
from typing import Callable, Collection, List, Optional, Sequence, TypeVar

from .models import PromptCancelled

T = TypeVar("T")

SKIP = "-"
SPLIT_RE = re.compile(r"[\s,]+")


def _ask(prompt: str) -> str:
    try:
        return input(prompt)
    except (EOFError, KeyboardInterrupt):
        print()
        raise PromptCancelled("prompt cancelled") from None


def prompt_text(question: str, default: Optional[str] = None) -> str:
    """Free text. A blank answer keeps ``default`` (or gives "")."""
    hint = f" [{default}]" if default else ""
    ans = _ask(f"{question}{hint}: ").strip()
    if not ans:
        return default or ""
    return ans


def prompt_optional_text(
    question: str, default: Optional[str] = None
) -> Optional[str]:
    """Like prompt_text, but '-' skips the field and returns None."""
    hint = f" [{default}]" if default else ""
    ans = _ask(f"{question}{hint} ('{SKIP}' to skip): ").strip()
    if ans == SKIP:
        return None
    if not ans:
        return default
    return ans


def prompt_yes_no(question: str, default: bool = False) -> bool:
    """y/n prompt; blank answer gives ``default``."""
    hint = "[Y/n]" if default else "[y/N]"
    while True:
        ans = _ask(f"{question} {hint}: ").strip().lower()
        if not ans:
            return default
        if ans in ("y", "yes"):
            return True
        if ans in ("n", "no"):
            return False
        print("Please answer y or n.")


def _print_items(items: Sequence[T], fmt: Callable[[T], str]) -> None:
    for i, item in enumerate(items, start=1):
        print(f"{i:>3}. {fmt(item)}")


def _parse_index(token: str, count: int) -> Optional[int]:
    if not token.isdigit():
        return None
    n = int(token)
    if n < 1 or n > count:
        return None
    return n - 1


def prompt_select(
    question: str, items: Sequence[T], fmt: Callable[[T], str] = str
) -> T:
    """Pick exactly one item by its number."""
    if not items:
        raise ValueError("nothing to select from")
    _print_items(items, fmt)
    while True:
        ans = _ask(f"{question} (1-{len(items)}): ").strip()
        idx = _parse_index(ans, len(items))
        if idx is not None:
            return items[idx]
        print("Invalid choice.")


def prompt_multi_select(
    question: str,
    items: Sequence[T],
    fmt: Callable[[T], str] = str,
    defaults: Collection[T] = (),
) -> List[T]:
    """Pick any number of items.

    Answer with numbers separated by spaces or commas. A blank answer keeps
    the pre-selected ``defaults``; 'none' selects nothing.
    """
    if not items:
        return []
    for i, item in enumerate(items, start=1):
        mark = "*" if item in defaults else " "
        print(f"{i:>3}.{mark} {fmt(item)}")
    while True:
        ans = _ask(f"{question} (numbers, blank=keep *, 'none'=clear): ").strip()
        if not ans:
            return [item for item in items if item in defaults]
        if ans.lower() == "none":
            return []
        picked = [_parse_index(tok, len(items)) for tok in SPLIT_RE.split(ans) if tok]
        if None in picked:
            print("Invalid choice.")
            continue
        chosen = set(picked)
        return [item for i, item in enumerate(items) if i in chosen]
