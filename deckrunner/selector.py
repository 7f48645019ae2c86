"""Include/skip filtering of deck names with single-``*`` wildcards."""

import re
from functools import lru_cache
from typing import Iterable, Sequence, TypeVar

T = TypeVar("T")


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern:
    """Anchored regex for a pattern; ``*`` is any run, everything else literal."""
    body = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.compile(f"^{body}$", re.DOTALL)


def matches(name: str, pattern: str) -> bool:
    if not pattern:
        return True
    if "*" not in pattern:
        return name == pattern
    return compile_pattern(pattern).match(name) is not None


def is_selected(name: str, include: Sequence[str] = (), exclude: Sequence[str] = ()) -> bool:
    """True if name passes the include list (empty = all) and no skip pattern."""
    if include and not any(matches(name, p) for p in include):
        return False
    return not any(matches(name, p) for p in exclude)


def select_decks(decks: Iterable[T], include: Sequence[str] = (), exclude: Sequence[str] = ()) -> list[T]:
    """Filter decks (Deck objects or plain names), keeping discovery order."""
    return [
        deck for deck in decks
        if is_selected(getattr(deck, "name", deck), include, exclude)
    ]
