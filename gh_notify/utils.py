"""the beautiful world start from here."""

from __future__ import annotations

import re

TRUTHY = frozenset({"1", "true", "yes", "on"})

_LINE_BREAKS = re.compile(r"[\r\n]+")


def parse_thread_id(s: str | None) -> int | None:
    """Return a positive int thread id or None if invalid."""
    try:
        v = int(s)
        return v if v > 0 else None
    except (ValueError, TypeError):
        return None


def parse_flag(s: str | None) -> bool:
    """Boolean-like action input: ``true``/``1``/``yes``/``on`` are true."""
    return (s or "").strip().lower() in TRUTHY


def last_segment(ref: str | None) -> str | None:
    """
    Last ``/`` separated segment of a git ref.

    Example
    -------
    'refs/heads/feature/login' → 'login'
    """
    if not ref:
        return None
    return str(ref).rsplit("/", 1)[-1]


def collapse_newlines(s: str) -> str:
    return _LINE_BREAKS.sub(" ", s)
