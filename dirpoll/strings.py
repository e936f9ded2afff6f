"""String helpers used for path handling."""

from __future__ import annotations


def split(text: str, sep: str, push_empty: bool = False) -> list[str]:
    """Split ``text`` on ``sep``.

    Empty pieces are dropped unless ``push_empty`` is true; a trailing
    empty piece is always dropped.
    """
    parts = text.split(sep)
    if not push_empty:
        return [part for part in parts if part]
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def str_starts_with(start: str, text: str) -> int:
    """Return the index of the last character of ``start`` if ``text`` begins with it, else -1.

    An empty ``start`` yields -1.
    """
    if start and text.startswith(start):
        return len(start) - 1
    return -1