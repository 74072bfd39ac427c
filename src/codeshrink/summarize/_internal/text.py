"""Line and bracket helpers shared by the summarizers."""

from __future__ import annotations

_OPENERS = {"(": ")", "[": "]", "{": "}"}


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` the way tree-sitter counts rows.

    A single trailing newline does not start a new line and a trailing
    ``\\r`` is dropped from each line. ``""`` has no lines.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def first_line(text: str) -> str:
    lines = split_lines(text)
    return lines[0] if lines else text


def indent_of(line: str) -> int:
    return len(line) - len(line.lstrip())


def find_top_level(text: str, marker: str, nesting: str = "([") -> int:
    """Index of the first ``marker`` outside the brackets listed in ``nesting``.

    Returns -1 when the marker never appears at depth zero. Unbalanced
    closers are ignored rather than driving the depth negative.
    """
    closers = {_OPENERS[c] for c in nesting}
    depth = 0
    i = 0
    while i < len(text):
        if depth == 0 and text.startswith(marker, i):
            return i
        ch = text[i]
        if ch in nesting:
            depth += 1
        elif ch in closers and depth > 0:
            depth -= 1
        i += 1
    return -1


def bracket_balance(line: str, openers: str = "([{") -> int:
    """Openers minus closers on one line, for the bracket kinds in ``openers``."""
    return sum(line.count(c) - line.count(_OPENERS[c]) for c in openers)
