"""Joins rendered symbols into the final summary text."""

from __future__ import annotations

from collections.abc import Iterable

from codeshrink.config.constants import SUMMARY_HEADER


def assemble_summary(original_lines: int, blocks: Iterable[tuple[str, str]]) -> str:
    """Render the header, then each (doc comment, body) block in the given order.

    Blocks are separated by a blank line and trailing whitespace is trimmed.
    """
    parts = [SUMMARY_HEADER.format(original_lines=original_lines), "\n\n"]
    for doc_comment, body in blocks:
        if doc_comment:
            parts.append(doc_comment)
            parts.append("\n")
        parts.append(body)
        parts.append("\n\n")
    return "".join(parts).rstrip()
