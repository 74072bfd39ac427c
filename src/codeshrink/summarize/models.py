"""Data models for the summarization engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from codeshrink.summarize._internal.text import split_lines


@dataclass(frozen=True, slots=True)
class CapturedSymbol:
    """One top-level construct matched by a language's summarization query."""

    kind: str  # capture name: function, class, const_decl, ...
    text: str  # verbatim source slice
    start_line: int  # zero-based row
    start_byte: int  # zero-based byte offset, used only for ordering


@dataclass(frozen=True, slots=True)
class Summary:
    """Rendered summary plus provenance."""

    summary: str
    original_lines: int
    language_id: str
    original_chars: int = 0
    success: bool = True

    @property
    def summary_lines(self) -> int:
        return len(split_lines(self.summary))

    @property
    def summary_chars(self) -> int:
        return len(self.summary)

    @property
    def char_reduction(self) -> float:
        """Percentage of characters removed (0.0 for empty input)."""
        if not self.original_chars:
            return 0.0
        return 100.0 * (1.0 - self.summary_chars / self.original_chars)

    @property
    def line_reduction(self) -> float:
        """Percentage of lines removed (0.0 for empty input)."""
        if not self.original_lines:
            return 0.0
        return 100.0 * (1.0 - self.summary_lines / self.original_lines)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the keys expected by message-rewriting callers."""
        return {
            "success": self.success,
            "summary": self.summary,
            "originalLines": self.original_lines,
            "languageId": self.language_id,
        }
