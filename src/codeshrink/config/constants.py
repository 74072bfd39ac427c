"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
They define the shape of the rendered summary, which downstream consumers
may match on.

For configurable values, see models.py (SummarizerConfig).
"""

SUMMARY_HEADER = "[COMPRESSED: Original {original_lines} lines -> Summarized using tree-sitter]"
"""First line of every summary."""

BRACE_BODY_PLACEHOLDER = "{ ... }"
"""Replaces elided bodies in brace languages."""

INDENT_BODY_PLACEHOLDER = "\n    ..."
"""Follows a callable header in indentation-based languages."""

INDENT_MEMBER_PLACEHOLDER = "\n        ..."
"""Follows a method header kept inside a class in indentation-based languages."""

TRUNCATED_MARKER = "... (truncated)"
"""Text of the comment line appended to truncated declarations."""
