"""Kind-specific text shrinking.

Each captured symbol is rendered by the strategy registered for its kind:

- callables keep their signature and replace the body with a placeholder
- classes and impl blocks keep the header plus member declarations
- type-like declarations are truncated to a line budget
- simple declarations keep their first line
- anything else passes through unchanged
"""

from __future__ import annotations

import keyword
import re
from collections.abc import Callable

from codeshrink.config.constants import (
    BRACE_BODY_PLACEHOLDER,
    INDENT_BODY_PLACEHOLDER,
    INDENT_MEMBER_PLACEHOLDER,
    TRUNCATED_MARKER,
)
from codeshrink.config.models import SummarizerConfig
from codeshrink.summarize._internal.doc_comments import locate_doc_comment
from codeshrink.summarize._internal.packs import BodyStyle, LanguageProfile, MemberRules
from codeshrink.summarize._internal.text import (
    bracket_balance,
    find_top_level,
    first_line,
    indent_of,
    split_lines,
)

Shrinker = Callable[[str, LanguageProfile, SummarizerConfig], str]

CALLABLE_KINDS = frozenset({"function", "method", "arrow_function"})
CLASS_KINDS = frozenset({"class"})
IMPL_KINDS = frozenset({"impl"})
TYPE_KINDS = frozenset({"interface", "type_alias", "enum", "struct", "trait", "type_decl"})
DECLARATION_KINDS = frozenset(
    {"const", "static", "const_decl", "var", "field", "assignment", "typedef"}
)

_PY_FIELD = re.compile(r"^([A-Za-z_]\w*)\s*(:|=(?!=))")
_DOCSTRING_QUOTES = ('"""', "'''")


# =========================================================================
# Callables
# =========================================================================


def shrink_callable(text: str, profile: LanguageProfile) -> str:
    """Keep everything before the body opener and elide the body."""
    if profile.body_style is BodyStyle.INDENT:
        colon = find_top_level(text, ":", nesting="([{")
        if colon >= 0:
            return text[: colon + 1].strip() + INDENT_BODY_PLACEHOLDER
        return first_line(text)

    brace = find_top_level(text, "{")
    if brace >= 0:
        return f"{text[:brace].strip()} {BRACE_BODY_PLACEHOLDER}"
    if profile.arrow_marker:
        arrow = find_top_level(text, profile.arrow_marker)
        if arrow >= 0:
            end = arrow + len(profile.arrow_marker)
            return f"{text[:end].strip()} {BRACE_BODY_PLACEHOLDER}"
    return first_line(text)


# =========================================================================
# Classes / impl blocks
# =========================================================================


def shrink_members(
    text: str, profile: LanguageProfile, rules: MemberRules | None, fallback_lines: int
) -> str:
    """Keep the declaration header and the member lines of a class-like body."""
    lines = split_lines(text)
    if len(lines) <= 1:
        return text
    if rules is None:
        return truncate(text, profile, fallback_lines)

    header_end = _header_end(lines)
    header, body = lines[: header_end + 1], lines[header_end + 1 :]
    member_indent = _member_indent(body, rules)

    if profile.body_style is BodyStyle.INDENT:
        return "\n".join(header + _indented_members(body, rules, member_indent))

    kept = list(header)
    i = 0
    while i < len(body):
        line = body[i]
        trimmed = line.strip()
        if not trimmed or indent_of(line) != member_indent or not _is_member(trimmed, rules):
            i += 1
            continue
        if rules.doc_comments:
            kept.extend(_member_doc(body, i, profile, member_indent))
        end = _signature_end(body, i)
        member = "\n".join(body[i : end + 1])
        brace = find_top_level(member, "{")
        kept.append(f"{member[:brace]}{BRACE_BODY_PLACEHOLDER}" if brace >= 0 else member)
        i = end + 1
    if profile.closing_line is not None:
        kept.append(profile.closing_line)
    return "\n".join(kept)


def _header_end(lines: list[str]) -> int:
    """Index of the declaration line, past any leading (multi-line) decorators."""
    depth = 0
    for i, line in enumerate(lines):
        trimmed = line.strip()
        if depth == 0 and trimmed and not trimmed.startswith("@"):
            return i
        depth = max(0, depth + bracket_balance(line))
    return len(lines) - 1


def _member_indent(body: list[str], rules: MemberRules) -> int:
    for line in body:
        trimmed = line.strip()
        if trimmed and not trimmed.startswith(rules.comment_prefixes):
            return indent_of(line)
    return rules.default_indent


def _is_member(trimmed: str, rules: MemberRules) -> bool:
    if trimmed.startswith(rules.prefixes):
        return True
    return "(" in trimmed and any(marker in trimmed for marker in rules.signature_markers)


def _signature_end(lines: list[str], start: int) -> int:
    """Last line of a declaration whose parentheses open on ``lines[start]``."""
    depth = 0
    for j in range(start, len(lines)):
        depth += bracket_balance(lines[j], "(")
        if depth <= 0:
            return j
    return start


def _member_doc(
    body: list[str], index: int, profile: LanguageProfile, member_indent: int
) -> list[str]:
    doc = locate_doc_comment(body, index, profile.comment_rules)
    if not doc:
        return []
    pad = " " * member_indent
    return [pad + (" " if line.startswith("*") else "") + line for line in doc.split("\n")]


def _indented_members(body: list[str], rules: MemberRules, member_indent: int) -> list[str]:
    kept: list[str] = []
    in_docstring: str | None = None

    i = 0
    while i < len(body):
        line = body[i]
        trimmed = line.strip()
        end = i
        if in_docstring is not None:
            if in_docstring in trimmed:
                in_docstring = None
        elif not trimmed:
            pass
        elif quote := next((q for q in _DOCSTRING_QUOTES if trimmed.startswith(q)), None):
            if trimmed.count(quote) == 1:
                in_docstring = quote
        elif trimmed.startswith(rules.prefixes):
            end = _signature_end(body, i)
            header = "\n".join(body[i : end + 1])
            colon = find_top_level(header, ":", nesting="([{")
            kept.append(header[:colon] + ":" + INDENT_MEMBER_PLACEHOLDER if colon >= 0 else header)
        elif rules.self_prefix and _is_self_assignment(trimmed, rules.self_prefix):
            kept.append("    " + trimmed)
        elif indent_of(line) == member_indent and trimmed.startswith("@"):
            end = _signature_end(body, i)
            kept.extend(body[i : end + 1])
        elif indent_of(line) == member_indent and _is_class_field(trimmed):
            kept.append(line)
        i = end + 1
    return kept


def _is_self_assignment(trimmed: str, self_prefix: str) -> bool:
    if not trimmed.startswith(self_prefix):
        return False
    eq = find_top_level(trimmed, "=")
    if eq <= 0 or trimmed.startswith("==", eq):
        return False
    # Comparisons and augmented assignments are not field declarations.
    return trimmed[eq - 1] not in "=!<>+-*/%&|^"


def _is_class_field(trimmed: str) -> bool:
    match = _PY_FIELD.match(trimmed)
    return match is not None and not keyword.iskeyword(match.group(1))


# =========================================================================
# Truncation / first line
# =========================================================================


def truncate(text: str, profile: LanguageProfile, max_lines: int) -> str:
    """Keep at most ``max_lines`` lines, then a marker and a closing line."""
    lines = split_lines(text)
    if len(lines) <= max_lines:
        return text
    kept = lines[:max_lines]
    kept.append(f"    {profile.line_comment} {TRUNCATED_MARKER}")
    if profile.closing_line is not None:
        kept.append(profile.closing_line)
    return "\n".join(kept)


# =========================================================================
# Dispatch
# =========================================================================


def _callable(text: str, profile: LanguageProfile, _config: SummarizerConfig) -> str:
    return shrink_callable(text, profile)


def _class(text: str, profile: LanguageProfile, config: SummarizerConfig) -> str:
    return shrink_members(text, profile, profile.class_members, config.class_line_budget)


def _impl(text: str, profile: LanguageProfile, config: SummarizerConfig) -> str:
    return shrink_members(text, profile, profile.impl_members, config.class_line_budget)


def _type_like(text: str, profile: LanguageProfile, config: SummarizerConfig) -> str:
    return truncate(text, profile, config.type_line_budget)


def _declaration(text: str, _profile: LanguageProfile, _config: SummarizerConfig) -> str:
    return first_line(text)


SHRINKERS: dict[str, Shrinker] = {
    **dict.fromkeys(CALLABLE_KINDS, _callable),
    **dict.fromkeys(CLASS_KINDS, _class),
    **dict.fromkeys(IMPL_KINDS, _impl),
    **dict.fromkeys(TYPE_KINDS, _type_like),
    **dict.fromkeys(DECLARATION_KINDS, _declaration),
}


def shrink(kind: str, text: str, profile: LanguageProfile, config: SummarizerConfig) -> str:
    """Render one symbol; unknown kinds pass through verbatim."""
    shrinker = SHRINKERS.get(kind)
    if shrinker is None:
        return text
    return shrinker(text, profile, config)
