"""Doc-comment lookup above a symbol."""

from __future__ import annotations

from collections.abc import Sequence

from codeshrink.summarize._internal.packs import CommentRules

# Characters that end a code token directly before a block opener.
_CODE_TAIL = frozenset(";{}()[],=:+")


def locate_doc_comment(lines: Sequence[str], start_line: int, rules: CommentRules) -> str:
    """Return the comment block directly above ``start_line``, oldest line first.

    Walks upward from the line before the symbol collecting trimmed comment
    lines. The first blank line, or the first line that is not a comment,
    ends the block. A block comment is read up to its opening delimiter;
    blank lines inside it belong to it. Returns ``""`` when nothing is
    adjacent to the symbol.
    """
    if start_line <= 0:
        return ""

    collected: list[str] = []
    open_block: str | None = None  # opener we are scanning up to
    block_start = 0

    idx = min(start_line, len(lines)) - 1
    while idx >= 0:
        line = lines[idx].strip()
        idx -= 1

        if open_block is not None:
            if line.startswith(open_block):
                collected.append(line)
                break
            if _opens_after_code(line, open_block, rules):
                # The "comment" closed a string or trailed code; drop it.
                del collected[block_start:]
                break
            collected.append(line)
            continue

        if not line:
            break

        pair = _closing_pair(line, rules)
        if pair is not None:
            opener, closer = pair
            if line.startswith(opener) and len(line) >= len(opener) + len(closer):
                # Single-line block: complete on its own.
                if _is_pure_comment(line, opener, closer):
                    collected.append(line)
                break
            if opener in line[: -len(closer)]:
                # Trailing comment after code.
                break
            block_start = len(collected)
            collected.append(line)
            open_block = opener
            continue

        pair = next(((o, c) for o, c in rules.block_pairs if line.startswith(o)), None)
        if pair is not None:
            if _is_pure_comment(line, *pair):
                collected.append(line)
            break

        if line.startswith(rules.line_prefixes):
            collected.append(line)
            continue

        break
    else:
        if open_block is not None:
            # Reached the top of the file inside an unterminated block.
            del collected[block_start:]

    collected.reverse()
    return "\n".join(collected)


def _closing_pair(line: str, rules: CommentRules) -> tuple[str, str] | None:
    for opener, closer in rules.block_pairs:
        if line.endswith(closer):
            return opener, closer
    return None


def _is_pure_comment(line: str, opener: str, closer: str) -> bool:
    """False when code follows the block comment that opens ``line``."""
    end = line.find(closer, len(opener))
    return end < 0 or not line[end + len(closer) :].strip()


def _opens_after_code(line: str, opener: str, rules: CommentRules) -> bool:
    """True when ``opener`` appears mid-line right after a code token.

    Prose inside a block may mention the opener (``/api/*``); a string
    assignment or statement before it (``TEXT = \"\"\"``) may not.
    """
    at = line.find(opener)
    if at <= 0 or line.startswith(rules.line_prefixes):
        return False
    before = line[:at].rstrip()
    return before[-1:] in _CODE_TAIL or before.rsplit(None, 1)[-1] in ("return", "yield")
