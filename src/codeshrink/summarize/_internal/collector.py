"""Turns query matches into an ordered list of captured symbols."""

from __future__ import annotations

from operator import attrgetter
from typing import Any

import structlog

from codeshrink.summarize._internal.backend import ParseBackend
from codeshrink.summarize.models import CapturedSymbol

log = structlog.get_logger(__name__)


def collect_symbols(
    backend: ParseBackend,
    query: Any,
    tree: Any,
    source: bytes,
) -> list[CapturedSymbol]:
    """Gather every capture of every match, sorted by start byte.

    A capture whose byte span is not valid UTF-8 is skipped on its own; it
    never fails the whole collection. The sort is stable, so captures
    starting at the same byte keep their match order.
    """
    symbols: list[CapturedSymbol] = []
    for match in backend.evaluate_query(query, tree):
        for capture_name, node in match.captures:
            try:
                text = source[node.start_byte : node.end_byte].decode("utf-8")
            except UnicodeDecodeError:
                log.debug("capture_skipped", kind=capture_name, start_byte=node.start_byte)
                continue
            symbols.append(
                CapturedSymbol(
                    kind=capture_name,
                    text=text,
                    start_line=node.start_point[0],
                    start_byte=node.start_byte,
                )
            )

    symbols.sort(key=attrgetter("start_byte"))
    return symbols
