"""Fixtures for summarization tests.

FakeBackend stands in for tree-sitter: it "matches" given snippets by
locating them in the parsed source, so pipeline behavior can be tested
without grammar wheels installed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from codeshrink.summarize import BackendError, QueryMatch


@dataclass(frozen=True)
class FakeNode:
    start_byte: int
    end_byte: int
    start_point: tuple[int, int]


def node_for(source: bytes, snippet: str | bytes, occurrence: int = 0) -> FakeNode:
    """Build a node spanning ``snippet``'s position in ``source``."""
    needle = snippet.encode("utf-8") if isinstance(snippet, str) else snippet
    start = -1
    for _ in range(occurrence + 1):
        start = source.index(needle, start + 1)
    row = source.count(b"\n", 0, start)
    col = start - (source.rfind(b"\n", 0, start) + 1)
    return FakeNode(start_byte=start, end_byte=start + len(needle), start_point=(row, col))


class FakeBackend:
    """ParseBackend that reports one match per (kind, snippet) pair."""

    def __init__(
        self,
        captures: list[tuple[str, str | bytes]] | None = None,
        *,
        fail_at: str | None = None,
        tree: Any = "tree",
    ) -> None:
        self.captures = captures or []
        self.fail_at = fail_at
        self.tree = tree
        self.source: bytes = b""
        self.calls: list[str] = []

    def _step(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_at == name:
            raise BackendError(f"{name} exploded")

    def resolve_grammar(self, profile: Any) -> Any:
        self._step("resolve_grammar")
        return profile.grammar_name

    def parse(self, grammar: Any, source: bytes) -> Any:
        self._step("parse")
        self.source = source
        return self.tree

    def compile_query(self, grammar: Any, query_text: str) -> Any:
        self._step("compile_query")
        return query_text

    def evaluate_query(self, query: Any, tree: Any) -> list[QueryMatch]:
        self._step("evaluate_query")
        return [
            QueryMatch(captures=[(kind, node_for(self.source, snippet))])
            for kind, snippet in self.captures
        ]


@pytest.fixture
def fake_backend_factory():
    return FakeBackend
