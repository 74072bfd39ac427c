"""Parse/query capability used by the summarizer.

The engine only needs four operations from a syntax engine: bind a grammar,
parse bytes, compile a query and evaluate it. ``ParseBackend`` names them so
the summarization pipeline can run against a fake in tests;
``TreeSitterBackend`` is the production implementation.
"""

from __future__ import annotations

import importlib
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

import tree_sitter

if TYPE_CHECKING:
    from codeshrink.summarize._internal.packs import LanguageProfile


class BackendError(Exception):
    """Raised by a backend when a grammar, parse or query step fails."""


class CaptureNode(Protocol):
    """The slice of a syntax node the collector reads."""

    @property
    def start_byte(self) -> int: ...

    @property
    def end_byte(self) -> int: ...

    @property
    def start_point(self) -> Any: ...  # (row, column)


@dataclass(frozen=True, slots=True)
class QueryMatch:
    """One query match: ordered (capture name, node) pairs."""

    captures: Sequence[tuple[str, CaptureNode]]


class ParseBackend(Protocol):
    def resolve_grammar(self, profile: LanguageProfile) -> Any: ...

    def parse(self, grammar: Any, source: bytes) -> Any | None: ...

    def compile_query(self, grammar: Any, query_text: str) -> Any: ...

    def evaluate_query(self, query: Any, tree: Any) -> Iterable[QueryMatch]: ...


class TreeSitterBackend:
    """ParseBackend over py-tree-sitter and the per-language grammar wheels.

    Holds no state between calls, so one instance can be shared across
    threads.
    """

    def resolve_grammar(self, profile: LanguageProfile) -> tree_sitter.Language:
        try:
            module = importlib.import_module(profile.grammar_module)
        except ImportError as err:
            raise BackendError(
                f"Grammar not installed: {profile.grammar_package}"
            ) from err

        func_name = profile.language_func or "language"
        try:
            return tree_sitter.Language(getattr(module, func_name)())
        except (AttributeError, TypeError, ValueError) as err:
            raise BackendError(f"Cannot load grammar {profile.grammar_name}: {err}") from err

    def parse(self, grammar: tree_sitter.Language, source: bytes) -> tree_sitter.Tree | None:
        try:
            parser = tree_sitter.Parser(grammar)
            return parser.parse(source)
        except (TypeError, ValueError) as err:
            raise BackendError(str(err)) from err

    def compile_query(self, grammar: tree_sitter.Language, query_text: str) -> tree_sitter.Query:
        try:
            return tree_sitter.Query(grammar, query_text)
        except (tree_sitter.QueryError, ValueError) as err:
            raise BackendError(str(err)) from err

    def evaluate_query(self, query: tree_sitter.Query, tree: tree_sitter.Tree) -> list[QueryMatch]:
        cursor = tree_sitter.QueryCursor(query)
        try:
            # matches() returns list of (pattern_index, captures_dict) tuples
            matches = cursor.matches(tree.root_node)
        except (RuntimeError, ValueError) as err:
            raise BackendError(f"Query evaluation failed: {err}") from err
        results: list[QueryMatch] = []
        for _pattern_idx, captures_dict in matches:
            captures = [
                (capture_name, node)
                for capture_name, nodes in captures_dict.items()
                for node in nodes
            ]
            results.append(QueryMatch(captures=captures))
        return results
