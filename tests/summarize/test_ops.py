"""Tests for the summarize() pipeline and compress_content()."""

from dataclasses import replace

import pytest
import structlog
from structlog.testing import capture_logs

from codeshrink.config.models import SummarizerConfig
from codeshrink.core.errors import ErrorCode, InternalError, SummarizationError
from codeshrink.summarize import compress_content, summarize
from codeshrink.summarize._internal.backend import BackendError
from codeshrink.summarize._internal.packs import GO_PROFILE, PROFILES

HEADER = "[COMPRESSED: Original {n} lines -> Summarized using tree-sitter]"

TS_SOURCE = (
    "/** Adds numbers. */\n"
    "export function add(a: number, b: number): number {\n"
    "  return a + b;\n"
    "}\n"
    "\n"
    "export class Foo {\n"
    "  private x: number;\n"
    "  bar() { return 1; }\n"
    "}\n"
)
TS_FUNCTION = "export function add(a: number, b: number): number {\n  return a + b;\n}"
TS_CLASS = "export class Foo {\n  private x: number;\n  bar() { return 1; }\n}"


class TestSummarizePipeline:
    """End-to-end behavior over a fake backend."""

    def test_typescript_file(self, fake_backend_factory) -> None:
        # Given - captures reported out of source order
        backend = fake_backend_factory([("class", TS_CLASS), ("function", TS_FUNCTION)])

        # When
        result = summarize(TS_SOURCE, "typescript", backend=backend)

        # Then
        assert result.summary == (
            HEADER.format(n=9) + "\n\n"
            "/** Adds numbers. */\n"
            "export function add(a: number, b: number): number { ... }\n"
            "\n"
            "export class Foo {\n"
            "  private x: number;\n"
            "  bar() { ... }\n"
            "}"
        )
        assert result.original_lines == 9
        assert result.language_id == "typescript"
        assert result.original_chars == len(TS_SOURCE)

    def test_python_file(self, fake_backend_factory) -> None:
        # Given
        source = "import os\n\nMAX = 10\n\n# Adds one.\ndef f(x):\n    return x + 1\n"
        backend = fake_backend_factory(
            [("assignment", "MAX = 10"), ("function", "def f(x):\n    return x + 1")]
        )

        # When
        result = summarize(source, "python", backend=backend)

        # Then
        assert result.summary == (
            HEADER.format(n=7) + "\n\nMAX = 10\n\n# Adds one.\ndef f(x):\n    ..."
        )

    def test_no_symbols_yields_header_only(self, fake_backend_factory) -> None:
        result = summarize("package main\n", "go", backend=fake_backend_factory([]))
        assert result.summary == HEADER.format(n=1)

    def test_empty_content(self, fake_backend_factory) -> None:
        result = summarize("", "go", backend=fake_backend_factory([]))
        assert result.original_lines == 0
        assert result.summary == HEADER.format(n=0)

    def test_deterministic(self, fake_backend_factory) -> None:
        captures = [("class", TS_CLASS), ("function", TS_FUNCTION)]
        first = summarize(TS_SOURCE, "ts", backend=fake_backend_factory(captures))
        second = summarize(TS_SOURCE, "ts", backend=fake_backend_factory(captures))
        assert first == second

    def test_config_budget_applies(self, fake_backend_factory) -> None:
        source = "type T struct {\n\tA int\n\tB int\n\tC int\n}\n"
        backend = fake_backend_factory([("type_decl", source.rstrip("\n"))])

        result = summarize(
            source, "go", backend=backend, config=SummarizerConfig(type_line_budget=2)
        )

        assert result.summary.endswith("type T struct {\n\tA int\n    // ... (truncated)\n}")

    def test_lone_surrogate_capture_skipped(self, fake_backend_factory) -> None:
        """Spans that cannot round-trip through UTF-8 are dropped individually."""
        # Given
        source = 'int a;\nchar *s = "\ud800";\n'
        bad = 'char *s = "\ud800";'.encode("utf-8", errors="surrogatepass")
        backend = fake_backend_factory([("function", "int a;"), ("typedef", bad)])

        # When
        result = summarize(source, "c", backend=backend)

        # Then
        assert result.summary == HEADER.format(n=2) + "\n\nint a;"


class TestSummarizeErrors:
    """Failure mapping."""

    def test_unsupported_language(self, fake_backend_factory) -> None:
        # Given
        backend = fake_backend_factory([])

        # When
        with pytest.raises(SummarizationError) as exc_info:
            summarize("+++[>+<-]", "brainfuck", backend=backend)

        # Then
        assert exc_info.value.code == ErrorCode.UNSUPPORTED_LANGUAGE
        assert "brainfuck" in exc_info.value.message
        assert backend.calls == []

    def test_empty_query(self, fake_backend_factory, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setitem(PROFILES, "blank", replace(GO_PROFILE, query_text="   "))
        backend = fake_backend_factory([])

        with pytest.raises(SummarizationError) as exc_info:
            summarize("x", "blank", backend=backend)

        assert exc_info.value.code == ErrorCode.NO_QUERY_AVAILABLE
        assert backend.calls == []

    @pytest.mark.parametrize(
        ("step", "code"),
        [
            ("resolve_grammar", ErrorCode.GRAMMAR_BINDING_FAILURE),
            ("parse", ErrorCode.PARSE_FAILURE),
            ("compile_query", ErrorCode.QUERY_COMPILATION_FAILURE),
        ],
    )
    def test_backend_failures(self, fake_backend_factory, step: str, code: ErrorCode) -> None:
        backend = fake_backend_factory([], fail_at=step)

        with pytest.raises(SummarizationError) as exc_info:
            summarize("fn main() {}\n", "rust", backend=backend)

        assert exc_info.value.code == code
        assert exc_info.value.details["reason"] == f"{step} exploded"
        assert "evaluate_query" not in backend.calls

    def test_parser_without_tree_is_parse_failure(self, fake_backend_factory) -> None:
        backend = fake_backend_factory([], tree=None)

        with pytest.raises(SummarizationError) as exc_info:
            summarize("fn main() {}\n", "rust", backend=backend)

        assert exc_info.value.code == ErrorCode.PARSE_FAILURE

    def test_query_evaluation_failure_is_internal_error(self, fake_backend_factory) -> None:
        # Given
        backend = fake_backend_factory([("function", "fn main() {}")], fail_at="evaluate_query")

        # When
        with pytest.raises(InternalError) as exc_info:
            summarize("fn main() {}\n", "rust", backend=backend)

        # Then
        assert exc_info.value.code == ErrorCode.INTERNAL_ERROR
        assert exc_info.value.details == {
            "language_id": "rust",
            "error": "evaluate_query exploded",
        }
        assert isinstance(exc_info.value.__cause__, BackendError)

    def test_failure_is_logged(self, fake_backend_factory) -> None:
        structlog.reset_defaults()

        with capture_logs() as logs, pytest.raises(SummarizationError):
            summarize("x", "cobol", backend=fake_backend_factory([]))

        assert {
            "event": "summarize_failed",
            "language": "cobol",
            "error": "UNSUPPORTED_LANGUAGE",
            "log_level": "info",
        } in logs


class TestCompressContent:
    """Caller-side fallback helper."""

    def test_short_content_unchanged(self, fake_backend_factory) -> None:
        backend = fake_backend_factory([("function", "fn a() {}")])

        result = compress_content("fn a() {}\n", "rust", backend=backend)

        assert result == "fn a() {}\n"
        assert backend.calls == []

    def test_long_content_summarized(self, fake_backend_factory) -> None:
        # Given
        backend = fake_backend_factory([("class", TS_CLASS), ("function", TS_FUNCTION)])

        # When
        result = compress_content(TS_SOURCE, "typescript", min_lines=5, backend=backend)

        # Then
        assert result.startswith(HEADER.format(n=9))
        assert "bar() { ... }" in result

    def test_threshold_from_config(self, fake_backend_factory) -> None:
        backend = fake_backend_factory([("function", TS_FUNCTION)])
        config = SummarizerConfig(min_lines=3)

        result = compress_content(TS_SOURCE, "typescript", config=config, backend=backend)

        assert result.startswith("[COMPRESSED")

    def test_unsupported_language_unchanged(self) -> None:
        assert compress_content("a\nb\n", "cobol", min_lines=1) == "a\nb\n"

    def test_missing_language_unchanged(self) -> None:
        assert compress_content("a\nb\n", None, min_lines=1) == "a\nb\n"

    def test_backend_failure_unchanged(self, fake_backend_factory) -> None:
        backend = fake_backend_factory([], fail_at="parse")
        assert compress_content(TS_SOURCE, "typescript", min_lines=1, backend=backend) == TS_SOURCE

    def test_query_evaluation_failure_unchanged(self, fake_backend_factory) -> None:
        structlog.reset_defaults()
        backend = fake_backend_factory([], fail_at="evaluate_query")

        with capture_logs() as logs:
            result = compress_content(TS_SOURCE, "typescript", min_lines=1, backend=backend)

        assert result == TS_SOURCE
        failures = [entry for entry in logs if entry["event"] == "summarize_failed"]
        assert failures[0]["error"] == "INTERNAL_ERROR"
