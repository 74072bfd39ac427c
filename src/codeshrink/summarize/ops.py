"""Public entry points of the summarization engine.

The pipeline for one call is:
resolve profile -> bind grammar -> parse -> compile query -> collect symbols
-> per symbol (doc comment + shrunk body) -> assemble.

Every call is self-contained: profiles are immutable and nothing is cached
between calls, so summarize() may run concurrently from several threads.
"""

from __future__ import annotations

import structlog

from codeshrink.config.models import SummarizerConfig
from codeshrink.core.errors import CodeShrinkError, InternalError, SummarizationError
from codeshrink.summarize._internal.assembler import assemble_summary
from codeshrink.summarize._internal.backend import BackendError, ParseBackend, TreeSitterBackend
from codeshrink.summarize._internal.collector import collect_symbols
from codeshrink.summarize._internal.doc_comments import locate_doc_comment
from codeshrink.summarize._internal.packs import resolve_profile
from codeshrink.summarize._internal.shrinkers import shrink
from codeshrink.summarize._internal.text import split_lines
from codeshrink.summarize.models import Summary

log = structlog.get_logger(__name__)


def summarize(
    content: str,
    language_id: str,
    *,
    config: SummarizerConfig | None = None,
    backend: ParseBackend | None = None,
) -> Summary:
    """Summarize source text, keeping declarations and eliding bodies.

    Args:
        content: Source text.
        language_id: One of supported_languages().
        config: Line budgets; defaults to SummarizerConfig().
        backend: Parse/query engine; defaults to tree-sitter.

    Returns:
        Summary with the rendered text and the original line count.

    Raises:
        SummarizationError: Unsupported language, missing query, grammar
            binding, parse or query compilation failure. Callers should keep
            the original content.
        InternalError: Query evaluation failed on a compiled query.
    """
    try:
        return _summarize(content, language_id, config or SummarizerConfig(), backend)
    except CodeShrinkError as err:
        log.info("summarize_failed", language=language_id, error=err.error_name)
        raise


def _summarize(
    content: str,
    language_id: str,
    config: SummarizerConfig,
    backend: ParseBackend | None,
) -> Summary:
    profile = resolve_profile(language_id)
    if not profile.query_text.strip():
        raise SummarizationError.no_query_available(language_id)

    backend = backend or TreeSitterBackend()
    source = content.encode("utf-8", errors="surrogatepass")
    log.debug("summarize_started", language=language_id, bytes=len(source))

    try:
        grammar = backend.resolve_grammar(profile)
    except BackendError as err:
        raise SummarizationError.grammar_binding_failure(language_id, str(err)) from err

    try:
        tree = backend.parse(grammar, source)
    except BackendError as err:
        raise SummarizationError.parse_failure(language_id, str(err)) from err
    if tree is None:
        raise SummarizationError.parse_failure(language_id, "parser returned no tree")

    try:
        query = backend.compile_query(grammar, profile.query_text)
    except BackendError as err:
        raise SummarizationError.query_compilation_failure(language_id, str(err)) from err

    try:
        symbols = collect_symbols(backend, query, tree, source)
    except BackendError as err:
        # Grammar and query already compiled; a failure here is a bug.
        raise InternalError.unexpected(
            "query evaluation failed", language_id=language_id, error=str(err)
        ) from err
    lines = split_lines(content)
    blocks = [
        (
            locate_doc_comment(lines, symbol.start_line, profile.comment_rules),
            shrink(symbol.kind, symbol.text, profile, config),
        )
        for symbol in symbols
    ]

    summary = Summary(
        summary=assemble_summary(len(lines), blocks),
        original_lines=len(lines),
        language_id=language_id,
        original_chars=len(content),
    )
    log.debug(
        "summarize_finished",
        language=language_id,
        symbols=len(symbols),
        original_lines=summary.original_lines,
        summary_lines=summary.summary_lines,
    )
    return summary


def compress_content(
    content: str,
    language_id: str | None,
    *,
    min_lines: int | None = None,
    config: SummarizerConfig | None = None,
    backend: ParseBackend | None = None,
) -> str:
    """Summarize large content, falling back to the original text.

    Content shorter than ``min_lines`` (default: ``config.min_lines``), with
    no language, or that cannot be summarized is returned unchanged.
    """
    config = config or SummarizerConfig()
    threshold = config.min_lines if min_lines is None else min_lines
    if language_id is None or len(split_lines(content)) < threshold:
        return content
    try:
        return summarize(content, language_id, config=config, backend=backend).summary
    except CodeShrinkError:
        return content
