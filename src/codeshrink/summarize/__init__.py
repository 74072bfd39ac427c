"""Summarization engine - compresses source code to its declarations.

Public API is in `codeshrink.summarize.ops`:
- summarize(): render a Summary or raise SummarizationError
- compress_content(): caller-side helper that falls back to the original text

Internal implementations are in `codeshrink.summarize._internal/`.
"""

from codeshrink.summarize._internal.backend import (
    BackendError,
    CaptureNode,
    ParseBackend,
    QueryMatch,
    TreeSitterBackend,
)
from codeshrink.summarize._internal.packs import (
    LanguageProfile,
    get_profile,
    language_for_path,
    resolve_profile,
    supported_languages,
)
from codeshrink.summarize.models import CapturedSymbol, Summary
from codeshrink.summarize.ops import compress_content, summarize

__all__ = [
    # Entry points
    "summarize",
    "compress_content",
    # Models
    "CapturedSymbol",
    "Summary",
    # Languages
    "LanguageProfile",
    "get_profile",
    "language_for_path",
    "resolve_profile",
    "supported_languages",
    # Backend
    "BackendError",
    "CaptureNode",
    "ParseBackend",
    "QueryMatch",
    "TreeSitterBackend",
]
