"""CodeShrink - tree-sitter based source summarization for LLM context."""

__version__ = "0.1.0"
