"""Summarization internals: language profiles, parsing backend and renderers."""
