"""Config module exports."""

from codeshrink.config.loader import load_config
from codeshrink.config.models import (
    CodeShrinkConfig,
    LoggingConfig,
    LogOutputConfig,
    SummarizerConfig,
)

__all__ = [
    "load_config",
    "CodeShrinkConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "SummarizerConfig",
]
