"""Core module exports."""

from codeshrink.core.errors import (
    CodeShrinkError,
    ConfigError,
    ErrorCode,
    InternalError,
    SummarizationError,
)
from codeshrink.core.logging import configure_logging, get_log_file_path, get_logger

__all__ = [
    # Errors
    "CodeShrinkError",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "SummarizationError",
    # Logging
    "configure_logging",
    "get_log_file_path",
    "get_logger",
]
