"""codeshrink error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Summarization
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Summarization (3xxx)
    UNSUPPORTED_LANGUAGE = 3001
    NO_QUERY_AVAILABLE = 3002
    GRAMMAR_BINDING_FAILURE = 3003
    PARSE_FAILURE = 3004
    QUERY_COMPILATION_FAILURE = 3005

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CodeShrinkError(Exception):
    """Base error with structured context for callers."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'UNSUPPORTED_LANGUAGE')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CodeShrinkError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class SummarizationError(CodeShrinkError):
    """A summarization call that could not produce a summary.

    Callers are expected to keep the original content when they see one.
    """

    @classmethod
    def unsupported_language(cls, language_id: str) -> "SummarizationError":
        return cls(
            code=ErrorCode.UNSUPPORTED_LANGUAGE,
            message=f"Unsupported language: {language_id}",
            details={"language_id": language_id},
        )

    @classmethod
    def no_query_available(cls, language_id: str) -> "SummarizationError":
        return cls(
            code=ErrorCode.NO_QUERY_AVAILABLE,
            message=f"No query available for language: {language_id}",
            details={"language_id": language_id},
        )

    @classmethod
    def grammar_binding_failure(cls, language_id: str, reason: str) -> "SummarizationError":
        return cls(
            code=ErrorCode.GRAMMAR_BINDING_FAILURE,
            message=f"Failed to set language for {language_id}: {reason}",
            details={"language_id": language_id, "reason": reason},
        )

    @classmethod
    def parse_failure(cls, language_id: str, reason: str) -> "SummarizationError":
        return cls(
            code=ErrorCode.PARSE_FAILURE,
            message=f"Failed to parse content: {reason}",
            details={"language_id": language_id, "reason": reason},
        )

    @classmethod
    def query_compilation_failure(cls, language_id: str, reason: str) -> "SummarizationError":
        return cls(
            code=ErrorCode.QUERY_COMPILATION_FAILURE,
            message=f"Failed to create query for {language_id}: {reason}",
            details={"language_id": language_id, "reason": reason},
        )


class InternalError(CodeShrinkError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
