"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CODESHRINK__SECTION__KEY)
3. Explicit YAML file passed to load_config()
4. Global YAML (~/.config/codeshrink/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    CODESHRINK__<SECTION>__<KEY>=<VALUE>

Examples:
    CODESHRINK__LOGGING__LEVEL=DEBUG
    CODESHRINK__SUMMARIZER__TYPE_LINE_BUDGET=40
    CODESHRINK__SUMMARIZER__MIN_LINES=200
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CODESHRINK__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every summarization call.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class SummarizerConfig(BaseModel):
    """Summarization budgets.

    Env vars:
        CODESHRINK__SUMMARIZER__TYPE_LINE_BUDGET: Max lines kept for type-like declarations
        CODESHRINK__SUMMARIZER__CLASS_LINE_BUDGET: Max lines kept for classes without member rules
        CODESHRINK__SUMMARIZER__MIN_LINES: Caller threshold below which content is left alone
    """

    type_line_budget: int = Field(
        default=30,
        description="Interfaces, enums, structs, traits and type aliases longer than this "
        "are truncated to this many lines.",
    )
    class_line_budget: int = Field(
        default=20,
        description="Line budget for classes in languages without a member filter (C++).",
    )
    min_lines: int = Field(
        default=100,
        description="compress_content() and the CLI leave content shorter than this "
        "unchanged. The engine itself never applies a threshold.",
    )

    @field_validator("type_line_budget", "class_line_budget", "min_lines")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Must be >= 1, got {v}")
        return v


class CodeShrinkConfig(BaseModel):
    """Root configuration for codeshrink.

    All settings can be configured via:
    1. Environment variables: CODESHRINK__SECTION__KEY
    2. YAML config files (explicit path or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    summarizer: SummarizerConfig = Field(default_factory=SummarizerConfig)
