"""Utility modules."""
from .logger import get_logger, set_source_context
from .exceptions import (
    StatementAIError,
    ConfigError,
    DocumentError,
    LLMError,
    ResponseParseError,
    ValidationError,
    ExportError
)

__all__ = [
    "get_logger",
    "set_source_context",
    "StatementAIError",
    "ConfigError",
    "DocumentError",
    "LLMError",
    "ResponseParseError",
    "ValidationError",
    "ExportError"
]
