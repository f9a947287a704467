"""Custom exception classes for StatementAI."""


class StatementAIError(Exception):
    """Base exception for StatementAI."""
    pass


class ConfigError(StatementAIError):
    """Configuration-related errors."""
    pass


class DocumentError(StatementAIError):
    """File intake and PDF/image conversion errors."""
    pass


class LLMError(StatementAIError):
    """Model request errors."""
    pass


class ResponseParseError(LLMError):
    """Model reply could not be turned into transactions."""
    pass


class ValidationError(StatementAIError):
    """Data validation errors."""
    pass


class ExportError(StatementAIError):
    """CSV export errors."""
    pass
