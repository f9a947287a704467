"""StatementAI: bank statement analysis with Gemini."""

__version__ = "1.0.0"
