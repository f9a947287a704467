"""LLM processing module."""
from .models import Transaction, TransactionType, Summary, AnalysisResult
from .statement_analyzer import StatementAnalyzer
from .aggregator import Aggregator

__all__ = [
    "Transaction",
    "TransactionType",
    "Summary",
    "AnalysisResult",
    "StatementAnalyzer",
    "Aggregator"
]
