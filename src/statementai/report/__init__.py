"""Presentation of analysis results."""
from .summary import SummaryCard, build_summary_cards, format_currency, format_amount
from .charts import DailyFlow, BalancePoint, daily_flow, cumulative_balance
from .table import TransactionTable, TypeFilter, export_file_name

__all__ = [
    "SummaryCard",
    "build_summary_cards",
    "format_currency",
    "format_amount",
    "DailyFlow",
    "BalancePoint",
    "daily_flow",
    "cumulative_balance",
    "TransactionTable",
    "TypeFilter",
    "export_file_name"
]
