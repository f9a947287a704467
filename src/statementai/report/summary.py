"""Summary cards: income, expense and net flow."""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from statementai.llm.models import Summary

CENT = Decimal("0.01")


def format_currency(amount) -> str:
    """Format as US dollars, e.g. 1234.5 -> "$1,234.50", -12 -> "-$12.00"."""
    value = Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_amount(amount) -> str:
    """Signed table amount: credits get a leading "+"."""
    value = Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)
    return f"+{value:.2f}" if value > 0 else f"{value:.2f}"


@dataclass(frozen=True)
class SummaryCard:
    title: str
    value: str


def build_summary_cards(summary: Summary) -> List[SummaryCard]:
    return [
        SummaryCard("Total Income", format_currency(summary.total_income)),
        SummaryCard("Total Expense", format_currency(summary.total_expense)),
        SummaryCard("Net Flow", format_currency(summary.net)),
    ]
