"""Plain-text rendering of an analysis for the terminal."""
from typing import List, Sequence

from .charts import DailyFlow, BalancePoint
from .summary import SummaryCard, format_currency, format_amount
from .table import TransactionTable

MAX_COLUMN_WIDTH = 48


def format_grid(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Boxed table; long cells are clipped to MAX_COLUMN_WIDTH."""
    widths = []
    for i, header in enumerate(headers):
        w = len(header)
        for row in rows:
            w = min(MAX_COLUMN_WIDTH, max(w, len(row[i])))
        widths.append(w)

    sep = "+-" + "-+-".join("-" * w for w in widths) + "-+"
    out = [sep]
    out.append("| " + " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers)) + " |")
    out.append(sep)
    for row in rows:
        out.append("| " + " | ".join(row[i][: widths[i]].ljust(widths[i]) for i in range(len(headers))) + " |")
    out.append(sep)
    return "\n".join(out)


def render_summary_cards(cards: List[SummaryCard]) -> str:
    return "   ".join(f"{card.title}: {card.value}" for card in cards)


def render_chart_series(flows: Sequence[DailyFlow], balance: Sequence[BalancePoint]) -> str:
    rows = [
        [flow.date, format_currency(flow.income), format_currency(flow.expense), format_currency(point.cumulative_balance)]
        for flow, point in zip(flows, balance)
    ]
    return format_grid(["Date", "Income", "Expense", "Net Balance"], rows)


def render_table(table: TransactionTable) -> str:
    visible = table.rows()
    if not visible:
        return "No transactions found matching your criteria."

    rows = [
        [txn.date, txn.description, format_amount(txn.amount), txn.type.value, txn.notes]
        for txn in visible
    ]
    footer = (
        f"Showing {len(visible)} of {len(table.transactions)} | "
        f"Income: {format_currency(table.total_income)} | "
        f"Expense: {format_currency(table.total_expense)}"
    )
    return format_grid(["Date", "Description", "Amount", "Type", "Notes"], rows) + "\n" + footer
