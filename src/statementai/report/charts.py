"""Chart series: daily cash flow and cumulative balance."""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from statementai.llm.models import Transaction

DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%d %b %Y",
    "%b %d, %Y",
]


@dataclass
class DailyFlow:
    """All transactions of one date folded together."""
    date: str
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "income": float(self.income),
            "expense": float(self.expense),
            "balance": float(self.balance)
        }


@dataclass(frozen=True)
class BalancePoint:
    date: str
    cumulative_balance: Decimal

    def to_dict(self) -> dict:
        return {"date": self.date, "cumulativeBalance": float(self.cumulative_balance)}


def parse_date(value: str) -> Optional[datetime]:
    """Try the common statement date formats; None when none match."""
    if not value:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt)
        except ValueError:
            continue
    return None


def daily_flow(transactions: Iterable[Transaction]) -> List[DailyFlow]:
    """
    Group transactions by date.

    Buckets are ordered chronologically; dates that cannot be parsed keep
    their first-seen order after all parseable ones.
    """
    buckets: Dict[str, DailyFlow] = {}
    for txn in transactions:
        bucket = buckets.get(txn.date)
        if bucket is None:
            bucket = buckets[txn.date] = DailyFlow(date=txn.date)

        if txn.amount > 0:
            bucket.income += txn.amount
        else:
            bucket.expense += abs(txn.amount)
        bucket.balance += txn.amount

    def sort_key(indexed):
        index, bucket = indexed
        parsed = parse_date(bucket.date)
        if parsed is None:
            return (1, datetime.min, index)
        return (0, parsed, index)

    ordered = sorted(enumerate(buckets.values()), key=sort_key)
    return [bucket for _, bucket in ordered]


def cumulative_balance(flows: Iterable[DailyFlow]) -> List[BalancePoint]:
    """Running sum of each day's net balance."""
    running = Decimal("0")
    points = []
    for flow in flows:
        running += flow.balance
        points.append(BalancePoint(date=flow.date, cumulative_balance=running))
    return points
