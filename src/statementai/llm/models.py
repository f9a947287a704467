"""Data models for statement analysis."""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List


class TransactionType(str, Enum):
    """Transaction direction."""
    CREDIT = "Credit"
    DEBIT = "Debit"

    @classmethod
    def coerce(cls, value) -> "TransactionType":
        """Exactly "Credit" is a credit; anything else is a debit."""
        return cls.CREDIT if value == cls.CREDIT.value else cls.DEBIT


@dataclass(frozen=True)
class Transaction:
    """One statement row; positive amounts are credits."""
    date: str
    description: str
    amount: Decimal
    type: TransactionType
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "description": self.description,
            "amount": float(self.amount),
            "type": self.type.value,
            "notes": self.notes
        }


@dataclass(frozen=True)
class Summary:
    """Totals over a transaction list."""
    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    net: Decimal = Decimal("0")

    def to_dict(self) -> dict:
        return {
            "totalIncome": float(self.total_income),
            "totalExpense": float(self.total_expense),
            "net": float(self.net)
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Transactions extracted from one upload plus their summary."""
    transactions: List[Transaction] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)

    def to_dict(self) -> dict:
        return {
            "transactions": [txn.to_dict() for txn in self.transactions],
            "summary": self.summary.to_dict()
        }
