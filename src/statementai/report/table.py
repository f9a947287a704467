"""Filterable, searchable transaction table with CSV export."""
import csv
import io
from datetime import date
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

from statementai.llm.models import Transaction
from statementai.utils.logger import get_logger
from statementai.utils.exceptions import ExportError, ValidationError

logger = get_logger()

CSV_HEADERS = ["Date", "Description", "Amount", "Type", "Notes"]


class TypeFilter(str, Enum):
    ALL = "All"
    CREDIT = "Credit"
    DEBIT = "Debit"

    @classmethod
    def parse(cls, value) -> "TypeFilter":
        if isinstance(value, cls):
            return value
        for member in cls:
            if str(value).strip().lower() == member.value.lower():
                return member
        raise ValidationError(f"Unknown type filter: {value!r} (expected All, Credit or Debit)")


def matches_search(txn: Transaction, search: str) -> bool:
    """Case-insensitive substring match on description or notes."""
    term = search.lower()
    return term in txn.description.lower() or term in txn.notes.lower()


def matches_type(txn: Transaction, type_filter: TypeFilter) -> bool:
    return type_filter is TypeFilter.ALL or txn.type.value == type_filter.value


def export_file_name(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"statement_analysis_{today.isoformat()}.csv"


class TransactionTable:
    """A view over transactions narrowed by a type filter and a search term."""

    def __init__(
        self,
        transactions: Sequence[Transaction],
        type_filter: TypeFilter = TypeFilter.ALL,
        search: str = ""
    ):
        self.transactions = list(transactions)
        self.type_filter = TypeFilter.parse(type_filter)
        self.search = search or ""

    def rows(self) -> List[Transaction]:
        """Transactions visible under the current filter and search."""
        return [
            txn for txn in self.transactions
            if matches_search(txn, self.search) and matches_type(txn, self.type_filter)
        ]

    @property
    def total_income(self) -> Decimal:
        return sum((txn.amount for txn in self.rows() if txn.amount > 0), Decimal("0"))

    @property
    def total_expense(self) -> Decimal:
        return sum((abs(txn.amount) for txn in self.rows() if txn.amount < 0), Decimal("0"))

    def to_csv(self) -> str:
        """
        Serialize the visible rows.

        Fields containing commas, quotes or newlines are quoted with embedded
        quotes doubled; amounts carry two decimals.
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for txn in self.rows():
            writer.writerow([
                txn.date,
                txn.description,
                f"{txn.amount:.2f}",
                txn.type.value,
                txn.notes
            ])
        return buffer.getvalue()

    def export_csv(self, destination: Path, today: Optional[date] = None) -> Path:
        """
        Write the visible rows to disk.

        Args:
            destination: A directory (dated file name is used) or a file path
            today: Date used in the generated file name

        Returns:
            Path of the written file
        """
        destination = Path(destination)
        path = destination / export_file_name(today) if destination.is_dir() else destination

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(self.to_csv())
        except OSError as e:
            raise ExportError(f"Failed to write CSV to {path}: {e}")

        logger.info(f"Exported {len(self.rows())} transactions to {path}")
        return path
