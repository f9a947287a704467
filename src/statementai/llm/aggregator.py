"""Transaction summary aggregation."""
from decimal import Decimal
from typing import Iterable

from .models import Transaction, Summary
from statementai.utils.logger import get_logger

logger = get_logger()


class Aggregator:
    """Folds transactions into income, expense and net totals."""

    def summarize(self, transactions: Iterable[Transaction]) -> Summary:
        """
        Summarize transactions.

        Args:
            transactions: Transactions in any order

        Returns:
            Summary where net == total_income - total_expense
        """
        total_income = Decimal("0")
        total_expense = Decimal("0")
        net = Decimal("0")
        count = 0

        for txn in transactions:
            if txn.amount > 0:
                total_income += txn.amount
            else:
                total_expense += abs(txn.amount)
            net += txn.amount
            count += 1

        logger.debug(
            f"Summarized {count} transactions: income={total_income} "
            f"expense={total_expense} net={net}"
        )

        return Summary(
            total_income=total_income,
            total_expense=total_expense,
            net=net
        )
