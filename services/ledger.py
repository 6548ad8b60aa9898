'''
    File Name: ledger.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
    Description: Opening/closing balance calculation for a reporting window.
'''
from dataclasses import replace
from decimal import Decimal
import logging
from typing import Iterable, List, Tuple

from models.report import LedgerResult, ReportSummary
from models.transaction import Transaction, TransactionType, to_amount

logger = logging.getLogger(__name__)


def sort_transactions(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Return a new list ordered by (date, timestamp)."""
    return sorted(transactions, key=lambda t: (t.date, t.timestamp))


def summarize(
    transactions: Iterable[Transaction],
    start_date: str,
    end_date: str,
    initial_balance=0,
) -> LedgerResult:
    """Fold the ledger into a summary for the inclusive window [start_date, end_date].

    Entries dated before the window move the opening balance, entries inside it
    are returned in `filtered` and totalled, and entries after it are ignored.
    Dates are compared as YYYY-MM-DD strings.
    """
    opening = to_amount(initial_balance)
    receipts = Decimal("0")
    expenditures = Decimal("0")
    filtered: List[Transaction] = []

    for t in sort_transactions(transactions):
        if t.date < start_date:
            if t.type == TransactionType.RECEIPT:
                opening += t.amount
            else:
                opening -= t.amount
        elif t.date <= end_date:
            filtered.append(t)
            if t.type == TransactionType.RECEIPT:
                receipts += t.amount
            else:
                expenditures += t.amount

    summary = ReportSummary(
        opening_balance=opening,
        total_receipts=receipts,
        total_expenditures=expenditures,
        closing_balance=opening + receipts - expenditures,
    )
    logger.debug("Summarized %d in-window transactions for %s..%s", len(filtered), start_date, end_date)
    return LedgerResult(summary=summary, filtered=filtered)


def matches_query(tx: Transaction, query: str) -> bool:
    q = query.strip().lower()
    return (
        q in (tx.particulars or "").lower()
        or q in (tx.party or "").lower()
        or q in _amount_text(tx.amount)
        or q in tx.date
    )


def _amount_text(amount: Decimal) -> str:
    # 100.00 is searched as "100", 12.50 as "12.5"
    return format(amount.normalize(), "f")


def apply_search(result: LedgerResult, query: str) -> LedgerResult:
    """Narrow a window's entries by free-text search.

    Displayed totals are recomputed from the matching entries, while the
    opening and closing balances keep the values of the whole window.
    """
    if not query or not query.strip():
        return result

    matching = [t for t in result.filtered if matches_query(t, query)]
    receipts, expenditures = split_by_type(matching)
    summary = replace(
        result.summary,
        total_receipts=sum_amounts(receipts),
        total_expenditures=sum_amounts(expenditures),
    )
    return LedgerResult(summary=summary, filtered=matching)


def split_by_type(transactions: Iterable[Transaction]) -> Tuple[List[Transaction], List[Transaction]]:
    """Return (receipts, expenditures), each keeping the input order."""
    receipts: List[Transaction] = []
    expenditures: List[Transaction] = []
    for t in transactions:
        (receipts if t.type == TransactionType.RECEIPT else expenditures).append(t)
    return receipts, expenditures


def sum_amounts(transactions: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in transactions), Decimal("0"))
