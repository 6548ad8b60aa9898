'''
    File Name: report.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
    Description: Derived report structures (never persisted).
'''
import calendar
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from .transaction import Transaction


@dataclass(frozen=True)
class DateRange:
    """Inclusive reporting window, both ends as YYYY-MM-DD strings."""
    start_date: str
    end_date: str

    @classmethod
    def current_month(cls, today: Optional[date] = None) -> "DateRange":
        today = today or date.today()
        last_day = calendar.monthrange(today.year, today.month)[1]
        return cls(
            start_date=today.replace(day=1).isoformat(),
            end_date=today.replace(day=last_day).isoformat(),
        )


@dataclass(frozen=True)
class ReportSummary:
    opening_balance: Decimal = Decimal("0")
    total_receipts: Decimal = Decimal("0")
    total_expenditures: Decimal = Decimal("0")
    closing_balance: Decimal = Decimal("0")


@dataclass
class LedgerResult:
    """Summary for a window plus the in-window entries in ledger order."""
    summary: ReportSummary
    filtered: List[Transaction] = field(default_factory=list)


@dataclass
class PageData:
    """One printed ledger sheet.

    `receipts` and `expenditures` always hold `page_size` slots; `None` marks
    an empty row kept for alignment between the two columns.
    """
    page_number: int
    total_pages: int
    receipts: List[Optional[Transaction]]
    expenditures: List[Optional[Transaction]]
    opening_balance_bf: Decimal
    page_total_receipts: Decimal
    page_total_expenditures: Decimal
    closing_balance_cf: Decimal

    @property
    def left_grand_total(self) -> Decimal:
        return self.opening_balance_bf + self.page_total_receipts

    @property
    def right_grand_total(self) -> Decimal:
        return self.page_total_expenditures + self.closing_balance_cf
