'''
    File Name: paginator.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
    Description: Splits a report into printable pages with B/F and C/F balances.
'''
from decimal import Decimal
import math
from typing import List, Optional, Sequence

import config
from models.report import PageData
from models.transaction import Transaction, to_amount

from .ledger import sum_amounts


def _pad(rows: Sequence[Transaction], size: int) -> List[Optional[Transaction]]:
    padded: List[Optional[Transaction]] = list(rows)
    padded.extend([None] * (size - len(padded)))
    return padded


def paginate(
    receipts: Sequence[Transaction],
    expenditures: Sequence[Transaction],
    opening_balance,
    page_size: int = config.ITEMS_PER_PAGE,
) -> List[PageData]:
    """Lay receipts and expenditures side by side on fixed-size pages.

    Both columns are paged in lockstep, so the longer side decides the page
    count and the shorter side is padded with None. Each page's carried
    forward balance becomes the next page's brought forward balance.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")

    total_items = max(len(receipts), len(expenditures))
    total_pages = max(1, math.ceil(total_items / page_size))

    pages: List[PageData] = []
    running: Decimal = to_amount(opening_balance)
    for i in range(total_pages):
        start = i * page_size
        end = start + page_size
        page_receipts = receipts[start:end]
        page_expenditures = expenditures[start:end]

        page_total_receipts = sum_amounts(page_receipts)
        page_total_expenditures = sum_amounts(page_expenditures)
        closing = running + page_total_receipts - page_total_expenditures

        pages.append(
            PageData(
                page_number=i + 1,
                total_pages=total_pages,
                receipts=_pad(page_receipts, page_size),
                expenditures=_pad(page_expenditures, page_size),
                opening_balance_bf=running,
                page_total_receipts=page_total_receipts,
                page_total_expenditures=page_total_expenditures,
                closing_balance_cf=closing,
            )
        )
        running = closing

    return pages
