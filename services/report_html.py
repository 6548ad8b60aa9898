'''
    File Name: report_html.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
    Description: HTML ledger sheets for print and PDF output.
'''
from decimal import Decimal
from html import escape
from typing import List, Optional, Sequence

import config
from config import format_currency
from models.report import DateRange, PageData
from models.transaction import Transaction

# Qt's rich text engine understands tables and a CSS subset, not flexbox.
_STYLE = """
<style>
  body { font-family: sans-serif; color: #1e293b; }
  .title { font-size: 20pt; font-weight: bold; color: #312e81; text-align: center; }
  .subtitle { font-size: 10pt; color: #64748b; text-align: center; }
  .page-no { font-size: 9pt; color: #64748b; text-align: right; }
  table.ledger { border-collapse: collapse; width: 100%; }
  table.ledger td, table.ledger th { border: 1px solid #cbd5e1; padding: 4px; font-size: 9pt; }
  th.receipts { background-color: #d1fae5; color: #065f46; }
  th.expenditures { background-color: #ffe4e6; color: #9f1239; }
  td.balance { background-color: #f1f5f9; font-weight: bold; }
  td.amount { text-align: right; font-weight: bold; }
  td.total { font-weight: bold; text-transform: uppercase; }
  .txt-green { color: #059669; }
  .txt-red { color: #e11d48; }
</style>
"""


def _cells(tx: Optional[Transaction], amount_class: str) -> str:
    if tx is None:
        return "<td>&nbsp;</td><td></td><td></td><td></td>"
    return (
        f"<td>{escape(tx.date)}</td>"
        f"<td>{escape(tx.party)}</td>"
        f"<td>{escape(tx.particulars or '-')}</td>"
        f'<td class="amount {amount_class}">{escape(format_currency(tx.amount))}</td>'
    )


def _footer_row(left_label: str, left_value: Decimal, right_label: str, right_value: Decimal) -> str:
    return (
        "<tr>"
        f'<td class="total" colspan="3">{left_label}</td>'
        f'<td class="amount">{escape(format_currency(left_value))}</td>'
        f'<td class="total" colspan="3">{right_label}</td>'
        f'<td class="amount">{escape(format_currency(right_value))}</td>'
        "</tr>"
    )


def render_page(page: PageData, date_range: DateRange, search_query: str = "") -> str:
    period = f"Period: {date_range.start_date} to {date_range.end_date}"
    if search_query and search_query.strip():
        period += f' (Filtered: "{search_query.strip()}")'

    rows = "".join(
        f"<tr>{_cells(r, 'txt-green')}{_cells(e, 'txt-red')}</tr>"
        for r, e in zip(page.receipts, page.expenditures)
    )

    break_style = "" if page.page_number == page.total_pages else ' style="page-break-after: always;"'
    return f"""
<div class="pdf-page"{break_style}>
  <p class="page-no">Page {page.page_number} of {page.total_pages}</p>
  <p class="title">{escape(config.REPORT_TITLE)}</p>
  <p class="subtitle">{escape(period)}</p>
  <table class="ledger" width="100%" cellspacing="0">
    <tr>
      <th class="receipts" colspan="4">Credit (Receipts)</th>
      <th class="expenditures" colspan="4">Debit (Expenditure)</th>
    </tr>
    <tr>
      <td class="balance" colspan="3">Brought Forward (B/F)</td>
      <td class="balance amount">{escape(format_currency(page.opening_balance_bf))}</td>
      <td class="balance" colspan="4">&nbsp;</td>
    </tr>
    <tr>
      <th>Date</th><th>Recv. From</th><th>Particulars</th><th>Amount</th>
      <th>Date</th><th>Paid To</th><th>Particulars</th><th>Amount</th>
    </tr>
    {rows}
    {_footer_row("Page Total Receipts", page.page_total_receipts, "Page Total Expenditure", page.page_total_expenditures)}
    {_footer_row("Total (B/F + Page)", page.left_grand_total, "Carried Forward (C/F)", page.closing_balance_cf)}
    {_footer_row("Grand Total", page.left_grand_total, "Grand Total", page.right_grand_total)}
  </table>
</div>
"""


def render_report_html(pages: Sequence[PageData], date_range: DateRange, search_query: str = "") -> str:
    """Return a full HTML document with one ledger sheet per page."""
    body: List[str] = [render_page(p, date_range, search_query) for p in pages]
    return (
        f"<html><head><title>{escape(config.REPORT_TITLE)}</title>{_STYLE}</head>"
        f"<body>{''.join(body)}</body></html>"
    )
