'''
    File Name: exporters.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
    Description: PDF, print and Excel output for the ledger report.
'''
from decimal import Decimal
from pathlib import Path
import logging
from typing import Iterable, Optional

from openpyxl import Workbook
from openpyxl.styles import Font
from PyQt6.QtGui import QPageLayout, QPageSize, QTextDocument

import config
from models.report import DateRange, ReportSummary
from models.transaction import Transaction

from .ledger import split_by_type

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Raised when a report could not be written or printed."""


def default_export_filename(date_range: DateRange, ext: str) -> str:
    return f"AccountMaster_Report_{date_range.start_date}_{date_range.end_date}.{ext.lstrip('.')}"


# --- PDF / print (Qt print support) ---
def _build_document(html: str) -> QTextDocument:
    doc = QTextDocument()
    doc.setHtml(html)
    return doc


def _configure_printer(printer) -> None:
    printer.setPageSize(QPageSize(QPageSize.PageSizeId.A4))
    printer.setPageOrientation(QPageLayout.Orientation.Landscape)


def export_pdf(html: str, path: Path) -> Path:
    """Render the report HTML into an A4 landscape PDF at `path`."""
    path = Path(path)
    try:
        from PyQt6.QtPrintSupport import QPrinter

        printer = QPrinter(QPrinter.PrinterMode.HighResolution)
        printer.setOutputFormat(QPrinter.OutputFormat.PdfFormat)
        printer.setOutputFileName(str(path))
        _configure_printer(printer)
        _build_document(html).print(printer)
    except Exception as e:
        logger.exception("Failed generating PDF %s", path)
        raise ExportError(f"Error generating PDF: {e}") from e

    if not path.exists():
        raise ExportError(f"PDF was not written to {path}")
    logger.info("Report exported to PDF %s", path)
    return path


def print_report(html: str, parent=None) -> bool:
    """Show the print dialog and print the report. Returns False if the user cancels."""
    try:
        from PyQt6.QtPrintSupport import QPrintDialog, QPrinter

        printer = QPrinter(QPrinter.PrinterMode.HighResolution)
        _configure_printer(printer)
        dialog = QPrintDialog(printer, parent)
        dialog.setWindowTitle(config.REPORT_TITLE)
        if not dialog.exec():
            logger.debug("Print cancelled by user")
            return False
        _build_document(html).print(printer)
        return True
    except Exception as e:
        logger.exception("Failed printing report")
        raise ExportError(f"Error printing report: {e}") from e


# --- Excel (openpyxl) ---
def _number(value: Decimal) -> float:
    # Excel cells hold doubles
    return float(value)


def _side_cells(tx: Optional[Transaction]) -> list:
    if tx is None:
        return [None, None, None, None]
    return [tx.date, tx.particulars, tx.party, _number(tx.amount)]


def build_workbook(
    transactions: Iterable[Transaction],
    summary: ReportSummary,
    date_range: DateRange,
) -> Workbook:
    """Build the side-by-side receipts/expenditures sheet."""
    receipts, expenditures = split_by_type(transactions)
    receipts.sort(key=lambda t: t.date)
    expenditures.sort(key=lambda t: t.date)

    wb = Workbook()
    ws = wb.active
    ws.title = config.EXCEL_SHEET_NAME

    amount_header = f"Amount ({config.CURRENCY_SYMBOL})"
    ws.append([f"Report Period: {date_range.start_date} to {date_range.end_date}"])
    ws.append([])
    ws.append(["CREDIT (Receipts)", None, None, None, "|", "DEBIT (Expenditure)"])
    ws.append(["Date", "Particulars", "Received From", amount_header, "|",
               "Date", "Particulars", "Paid To", amount_header])
    for row_idx in (1, 3, 4):
        for cell in ws[row_idx]:
            cell.font = Font(bold=True)

    for i in range(max(len(receipts), len(expenditures))):
        r = receipts[i] if i < len(receipts) else None
        e = expenditures[i] if i < len(expenditures) else None
        ws.append(_side_cells(r) + ["|"] + _side_cells(e))

    ws.append([])
    ws.append([None, None, "Opening Balance (B/F):", _number(summary.opening_balance), "|",
               None, None, "Total Expenditure:", _number(summary.total_expenditures)])
    ws.append([None, None, "Total Receipts:", _number(summary.total_receipts), "|",
               None, None, "Closing Balance (C/F):", _number(summary.closing_balance)])
    ws.append([None, None, "GRAND TOTAL:", _number(summary.opening_balance + summary.total_receipts), "|",
               None, None, "GRAND TOTAL:", _number(summary.total_expenditures + summary.closing_balance)])
    for cell in ws[ws.max_row]:
        cell.font = Font(bold=True)

    for col, width in zip("ABCDEFGHI", (12, 30, 22, 14, 3, 12, 30, 22, 14)):
        ws.column_dimensions[col].width = width
    return wb


def export_excel(
    transactions: Iterable[Transaction],
    summary: ReportSummary,
    date_range: DateRange,
    path: Path,
) -> Path:
    """Write the report workbook to `path`."""
    path = Path(path)
    try:
        wb = build_workbook(transactions, summary, date_range)
        wb.save(str(path))
    except Exception as e:
        logger.exception("Failed exporting Excel report to %s", path)
        raise ExportError(f"Error generating Excel file: {e}") from e
    logger.info("Report exported to Excel %s", path)
    return path
