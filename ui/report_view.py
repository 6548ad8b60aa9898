'''
    File Name: report_view.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from decimal import Decimal
import logging
from pathlib import Path
from typing import List, Optional

from PyQt6 import QtWidgets, QtCore
from PyQt6.QtCore import Qt, QDate, pyqtSignal

import config
from config import format_currency
from models.report import DateRange, LedgerResult, PageData, ReportSummary
from models.transaction import Transaction, TransactionType, to_amount
from services.exporters import ExportError, default_export_filename, export_excel, export_pdf, print_report
from services.ledger import apply_search, split_by_type, summarize
from services.paginator import paginate
from services.report_html import render_report_html

logger = logging.getLogger(__name__)

TABLE_HEADERS = {
    TransactionType.RECEIPT: ["Date", "Received From", "Particulars", "Amount", ""],
    TransactionType.EXPENDITURE: ["Date", "Paid To", "Particulars", "Amount", ""],
}


class ReportView(QtWidgets.QWidget):
    """Receipts and expenditures for a date window, with balances and exports.

    Features:
    - Date window (defaults to the current month) and free-text search
    - Manually set initial balance, persisted through db_manager
    - Side-by-side receipt / expenditure tables with edit and delete actions
    - Print, PDF and Excel export of the paginated ledger

    While a search is active the totals follow the matching rows but the
    opening and closing balances stay those of the whole window, so the
    balance rows are hidden.
    """

    edit_requested = pyqtSignal(object)
    delete_requested = pyqtSignal(str)

    def __init__(self, parent=None, db_manager=None, transactions: Optional[List[Transaction]] = None):
        super().__init__(parent)
        self.db_manager = db_manager
        self._transactions: List[Transaction] = list(transactions or [])
        self.receipts: List[Transaction] = []
        self.expenditures: List[Transaction] = []
        self.summary = ReportSummary()
        self.initial_balance = Decimal("0")

        self.setup_ui()

        try:
            self._load_initial_balance()
            self.refresh()
        except Exception:
            logger.exception("Failed to initialize ReportView")

    def setup_ui(self) -> None:
        main_layout = QtWidgets.QVBoxLayout()

        title = QtWidgets.QLabel("Account Report")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet("font-weight: bold; font-size: 14px;")
        main_layout.addWidget(title)

        # Controls row: search + date window
        controls = QtWidgets.QHBoxLayout()
        self.search_input = QtWidgets.QLineEdit()
        self.search_input.setPlaceholderText("Search by particulars, party, amount...")
        self.search_input.textChanged.connect(self.refresh)
        controls.addWidget(self.search_input, 2)

        window = DateRange.current_month()
        self.start_date = self._make_date_edit(window.start_date)
        self.end_date = self._make_date_edit(window.end_date)
        controls.addWidget(QtWidgets.QLabel("From:"))
        controls.addWidget(self.start_date)
        controls.addWidget(QtWidgets.QLabel("To:"))
        controls.addWidget(self.end_date)
        main_layout.addLayout(controls)

        # Initial balance row
        balance_row = QtWidgets.QHBoxLayout()
        balance_row.addWidget(QtWidgets.QLabel("Initial Balance:"))
        self.initial_balance_label = QtWidgets.QLabel(format_currency(0))
        self.initial_balance_input = QtWidgets.QLineEdit()
        self.edit_balance_btn = QtWidgets.QPushButton("Edit")
        self.save_balance_btn = QtWidgets.QPushButton("Save")
        self.cancel_balance_btn = QtWidgets.QPushButton("Cancel")
        for w in (self.initial_balance_label, self.initial_balance_input, self.edit_balance_btn,
                  self.save_balance_btn, self.cancel_balance_btn):
            balance_row.addWidget(w)
        balance_row.addStretch(1)

        # Export buttons
        self.print_btn = QtWidgets.QPushButton("Print")
        self.pdf_btn = QtWidgets.QPushButton("Save PDF")
        self.excel_btn = QtWidgets.QPushButton("Excel")
        balance_row.addWidget(self.print_btn)
        balance_row.addWidget(self.pdf_btn)
        balance_row.addWidget(self.excel_btn)
        main_layout.addLayout(balance_row)

        self.edit_balance_btn.clicked.connect(self.start_edit_balance)
        self.save_balance_btn.clicked.connect(self.save_initial_balance)
        self.cancel_balance_btn.clicked.connect(self.cancel_edit_balance)
        self.print_btn.clicked.connect(self.on_print_clicked)
        self.pdf_btn.clicked.connect(self.on_pdf_clicked)
        self.excel_btn.clicked.connect(self.on_excel_clicked)
        self._set_balance_editing(False)

        # Receipts | Expenditures
        sides = QtWidgets.QHBoxLayout()

        receipts_box = QtWidgets.QGroupBox("Credit (Receipts)")
        r_layout = QtWidgets.QVBoxLayout()
        self.opening_label = QtWidgets.QLabel()
        self.receipts_table = self._make_table(TransactionType.RECEIPT)
        self.receipts_total_label = QtWidgets.QLabel()
        r_layout.addWidget(self.opening_label)
        r_layout.addWidget(self.receipts_table)
        r_layout.addWidget(self.receipts_total_label)
        receipts_box.setLayout(r_layout)

        expenditures_box = QtWidgets.QGroupBox("Debit (Expenditure)")
        e_layout = QtWidgets.QVBoxLayout()
        self.expenditures_table = self._make_table(TransactionType.EXPENDITURE)
        self.expenditures_total_label = QtWidgets.QLabel()
        self.closing_label = QtWidgets.QLabel()
        e_layout.addWidget(self.expenditures_table)
        e_layout.addWidget(self.expenditures_total_label)
        e_layout.addWidget(self.closing_label)
        expenditures_box.setLayout(e_layout)

        sides.addWidget(receipts_box)
        sides.addWidget(expenditures_box)
        main_layout.addLayout(sides)

        self.setLayout(main_layout)

    def _make_date_edit(self, iso_date: str) -> QtWidgets.QDateEdit:
        edit = QtWidgets.QDateEdit()
        edit.setCalendarPopup(True)
        edit.setDisplayFormat("yyyy-MM-dd")
        edit.setDate(QDate.fromString(iso_date, "yyyy-MM-dd"))
        edit.dateChanged.connect(self.refresh)
        return edit

    def _make_table(self, tx_type: TransactionType) -> QtWidgets.QTableWidget:
        headers = TABLE_HEADERS[tx_type]
        table = QtWidgets.QTableWidget(0, len(headers))
        table.setHorizontalHeaderLabels(headers)
        table.horizontalHeader().setStretchLastSection(True)
        table.setEditTriggers(QtWidgets.QAbstractItemView.EditTrigger.NoEditTriggers)
        table.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectionBehavior.SelectRows)
        table.verticalHeader().setVisible(False)
        return table

    # --- State ---
    def date_range(self) -> DateRange:
        return DateRange(
            start_date=self.start_date.date().toString("yyyy-MM-dd"),
            end_date=self.end_date.date().toString("yyyy-MM-dd"),
        )

    def set_date_range(self, date_range: DateRange) -> None:
        self.start_date.setDate(QDate.fromString(date_range.start_date, "yyyy-MM-dd"))
        self.end_date.setDate(QDate.fromString(date_range.end_date, "yyyy-MM-dd"))

    def search_query(self) -> str:
        return self.search_input.text()

    def is_searching(self) -> bool:
        return bool(self.search_query().strip())

    def set_transactions(self, transactions: List[Transaction]) -> None:
        self._transactions = list(transactions or [])
        self.refresh()

    def compute(self) -> LedgerResult:
        """Summarize the window, then narrow it by the current search."""
        window = self.date_range()
        result = summarize(self._transactions, window.start_date, window.end_date, self.initial_balance)
        return apply_search(result, self.search_query())

    def refresh(self, *_args) -> None:
        """Recompute the summary and repopulate tables and labels."""
        try:
            result = self.compute()
        except Exception:
            logger.exception("Failed computing report")
            return
        self.summary = result.summary
        self.receipts, self.expenditures = split_by_type(result.filtered)
        self._populate_table(self.receipts_table, self.receipts)
        self._populate_table(self.expenditures_table, self.expenditures)
        self._update_labels()

    def _populate_table(self, table: QtWidgets.QTableWidget, rows: List[Transaction]) -> None:
        table.setRowCount(len(rows))
        for r_idx, tx in enumerate(rows):
            values = [tx.date, tx.party, tx.particulars or "-", format_currency(tx.amount)]
            for c_idx, value in enumerate(values):
                item = QtWidgets.QTableWidgetItem(str(value))
                if c_idx == 3:
                    item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
                table.setItem(r_idx, c_idx, item)
            table.setCellWidget(r_idx, 4, self._make_actions(tx))
        table.resizeColumnsToContents()

    def _make_actions(self, tx: Transaction) -> QtWidgets.QWidget:
        box = QtWidgets.QWidget()
        layout = QtWidgets.QHBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        edit_btn = QtWidgets.QPushButton("Edit")
        delete_btn = QtWidgets.QPushButton("Delete")
        edit_btn.clicked.connect(lambda _checked=False, t=tx: self.request_edit(t))
        delete_btn.clicked.connect(lambda _checked=False, t=tx: self.request_delete(t))
        layout.addWidget(edit_btn)
        layout.addWidget(delete_btn)
        box.setLayout(layout)
        return box

    def _update_labels(self) -> None:
        s = self.summary
        self.initial_balance_label.setText(format_currency(self.initial_balance))
        self.opening_label.setText(f"Opening Balance (B/F): {format_currency(s.opening_balance)}")
        self.receipts_total_label.setText(f"Total Receipts: {format_currency(s.total_receipts)}")
        self.expenditures_total_label.setText(f"Total Expenditure: {format_currency(s.total_expenditures)}")
        self.closing_label.setText(f"Closing Balance (C/F): {format_currency(s.closing_balance)}")

        show_balancing = not self.is_searching()
        self.opening_label.setVisible(show_balancing)
        self.closing_label.setVisible(show_balancing)

    # --- Initial balance ---
    def _load_initial_balance(self) -> None:
        if not getattr(self, "db_manager", None):
            logger.debug("No db_manager available for ReportView")
            return
        self.initial_balance = to_amount(self.db_manager.load_initial_balance())

    def _set_balance_editing(self, editing: bool) -> None:
        self.initial_balance_label.setVisible(not editing)
        self.edit_balance_btn.setVisible(not editing)
        self.initial_balance_input.setVisible(editing)
        self.save_balance_btn.setVisible(editing)
        self.cancel_balance_btn.setVisible(editing)

    def start_edit_balance(self) -> None:
        self.initial_balance_input.setText(format(self.initial_balance, "f"))
        self._set_balance_editing(True)

    def cancel_edit_balance(self) -> None:
        self._set_balance_editing(False)

    def save_initial_balance(self) -> None:
        """Persist the typed balance; unparsable input is ignored and editing continues."""
        try:
            value = to_amount(self.initial_balance_input.text())
            if not value.is_finite():
                raise ValueError("not finite")
        except ValueError:
            logger.debug("Ignoring invalid initial balance %r", self.initial_balance_input.text())
            return

        if getattr(self, "db_manager", None):
            try:
                value = self.db_manager.save_initial_balance(value)
            except Exception as e:
                self.show_error("Save failed", "Failed to save initial balance", e)
                return
        self.initial_balance = to_amount(value)
        self._set_balance_editing(False)
        self.refresh()

    # --- Edit / delete ---
    def request_edit(self, tx: Transaction) -> None:
        self.edit_requested.emit(tx)

    def request_delete(self, tx: Transaction) -> None:
        reply = QtWidgets.QMessageBox.question(
            self,
            "Delete Transaction",
            f"Are you sure you want to delete this entry?\n\n{tx.date}  {tx.party}  {format_currency(tx.amount)}",
            QtWidgets.QMessageBox.StandardButton.Yes | QtWidgets.QMessageBox.StandardButton.No,
        )
        if reply != QtWidgets.QMessageBox.StandardButton.Yes:
            return
        self.delete_requested.emit(str(tx.id))

    # --- Exports ---
    def prepare_paged_data(self) -> List[PageData]:
        return paginate(self.receipts, self.expenditures, self.summary.opening_balance, config.ITEMS_PER_PAGE)

    def generate_html(self) -> str:
        return render_report_html(self.prepare_paged_data(), self.date_range(), self.search_query())

    def show_error(self, title: str, message: str, exc: Optional[Exception] = None) -> None:
        """Log and present a critical message box to the user."""
        if exc:
            logger.exception("%s: %s", title, message)
        else:
            logger.error("%s: %s", title, message)
        QtWidgets.QMessageBox.critical(self, title, message)

    def on_print_clicked(self) -> None:
        html = self.generate_html()
        # give the layout a moment before the print dialog takes over
        QtCore.QTimer.singleShot(config.PRINT_DELAY_MS, lambda: self._print(html))

    def _print(self, html: str) -> None:
        try:
            print_report(html, self)
        except ExportError as e:
            self.show_error("Print failed", str(e), e)

    def _ask_save_path(self, caption: str, ext: str, file_filter: str) -> Optional[Path]:
        file_path, _ = QtWidgets.QFileDialog.getSaveFileName(
            self,
            caption,
            default_export_filename(self.date_range(), ext),
            file_filter,
        )
        return Path(file_path) if file_path else None

    def on_pdf_clicked(self) -> None:
        path = self._ask_save_path("Save PDF", "pdf", "PDF Files (*.pdf);;All Files (*)")
        if path is None:
            return
        self.pdf_btn.setEnabled(False)
        self.pdf_btn.setText("Working...")
        try:
            export_pdf(self.generate_html(), path)
            QtWidgets.QMessageBox.information(self, "Success", f"Report saved to:\n{path}")
        except ExportError as e:
            self.show_error("PDF failed", f"{e}\nTry the 'Print' button instead.", e)
        finally:
            self.pdf_btn.setEnabled(True)
            self.pdf_btn.setText("Save PDF")

    def on_excel_clicked(self) -> None:
        path = self._ask_save_path("Export Excel", "xlsx", "Excel Files (*.xlsx);;All Files (*)")
        if path is None:
            return
        try:
            export_excel(self.receipts + self.expenditures, self.summary, self.date_range(), path)
            QtWidgets.QMessageBox.information(self, "Success", f"Report exported to:\n{path}")
        except ExportError as e:
            self.show_error("Excel export failed", str(e), e)
