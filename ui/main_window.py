'''
    File Name: main_window.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from pathlib import Path
import logging
from typing import Any, List, Optional

from PyQt6 import QtWidgets, QtCore
from config import (
    APP_NAME,
    APP_VERSION,
    NOTIFICATION_TIMEOUT_MS,
    RECENT_ACTIVITY_COUNT,
    STYLESHEET_PATH,
    ensure_data_dir,
    format_currency,
)

# Local UI components
from .transaction_form import TransactionForm
from .report_view import ReportView
from database.db_manager import DatabaseManager
from models.transaction import Transaction

logger = logging.getLogger(__name__)

VIEW_FORM = "form"
VIEW_REPORT = "report"


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, *args, db_manager: Optional[Any] = None, **kwargs):
        super().__init__(*args, **kwargs)

        # Ensure runtime data dir exists (safe)
        try:
            ensure_data_dir()
        except Exception:
            logger.exception("Failed ensuring data directory")

        # Window metadata and status bar
        try:
            self.setWindowTitle(f"{APP_NAME} — {APP_VERSION}")
        except Exception:
            logger.exception("Failed to set window title")

        self.status = self.statusBar()
        self.status.showMessage("Ready")

        # DB manager may be injected by the app; otherwise use the default store
        self.db_manager = db_manager if db_manager is not None else DatabaseManager()
        self.ensure_db_ready()

        self.transactions: List[Transaction] = []
        self.editing_transaction: Optional[Transaction] = None

        # Apply stylesheet if present (non-fatal)
        try:
            self._apply_stylesheet()
        except Exception:
            logger.exception("Failed to apply stylesheet")

        central_widget = QtWidgets.QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QtWidgets.QVBoxLayout()
        main_layout.setSpacing(15)
        main_layout.setContentsMargins(10, 10, 10, 10)

        # Navigation group
        nav_group = QtWidgets.QGroupBox(APP_NAME)
        n_layout = QtWidgets.QHBoxLayout()
        self.form_btn = QtWidgets.QPushButton("New Entry")
        self.report_btn = QtWidgets.QPushButton("Report")
        for btn in (self.form_btn, self.report_btn):
            btn.setCheckable(True)
            n_layout.addWidget(btn)
        n_layout.addStretch(1)
        nav_group.setLayout(n_layout)
        main_layout.addWidget(nav_group)

        # Pages
        self.stack = QtWidgets.QStackedWidget()

        form_page = QtWidgets.QWidget()
        f_layout = QtWidgets.QVBoxLayout()
        self.transaction_form = TransactionForm(form_page)
        f_layout.addWidget(self.transaction_form)

        recent_header = QtWidgets.QHBoxLayout()
        recent_label = QtWidgets.QLabel("Recent Activity")
        recent_label.setStyleSheet("font-weight: bold;")
        self.view_all_btn = QtWidgets.QPushButton("View All")
        recent_header.addWidget(recent_label)
        recent_header.addStretch(1)
        recent_header.addWidget(self.view_all_btn)
        f_layout.addLayout(recent_header)

        self.recent_list = QtWidgets.QListWidget()
        f_layout.addWidget(self.recent_list)
        form_page.setLayout(f_layout)

        self.report_view = ReportView(db_manager=self.db_manager)

        self.stack.addWidget(form_page)
        self.stack.addWidget(self.report_view)
        main_layout.addWidget(self.stack)

        central_widget.setLayout(main_layout)

        # Connections
        self.form_btn.clicked.connect(self.show_form_view)
        self.report_btn.clicked.connect(self.show_report_view)
        self.view_all_btn.clicked.connect(self.show_report_view)
        self.transaction_form.saved.connect(self.on_transaction_saved)
        self.transaction_form.cancelled.connect(self.on_form_cancelled)
        self.report_view.edit_requested.connect(self.on_edit_requested)
        self.report_view.delete_requested.connect(self.on_delete_requested)

        try:
            self.load_transactions()
        except Exception:
            logger.exception("Failed loading transactions on startup")

        self.show_form_view()

        # Restore/Set initial window size (remember last state with QSettings)
        try:
            settings = QtCore.QSettings("pbm", APP_NAME)
            geom = settings.value("geometry", None)
            if isinstance(geom, (bytes, bytearray)):
                geom = QtCore.QByteArray(bytes(geom))
            if isinstance(geom, QtCore.QByteArray) and not geom.isEmpty():
                self.restoreGeometry(geom)
            else:
                self.resize(1200, 800)
                self.setMinimumSize(800, 600)
        except Exception:
            logger.exception("Failed to restore/set window geometry")

    def _apply_stylesheet(self) -> None:
        """Load and apply a stylesheet if the file exists; otherwise skip quietly."""
        path = Path(STYLESHEET_PATH)
        if path.exists():
            try:
                with path.open("r", encoding="utf-8") as f:
                    self.setStyleSheet(f.read())
                logger.debug("Applied stylesheet: %s", path)
            except Exception:
                logger.exception("Error reading/applying stylesheet")
        else:
            logger.debug("Stylesheet not found at %s; skipping", path)

    def show_error(self, title: str, message: str, exc: Optional[Exception] = None) -> None:
        """Log and present a critical message box to the user."""
        if exc:
            logger.exception("%s: %s", title, message)
        else:
            logger.error("%s: %s", title, message)
        QtWidgets.QMessageBox.critical(self, title, message)

    def notify(self, message: str) -> None:
        """Show a transient message in the status bar."""
        self.status.showMessage(message, NOTIFICATION_TIMEOUT_MS)

    # --- Views ---
    @property
    def view(self) -> str:
        return VIEW_REPORT if self.stack.currentWidget() is self.report_view else VIEW_FORM

    def show_form_view(self) -> None:
        self.stack.setCurrentIndex(0)
        self.form_btn.setChecked(True)
        self.report_btn.setChecked(False)

    def show_report_view(self) -> None:
        # leaving the form abandons any edit in progress
        if self.editing_transaction is not None:
            self._clear_editing()
        self.report_view.set_transactions(self.transactions)
        self.stack.setCurrentWidget(self.report_view)
        self.form_btn.setChecked(False)
        self.report_btn.setChecked(True)

    # --- Data ---
    def load_transactions(self) -> None:
        """Load the ledger from the store and refresh every view."""
        self._set_transactions(self.db_manager.load_transactions())
        self.status.showMessage("Transactions loaded")

    def _set_transactions(self, transactions: List[Transaction]) -> None:
        self.transactions = list(transactions)
        self._populate_recent()
        self.report_view.set_transactions(self.transactions)

    def _populate_recent(self) -> None:
        """Show the last few inserted entries, newest first."""
        self.recent_list.clear()
        recent = self.transactions[-RECENT_ACTIVITY_COUNT:][::-1]
        if not recent:
            self.recent_list.addItem("No recent transactions. Start adding!")
            return
        for t in recent:
            sign = "+" if t.is_receipt else "-"
            title = t.particulars or t.party
            self.recent_list.addItem(f"{title}  ({t.date} • {t.party})    {sign} {format_currency(t.amount)}")

    def _clear_editing(self) -> None:
        self.editing_transaction = None
        self.transaction_form.set_transaction(None)

    def on_transaction_saved(self, tx: Transaction) -> None:
        """Persist a new or edited entry coming from the form."""
        was_editing = self.editing_transaction is not None
        try:
            if was_editing:
                updated = self.db_manager.update_transaction(tx)
            else:
                updated = self.db_manager.save_transaction(tx)
        except Exception as e:
            self.show_error("Save failed", "Failed to save transaction", e)
            return

        self._set_transactions(updated)
        if was_editing:
            self._clear_editing()
            self.notify(f"Updated {tx.type.label} of {format_currency(tx.amount)}")
            self.show_report_view()
        else:
            self.notify(f"Saved {tx.type.label} of {format_currency(tx.amount)}")

    def on_form_cancelled(self) -> None:
        if self.editing_transaction is not None:
            self._clear_editing()
            self.show_report_view()

    def on_edit_requested(self, tx: Transaction) -> None:
        logger.debug("on_edit_requested %s", tx.id)
        self.editing_transaction = tx
        self.transaction_form.set_transaction(tx)
        self.show_form_view()

    def on_delete_requested(self, tx_id: str) -> None:
        logger.debug("on_delete_requested %s", tx_id)
        try:
            updated = self.db_manager.delete_transaction(tx_id)
        except Exception as e:
            self.show_error("Delete failed", "Failed to delete transaction", e)
            return
        self._set_transactions(updated)
        self.notify("Transaction deleted")

    def closeEvent(self, event):
        try:
            settings = QtCore.QSettings("pbm", APP_NAME)
            settings.setValue("geometry", self.saveGeometry())
        except Exception:
            logger.exception("Failed to save window geometry")
        super().closeEvent(event)

    def ensure_db_ready(self) -> None:
        """Ensure the database file exists and is initialized."""
        if self.db_manager is not None and hasattr(self.db_manager, "ensure_database"):
            try:
                self.db_manager.ensure_database()
            except Exception:
                logger.exception("Failed to ensure database exists via db_manager")
