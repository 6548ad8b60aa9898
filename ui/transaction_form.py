'''
    File Name: transaction_form.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''
from dataclasses import replace
import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QFormLayout,
    QLineEdit,
    QDateEdit,
    QComboBox,
    QPushButton,
    QHBoxLayout,
    QLabel,
    QMessageBox,
)
from PyQt6.QtCore import QDate, pyqtSignal

from config import CURRENCY_SYMBOL
from models.transaction import Transaction, TransactionType, to_amount

logger = logging.getLogger(__name__)


class TransactionForm(QWidget):
    """Form to record a new entry or update an existing one.

    Usage:
        form = TransactionForm(parent)
        form.saved.connect(handler)          # handler(Transaction)
        form.set_transaction(tx)             # switch to update mode
        form.set_transaction(None)           # back to create mode

    The entry type cannot be changed while editing; the id and timestamp of
    the edited entry are kept.
    """

    saved = pyqtSignal(object)
    cancelled = pyqtSignal()

    def __init__(self, parent=None, transaction: Optional[Transaction] = None):
        super().__init__(parent)
        self._transaction: Optional[Transaction] = None
        self._editing: Optional[Transaction] = None

        self.setup_ui()
        self.set_transaction(transaction)

    def setup_ui(self) -> None:
        layout = QVBoxLayout()

        self.heading = QLabel("New Transaction")
        self.heading.setStyleSheet("font-weight: bold; font-size: 16px;")
        layout.addWidget(self.heading)

        form = QFormLayout()

        self.type_combo = QComboBox()
        for t in TransactionType:
            self.type_combo.addItem(t.label, t.value)
        self.type_combo.currentIndexChanged.connect(self._on_type_changed)
        form.addRow("Type:", self.type_combo)

        self.date = QDateEdit()
        self.date.setCalendarPopup(True)
        self.date.setDisplayFormat("yyyy-MM-dd")
        self.date.setDate(QDate.currentDate())
        form.addRow("Date:", self.date)

        self.party_label = QLabel()
        self.party = QLineEdit()
        form.addRow(self.party_label, self.party)

        self.particulars = QLineEdit()
        self.particulars.setPlaceholderText("Optional")
        form.addRow("Particulars:", self.particulars)

        self.amount = QLineEdit()
        self.amount.setPlaceholderText("0.00")
        form.addRow(f"Amount ({CURRENCY_SYMBOL}):", self.amount)

        layout.addLayout(form)

        # Buttons
        btn_layout = QHBoxLayout()
        self.save_btn = QPushButton("Save")
        self.cancel_btn = QPushButton("Cancel")
        btn_layout.addStretch(1)
        btn_layout.addWidget(self.save_btn)
        btn_layout.addWidget(self.cancel_btn)

        layout.addLayout(btn_layout)

        self.setLayout(layout)

        # Connections
        self.save_btn.clicked.connect(self.save_transaction)
        self.cancel_btn.clicked.connect(self._on_cancel)

        self._on_type_changed()

    @property
    def is_editing(self) -> bool:
        return self._editing is not None

    def current_type(self) -> TransactionType:
        return TransactionType(self.type_combo.currentData() or TransactionType.RECEIPT.value)

    def _on_type_changed(self, *_args) -> None:
        self.party_label.setText(f"{self.current_type().party_label}:")

    def set_transaction(self, tx: Optional[Transaction]) -> None:
        """Load `tx` for editing, or clear the form for a new entry when None."""
        self._editing = tx
        if tx is None:
            self.heading.setText("New Transaction")
            self.type_combo.setEnabled(True)
            self.cancel_btn.setVisible(False)
            self.reset()
            return

        self.heading.setText("Edit Transaction")
        self.type_combo.setCurrentIndex(max(0, self.type_combo.findData(tx.type.value)))
        self.type_combo.setEnabled(False)
        self.cancel_btn.setVisible(True)
        parsed = QDate.fromString(str(tx.date), "yyyy-MM-dd")
        if parsed.isValid():
            self.date.setDate(parsed)
        self.party.setText(tx.party)
        self.particulars.setText(tx.particulars or "")
        self.amount.setText(format(tx.amount, "f"))

    def reset(self) -> None:
        self.date.setDate(QDate.currentDate())
        self.party.clear()
        self.particulars.clear()
        self.amount.clear()

    def _on_cancel(self) -> None:
        self.set_transaction(None)
        self.cancelled.emit()

    def save_transaction(self) -> None:
        """Validate the fields and emit `saved`; invalid input leaves everything untouched."""
        party = self.party.text().strip()
        particulars = self.particulars.text().strip()
        date = self.date.date().toString("yyyy-MM-dd")
        try:
            amount = to_amount(self.amount.text())
        except ValueError:
            QMessageBox.warning(self, "Validation", "Amount must be a number.")
            return

        try:
            if self._editing is None:
                tx = Transaction.create(
                    date=date,
                    type=self.current_type(),
                    party=party,
                    amount=amount,
                    particulars=particulars,
                )
            else:
                # validate through create(), then keep the original identity
                checked = Transaction.create(date, self._editing.type, party, amount, particulars)
                tx = replace(
                    self._editing,
                    date=checked.date,
                    party=checked.party,
                    particulars=checked.particulars,
                    amount=checked.amount,
                )
        except ValueError as e:
            logger.debug("Rejected transaction input: %s", e)
            QMessageBox.warning(self, "Validation", str(e))
            return

        self._transaction = tx
        self.saved.emit(tx)
        if self._editing is None:
            self.reset()

    def get_transaction(self) -> Optional[Transaction]:
        return self._transaction
