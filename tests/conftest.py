from decimal import Decimal
import os

import pytest

# Widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from database.db_manager import DatabaseManager
from models.transaction import Transaction, TransactionType


def make_tx(tx_id, date, tx_type, amount, party="Party", particulars="", timestamp=0) -> Transaction:
    return Transaction(
        id=tx_id,
        date=date,
        type=TransactionType(tx_type),
        party=party,
        particulars=particulars,
        amount=Decimal(str(amount)),
        timestamp=timestamp,
    )


@pytest.fixture
def db(tmp_path):
    dm = DatabaseManager(tmp_path / "test.db")
    dm.ensure_database()
    return dm


@pytest.fixture
def sample_transactions():
    return [
        make_tx("1", "2024-01-05", "RECEIPT", 100, party="Salary", particulars="January pay", timestamp=1),
        make_tx("2", "2024-01-10", "EXPENDITURE", 40, party="Grocer", particulars="Vegetables", timestamp=2),
    ]
