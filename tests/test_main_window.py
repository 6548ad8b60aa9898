from unittest.mock import patch

import pytest

from PyQt6 import QtWidgets

import config
from database.db_manager import DatabaseManager
from models.report import DateRange
from models.transaction import Transaction, TransactionType
from ui.main_window import MainWindow, VIEW_FORM, VIEW_REPORT

from conftest import make_tx


@pytest.fixture
def window(qtbot, db):
    mw = MainWindow(db_manager=db)
    qtbot.addWidget(mw)
    return mw


def test_window_title_and_statusbar(window):
    # Title contains app name and version
    assert config.APP_NAME in window.windowTitle()
    assert config.APP_VERSION in window.windowTitle()
    assert window.view == VIEW_FORM
    assert window.editing_transaction is None


def test_apply_stylesheet_applies_content(qtbot, tmp_path, monkeypatch, db):
    qss = tmp_path / "test_styles.qss"
    qss.write_text("QWidget { background-color: rgb(18,52,86); }", encoding="utf-8")
    monkeypatch.setattr("ui.main_window.STYLESHEET_PATH", qss)

    mw = MainWindow(db_manager=db)
    qtbot.addWidget(mw)
    assert "background-color" in mw.styleSheet()


def test_navigation_between_views(window):
    window.report_btn.click()
    assert window.view == VIEW_REPORT
    assert window.report_btn.isChecked()

    window.form_btn.click()
    assert window.view == VIEW_FORM
    assert window.form_btn.isChecked()

    window.view_all_btn.click()
    assert window.view == VIEW_REPORT


def test_empty_recent_activity(window):
    assert window.recent_list.count() == 1
    assert "No recent transactions" in window.recent_list.item(0).text()


def test_loads_existing_ledger_on_startup(qtbot, db):
    db.replace_all_transactions([make_tx("a", "2024-01-01", "RECEIPT", 10, party="Alpha")])
    mw = MainWindow(db_manager=db)
    qtbot.addWidget(mw)
    assert [t.id for t in mw.transactions] == ["a"]
    assert "Alpha" in mw.recent_list.item(0).text()


def test_save_from_form_persists_and_notifies(window, db):
    tx = Transaction.create("2024-01-05", TransactionType.RECEIPT, "Salary", 100)
    window.transaction_form.saved.emit(tx)

    assert [t.id for t in db.load_transactions()] == [tx.id]
    assert window.transactions == [tx]
    assert window.status.currentMessage() == f"Saved Receipt of {config.format_currency(100)}"
    assert window.view == VIEW_FORM


def test_recent_activity_shows_last_three_newest_first(window):
    for i in range(5):
        window.on_transaction_saved(make_tx(str(i), "2024-01-0%d" % (i + 1), "EXPENDITURE", i + 1, party=f"P{i}"))
    items = [window.recent_list.item(i).text() for i in range(window.recent_list.count())]
    assert len(items) == config.RECENT_ACTIVITY_COUNT
    assert "P4" in items[0] and "P3" in items[1] and "P2" in items[2]
    assert items[0].rstrip().endswith(f"- {config.format_currency(5)}")


def test_edit_flow_updates_entry_and_returns_to_report(window, db):
    original = make_tx("e1", "2024-01-10", "EXPENDITURE", 40, party="Grocer")
    window.on_transaction_saved(original)
    window.show_report_view()

    window.report_view.edit_requested.emit(original)
    assert window.view == VIEW_FORM
    assert window.editing_transaction is original
    assert window.transaction_form.is_editing

    window.transaction_form.amount.setText("55")
    window.transaction_form.save_transaction()

    stored = db.load_transactions()
    assert len(stored) == 1
    assert stored[0].id == "e1"
    assert stored[0].amount == 55.0
    assert window.editing_transaction is None
    assert not window.transaction_form.is_editing
    assert window.view == VIEW_REPORT


def test_cancel_edit_returns_to_report(window):
    original = make_tx("e1", "2024-01-10", "EXPENDITURE", 40)
    window.on_transaction_saved(original)
    window.on_edit_requested(original)

    window.transaction_form.cancel_btn.click()
    assert window.editing_transaction is None
    assert window.view == VIEW_REPORT


def test_navigating_away_abandons_edit(window):
    original = make_tx("e1", "2024-01-10", "EXPENDITURE", 40)
    window.on_transaction_saved(original)
    window.on_edit_requested(original)

    window.report_btn.click()
    assert window.editing_transaction is None
    assert not window.transaction_form.is_editing


def test_delete_from_report(window, db):
    window.on_transaction_saved(make_tx("a", "2024-01-01", "RECEIPT", 10))
    window.on_transaction_saved(make_tx("b", "2024-01-02", "RECEIPT", 20))

    window.report_view.delete_requested.emit("a")
    assert [t.id for t in db.load_transactions()] == ["b"]
    assert [t.id for t in window.transactions] == ["b"]

    # unknown id is a no-op
    window.on_delete_requested("zzz")
    assert [t.id for t in window.transactions] == ["b"]


def test_report_view_follows_ledger(window):
    window.report_view.set_date_range(DateRange("2024-01-01", "2024-01-31"))
    window.on_transaction_saved(make_tx("a", "2024-01-05", "RECEIPT", 100))
    window.on_transaction_saved(make_tx("b", "2024-01-10", "EXPENDITURE", 40))
    window.show_report_view()

    assert window.report_view.summary.closing_balance == 60
    assert window.report_view.receipts_table.rowCount() == 1


def test_save_failure_shows_error(qtbot, tmp_path):
    class FailingDB(DatabaseManager):
        def save_transaction(self, tx):
            raise OSError("disk full")

    mw = MainWindow(db_manager=FailingDB(tmp_path / "fail.db"))
    qtbot.addWidget(mw)

    with patch.object(QtWidgets.QMessageBox, "critical") as mock_critical:
        mw.on_transaction_saved(make_tx("a", "2024-01-01", "RECEIPT", 10))
        mock_critical.assert_called_once()
    assert mw.transactions == []
