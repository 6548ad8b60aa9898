'''
    File Name: db_manager.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''

from decimal import Decimal
import json
import sqlite3
from pathlib import Path
import logging
from typing import Any, List, Optional

import config
from models.transaction import Transaction, to_amount

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Key-value store holding the whole ledger as one JSON blob.

    Every mutation loads the current list, changes it in memory and writes it
    back in full, so callers never observe a partially written ledger.
    """

    def __init__(self, db_path: Path = None):
        # prefer explicit path, otherwise config value or sensible default
        if db_path is not None:
            self.db_path = Path(db_path)
        else:
            self.db_path = Path(getattr(config, "DATABASE_PATH", "")) or (config.BASE_DIR / "data" / "account_master.db")

    def _connect(self):
        """Return a new sqlite3 connection to the configured DB path."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(str(self.db_path))

    def ensure_database(self) -> None:
        """
        Ensure the configured SQLite database file exists and initialize schema.
        Safe to call multiple times.
        """
        logger.debug("Ensuring database exists at %s", self.db_path)
        existed = self.db_path.exists()
        try:
            conn = self._connect()
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
                """
            )
            conn.commit()
            conn.close()
            if not existed:
                logger.info("Created and initialized database at %s", self.db_path)
        except Exception:
            logger.exception("Failed to create/initialize database at %s", self.db_path)
            raise

    # --- Raw key-value helpers ---
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string for `key`, or None if absent/unreadable."""
        if not self.db_path.exists():
            return None
        try:
            conn = self._connect()
            cur = conn.cursor()
            cur.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cur.fetchone()
            conn.close()
            return row[0] if row else None
        except Exception:
            logger.exception("Failed reading key %s", key)
            return None

    def set_item(self, key: str, value: str) -> None:
        """Insert or overwrite `key`. Errors are logged and re-raised."""
        try:
            self.ensure_database()
            conn = self._connect()
            cur = conn.cursor()
            cur.execute(
                "INSERT INTO kv_store (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            conn.commit()
            conn.close()
        except Exception:
            logger.exception("Failed writing key %s", key)
            raise

    # --- Transactions ---
    def _load_records(self) -> List[Any]:
        """Return the raw stored records; an absent or corrupt blob yields []."""
        data = self.get_item(config.STORAGE_KEY)
        if not data:
            return []
        try:
            raw: Any = json.loads(data)
        except ValueError:
            logger.exception("Failed to parse stored transactions")
            return []
        if not isinstance(raw, list):
            logger.error("Stored transactions are not a list (got %s)", type(raw).__name__)
            return []
        return raw

    def _write_records(self, records: List[Any]) -> None:
        self.set_item(config.STORAGE_KEY, json.dumps(records))
        logger.debug("Persisted %d transaction records", len(records))

    @staticmethod
    def _decode(records: List[Any]) -> List[Transaction]:
        transactions: List[Transaction] = []
        for record in records:
            try:
                transactions.append(Transaction.from_dict(record))
            except (AttributeError, KeyError, TypeError, ValueError):
                logger.warning("Skipping unreadable transaction record %r", record)
        return transactions

    @staticmethod
    def _record_id(record: Any) -> Optional[str]:
        if isinstance(record, dict) and "id" in record:
            return str(record["id"])
        return None

    def load_transactions(self) -> List[Transaction]:
        """Return the stored ledger, skipping records that cannot be decoded."""
        return self._decode(self._load_records())

    def replace_all_transactions(self, transactions: List[Transaction]) -> None:
        """Overwrite the stored ledger with `transactions`."""
        self._write_records([t.to_dict() for t in transactions])

    # Mutations work on the raw records so unreadable ones are written back as they were.
    def save_transaction(self, tx: Transaction) -> List[Transaction]:
        """Append a new entry and return the updated ledger."""
        records = self._load_records() + [tx.to_dict()]
        self._write_records(records)
        return self._decode(records)

    def update_transaction(self, tx: Transaction) -> List[Transaction]:
        """Replace the entry sharing `tx.id` and return the updated ledger."""
        records = [
            tx.to_dict() if self._record_id(r) == str(tx.id) else r
            for r in self._load_records()
        ]
        self._write_records(records)
        return self._decode(records)

    def delete_transaction(self, tx_id: Any) -> List[Transaction]:
        """Remove the entry with `tx_id`; ids are compared as strings. Unknown ids are a no-op."""
        current = self._load_records()
        records = [r for r in current if self._record_id(r) != str(tx_id)]
        if len(records) == len(current):
            logger.debug("delete_transaction: id %s not found", tx_id)
            return self._decode(current)
        self._write_records(records)
        return self._decode(records)

    # --- Initial balance ---
    def load_initial_balance(self) -> Decimal:
        """Return the manually set opening balance (0 when absent or unreadable)."""
        data = self.get_item(config.INITIAL_BALANCE_KEY)
        if not data:
            return Decimal("0")
        try:
            return to_amount(data)
        except ValueError:
            logger.exception("Failed parsing initial balance %r", data)
            return Decimal("0")

    def save_initial_balance(self, amount) -> Decimal:
        amount = to_amount(amount)
        self.set_item(config.INITIAL_BALANCE_KEY, str(amount))
        return amount
