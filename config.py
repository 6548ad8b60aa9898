'''
    File Name: config.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
'''

from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
import logging

# Project paths & files
BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / "data"
DB_FILENAME = "account_master.db"
DATABASE_PATH = DATA_DIR / DB_FILENAME   # Path object

# Keys inside the key-value store
STORAGE_KEY = "account_master_transactions_v1"
INITIAL_BALANCE_KEY = "account_master_initial_balance_v1"

# App metadata
APP_NAME = "Account Master"
APP_VERSION = "1.0.0"

# UI / formatting
CURRENCY_SYMBOL = "₹"
CENT = Decimal("0.01")
DATE_FORMAT = "%Y-%m-%d"
STYLESHEET_PATH = BASE_DIR / "resources" / "styles.qss"
RECENT_ACTIVITY_COUNT = 3
NOTIFICATION_TIMEOUT_MS = 3000

# Report layout
ITEMS_PER_PAGE = 12
PRINT_DELAY_MS = 500
REPORT_TITLE = "Account Master Report"
EXCEL_SHEET_NAME = "Account Master Report"

# Logging (simple default; modules can call logging.basicConfig(**config))
LOGGING_CONFIG = {
    "level": logging.INFO,
    "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
}

# Helpers
def ensure_data_dir():
    """
    Ensure the data directory exists. Database creation should be handled
    by the database manager (see `database.db_manager.DatabaseManager`).
    """
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def format_currency(value) -> str:
    """Format an amount with the configured currency symbol, e.g. ₹1,234.50."""
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        if amount.is_finite():
            amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
            if amount.is_zero():
                amount = abs(amount)  # no "-0.00"
        return f"{CURRENCY_SYMBOL}{amount:,.2f}"
    except (ArithmeticError, ValueError):
        return f"{CURRENCY_SYMBOL}{value}"
