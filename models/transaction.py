'''
    File Name: transaction.py
    Version: 1.0.0
    Date: 19/10/2026
    Author: Pablo Bartolomé Molina
    Description: Ledger entry data model for Account Master.
'''
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
import time
import uuid


def to_amount(value) -> Decimal:
    """Coerce a stored or typed amount to Decimal, going through str() so that
    floats keep their shortest repr (12.5 -> Decimal('12.5')).

    Raises ValueError when the value is not a number.
    """
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid amount: {value!r}")


class TransactionType(str, Enum):
    """Direction of a ledger entry. Amounts are always stored unsigned."""
    RECEIPT = "RECEIPT"
    EXPENDITURE = "EXPENDITURE"

    @property
    def label(self) -> str:
        return "Receipt" if self is TransactionType.RECEIPT else "Expenditure"

    @property
    def party_label(self) -> str:
        return "Received From" if self is TransactionType.RECEIPT else "Paid To"


@dataclass
class Transaction:
    """
    Represents a single ledger entry.

    Attributes:
        id: Opaque unique identifier, generated once and kept across edits
        date: Effective date (YYYY-MM-DD), used for ledger placement
        type: Receipt or Expenditure, fixed at creation
        party: Counterparty ("received from" / "paid to")
        particulars: Optional free-text description
        amount: Unsigned Decimal magnitude; the direction is carried by `type`
        timestamp: Creation time in epoch milliseconds, breaks ties on equal dates
    """
    id: str
    date: str  # ISO format: YYYY-MM-DD
    type: TransactionType
    party: str
    particulars: str
    amount: Decimal
    timestamp: int

    def __post_init__(self):
        self.amount = to_amount(self.amount)

    @classmethod
    def create(
        cls,
        date: str,
        type: TransactionType,
        party: str,
        amount,
        particulars: str = "",
    ) -> "Transaction":
        """Build a new entry with a fresh id and timestamp, validating user input."""
        if not party or not party.strip():
            raise ValueError("Party cannot be empty")
        amount = to_amount(amount)
        if not amount.is_finite() or amount <= 0:
            raise ValueError("Amount must be a positive number")
        try:
            datetime.fromisoformat(date)
        except (ValueError, TypeError):
            raise ValueError(f"Invalid date format: {date}. Expected YYYY-MM-DD")

        return cls(
            id=str(uuid.uuid4()),
            date=date,
            type=TransactionType(type),
            party=party.strip(),
            particulars=(particulars or "").strip(),
            amount=amount,
            timestamp=int(time.time() * 1000),
        )

    @property
    def is_receipt(self) -> bool:
        return self.type is TransactionType.RECEIPT

    def to_dict(self) -> dict:
        """Convert transaction to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "date": self.date,
            "type": self.type.value,
            "party": self.party,
            "particulars": self.particulars,
            "amount": str(self.amount),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        """Create a Transaction from a stored dictionary.

        Older records carry the description under `purpose`; it is read as
        `particulars` when the latter is missing. Amounts may be stored as JSON
        numbers (older records) or strings.
        """
        particulars = data.get("particulars")
        if particulars is None:
            particulars = data.get("purpose", "")
        return cls(
            id=data["id"],
            date=str(data.get("date", "")),
            type=TransactionType(data.get("type", TransactionType.RECEIPT.value)),
            party=str(data.get("party", "")),
            particulars=str(particulars or ""),
            amount=to_amount(data.get("amount", 0)),
            timestamp=int(data.get("timestamp", 0)),
        )

    def __repr__(self) -> str:
        return f"Transaction(id={self.id}, date={self.date}, type={self.type.value}, party='{self.party}', amount={self.amount})"
