"""Data models for the expense ledger domain."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict

from .exceptions import InvalidRecordError

__all__ = [
    "DATE_FORMAT",
    "TREND_FORMAT",
    "ExpenseRecord",
    "format_cents",
    "format_date",
    "parse_date",
    "trend_bucket",
]

DATE_FORMAT = "%m/%d/%Y"
TREND_FORMAT = "%Y-%m"


def format_date(value: date) -> str:
    """Render a date as MM/DD/YYYY, zero-padded even for years below 1000."""
    # strftime("%Y") does not pad small years on every platform.
    return f"{value.month:02d}/{value.day:02d}/{value.year:04d}"


def parse_date(text: str) -> date:
    """Parse a strict MM/DD/YYYY string; raises ValueError otherwise."""
    return datetime.strptime(text.strip(), DATE_FORMAT).date()


def trend_bucket(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def format_cents(cents: int) -> str:
    """Return cents as a currency string with exactly two fraction digits."""
    return f"{Decimal(cents).scaleb(-2):.2f}"


@dataclass(frozen=True)
class ExpenseRecord:
    category: str
    amount: int
    note: str
    date: date

    def __post_init__(self) -> None:
        if not isinstance(self.category, str) or not self.category.strip():
            raise InvalidRecordError("category cannot be empty")
        # bool is an int subclass; True is not a cent amount.
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise InvalidRecordError("amount must be an integer number of cents")
        if self.amount < 0:
            raise InvalidRecordError("amount cannot be negative")
        if not isinstance(self.note, str):
            raise InvalidRecordError("note must be a string")
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())
        elif not isinstance(self.date, date):
            raise InvalidRecordError("date must be a calendar date")

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the record to display-friendly natives."""
        return {
            "category": self.category,
            "amount": format_cents(self.amount),
            "note": self.note,
            "date": format_date(self.date),
        }
