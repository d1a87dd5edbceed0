"""Core ledger logic package for the expense tracker."""

from .models import ExpenseRecord, format_cents, format_date, parse_date
from .services import ExpenseLedger
from .storage import FlatFileStorage
from .exceptions import InvalidRecordError, MalformedLineError, PersistenceError, ValidationError

__all__ = [
    "ExpenseRecord",
    "ExpenseLedger",
    "FlatFileStorage",
    "format_cents",
    "format_date",
    "parse_date",
    "InvalidRecordError",
    "MalformedLineError",
    "PersistenceError",
    "ValidationError",
]
