"""Framework-agnostic ledger service for the expense tracker."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from .exceptions import InvalidRecordError, PersistenceError
from .models import ExpenseRecord, trend_bucket
from .storage import FlatFileStorage

logger = logging.getLogger(__name__)


class ExpenseLedger:
    """Ordered expense records plus the aggregate views over them.

    With a storage configured the ledger hydrates itself on construction and
    rewrites the whole file after every new record. Without one it lives only
    in memory.
    """

    def __init__(self, storage: Optional[FlatFileStorage] = None) -> None:
        self._storage = storage
        self._records: List[ExpenseRecord] = []
        self.load_error: Optional[PersistenceError] = None
        if storage is not None:
            self.reload()

    # Public API -----------------------------------------------------------
    def enter_expense(self, record: ExpenseRecord) -> ExpenseRecord:
        """Append ``record`` and persist the full snapshot.

        The append is kept even when the save fails, so memory and disk can
        differ until the next successful save.
        """
        if not isinstance(record, ExpenseRecord):
            raise InvalidRecordError("only ExpenseRecord instances can be entered")
        self._records.append(record)
        self._persist()
        return record

    def total_expense(self) -> int:
        return sum(record.amount for record in self._records)

    def total_by_category(self) -> Dict[str, int]:
        totals: Dict[str, int] = {}
        for record in self._records:
            totals[record.category] = totals.get(record.category, 0) + record.amount
        return totals

    def total_for_category(self, category: str) -> int:
        return sum(record.amount for record in self._records if record.category == category)

    def most_expensive_category(self) -> Optional[str]:
        """Category with the highest total; ties go to the earliest-entered one."""
        totals = self.total_by_category()
        if not totals:
            return None
        return max(totals, key=totals.__getitem__)

    def least_expensive_category(self) -> Optional[str]:
        """Category with the lowest total; ties go to the earliest-entered one."""
        totals = self.total_by_category()
        if not totals:
            return None
        return min(totals, key=totals.__getitem__)

    def expense_trend(self) -> Dict[str, int]:
        """Monthly totals keyed by ``YYYY-MM``, in chronological order."""
        trend: Dict[str, int] = {}
        # sorted() is stable, so same-day records keep their entry order.
        for record in sorted(self._records, key=lambda rec: rec.date):
            bucket = trend_bucket(record.date)
            trend[bucket] = trend.get(bucket, 0) + record.amount
        return trend

    def list_all(self) -> Tuple[ExpenseRecord, ...]:
        return tuple(self._records)

    def reload(self) -> None:
        """Replace in-memory records with the stored snapshot."""
        self.load_error = None
        if self._storage is None:
            return
        try:
            self._records = self._storage.load()
        except PersistenceError as exc:
            logger.error("Could not load expenses, starting empty: %s", exc)
            self.load_error = exc
            self._records = []

    @property
    def storage(self) -> Optional[FlatFileStorage]:
        return self._storage

    def __len__(self) -> int:
        return len(self._records)

    # Internal helpers -----------------------------------------------------
    def _persist(self) -> None:
        if self._storage is None:
            return
        try:
            self._storage.save(self._records)
        except PersistenceError as exc:
            logger.error("Error saving expenses to %s: %s", self._storage.path, exc)
            raise
