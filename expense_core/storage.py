"""Flat-file persistence for the expense ledger.

One record per line, no header and no quoting::

    <category>,<amount in cents>,<note>,<MM/DD/YYYY>

The separator is never escaped, so a comma inside a category or note splits
the line into too many fields and that line is skipped on the next load.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .exceptions import InvalidRecordError, MalformedLineError, PersistenceError
from .models import DATE_FORMAT, ExpenseRecord, format_date

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "expenses.csv"
FIELD_SEPARATOR = ","
FIELD_COUNT = 4

AMOUNT_PATTERN = re.compile(r"[+-]?[0-9]+")


def encode_line(record: ExpenseRecord) -> str:
    for field in ("category", "note"):
        value = getattr(record, field)
        if FIELD_SEPARATOR in value or "\n" in value or "\r" in value:
            logger.warning(
                "%s %r contains a separator or line break and will not load back",
                field,
                value,
            )
    return FIELD_SEPARATOR.join(
        (record.category, str(record.amount), record.note, format_date(record.date))
    )


def decode_line(line: str, line_number: int = 0) -> ExpenseRecord:
    text = line.rstrip("\r\n")
    parts = text.split(FIELD_SEPARATOR)
    if len(parts) != FIELD_COUNT:
        raise MalformedLineError(
            f"expected {FIELD_COUNT} fields, found {len(parts)}", text, line_number
        )
    category, raw_amount, note, raw_date = parts
    if not AMOUNT_PATTERN.fullmatch(raw_amount):
        raise MalformedLineError(f"amount {raw_amount!r} is not an integer", text, line_number)
    try:
        expense_date = datetime.strptime(raw_date, DATE_FORMAT).date()
    except ValueError as exc:
        raise MalformedLineError(f"date {raw_date!r} is not MM/DD/YYYY", text, line_number) from exc
    try:
        return ExpenseRecord(category, int(raw_amount), note, expense_date)
    except InvalidRecordError as exc:
        raise MalformedLineError(str(exc), text, line_number) from exc


class FlatFileStorage:
    """Comma-separated snapshot file holding every ledger record."""

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        if path is None or str(path) == "":
            path = DEFAULT_FILE_NAME
        self._path = Path(path)

    def load(self) -> List[ExpenseRecord]:
        """Return every well-formed record; malformed lines are skipped."""
        path = self._path
        records: List[ExpenseRecord] = []
        skipped = 0
        try:
            with path.open("r", encoding="utf-8") as handle:
                for line_number, line in enumerate(handle, start=1):
                    if not line.strip():
                        logger.debug("Skipping blank line %d in %s", line_number, path)
                        continue
                    try:
                        records.append(decode_line(line, line_number))
                    except MalformedLineError as exc:
                        skipped += 1
                        logger.warning(
                            "Skipping invalid expense record on line %d of %s (%s): %s",
                            exc.line_number,
                            path,
                            exc,
                            exc.line,
                        )
        except (FileNotFoundError, NotADirectoryError):
            logger.info("No previous expense data found at %s; starting fresh", path)
            return []
        except UnicodeDecodeError as exc:
            raise PersistenceError(f"{path} is not valid UTF-8 text") from exc
        except OSError as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

        logger.debug("Loaded %d records from %s (%d skipped)", len(records), path, skipped)
        return records

    def save(self, records: Iterable[ExpenseRecord]) -> None:
        """Overwrite the file with a full snapshot of ``records``."""
        path = self._path
        if not path.name:
            raise PersistenceError(f"Unable to write to {path}: not a file path")
        temp_path = path.with_name(path.name + ".tmp")
        lines = [encode_line(record) + "\n" for record in records]
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with temp_path.open("w", encoding="utf-8", newline="\n") as handle:
                handle.writelines(lines)
                handle.flush()
            # Replace is atomic on POSIX; a crash mid-write keeps the old snapshot.
            temp_path.replace(path)
        except OSError as exc:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                logger.warning("Could not remove temporary file %s", temp_path)
            raise PersistenceError(f"Unable to write to {path}") from exc
        logger.debug("Saved %d records to %s", len(lines), path)

    @property
    def path(self) -> Path:
        return self._path
