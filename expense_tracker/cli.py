"""Command line entry point for the expense tracker."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from expense_core.exceptions import PersistenceError, ValidationError
from expense_core.models import ExpenseRecord
from expense_core.services import ExpenseLedger
from expense_core.storage import FlatFileStorage
from expense_core.validators import parse_amount, parse_user_date, validate_text

from expense_tracker.config import DATA_FILE_ENV, LOG_LEVEL_ENV, configure_logging, load_settings
from expense_tracker.console import ConsoleApp, money


def _parse_date(value: str) -> str:
    try:
        parse_user_date(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Expected format MM/DD/YYYY."
        ) from exc
    return value


def _parse_amount(value: str) -> str:
    try:
        parse_amount(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return value


def _load_ledger(data_file: Path) -> ExpenseLedger:
    return ExpenseLedger(FlatFileStorage(data_file))


def handle_command(args: argparse.Namespace, ledger: ExpenseLedger) -> None:
    if args.command == "add":
        record = ExpenseRecord(
            category=validate_text(args.category, "category", required=True),
            amount=parse_amount(args.amount),
            note=validate_text(args.note, "note"),
            date=parse_user_date(args.date),
        )
        ledger.enter_expense(record)
        print("Expense recorded.")
    elif args.command == "list":
        records = ledger.list_all()
        if not records:
            print("No expenses recorded yet.")
            return
        for record in records:
            data = record.to_dict()
            print(f"{data['date']}  {data['category']:<15} ${data['amount']:>10}  {data['note']}")
    elif args.command == "total":
        print(f"Total expense: {money(ledger.total_expense())}")
    elif args.command == "by-category":
        totals = ledger.total_by_category()
        if not totals:
            print("No expenses to categorize.")
            return
        for category, total in totals.items():
            print(f"Category: {category:<15} Total expense: {money(total)}")
    elif args.command == "category":
        print(f"Category: {args.name} Total expense: {money(ledger.total_for_category(args.name))}")
    elif args.command == "extremes":
        print(f"Most expensive category: {ledger.most_expensive_category() or 'N/A'}")
        print(f"Least expensive category: {ledger.least_expensive_category() or 'N/A'}")
    elif args.command == "trend":
        trend = ledger.expense_trend()
        if not trend:
            print("No expenses to show a trend.")
            return
        for month, total in trend.items():
            print(f"Month: {month} Total expense: {money(total)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Expense Tracker CLI. Starts the interactive menu when no command is given."
    )
    parser.add_argument(
        "--data-file",
        help=f"Expense file to read and write (env {DATA_FILE_ENV}, default: ./expenses.csv)",
    )
    parser.add_argument(
        "--log-level",
        help=f"Logging level such as INFO or DEBUG (env {LOG_LEVEL_ENV}, default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command")

    add_parser = subparsers.add_parser("add", help="Record a new expense")
    add_parser.add_argument("category")
    add_parser.add_argument("amount", type=_parse_amount)
    add_parser.add_argument("date", type=_parse_date, help="MM/DD/YYYY")
    add_parser.add_argument("--note", default="")

    subparsers.add_parser("list", help="List all expenses")
    subparsers.add_parser("total", help="Show the total expense")
    subparsers.add_parser("by-category", help="Show totals per category")
    category_parser = subparsers.add_parser("category", help="Show the total for one category")
    category_parser.add_argument("name")
    subparsers.add_parser("extremes", help="Show the most and least expensive categories")
    subparsers.add_parser("trend", help="Show monthly totals")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings(args.data_file, args.log_level)
    configure_logging(settings.log_level)
    ledger = _load_ledger(settings.data_file)

    if args.command is None:
        ConsoleApp(ledger).run()
        return 0

    try:
        handle_command(args, ledger)
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
