"""Interactive menu front-end for the expense ledger."""

from __future__ import annotations

from typing import Callable, Dict, Optional, TextIO

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from expense_core.exceptions import PersistenceError, ValidationError
from expense_core.models import ExpenseRecord, format_cents, format_date
from expense_core.services import ExpenseLedger
from expense_core.validators import parse_amount, parse_user_date, validate_text

MENU_ITEMS = (
    ("1", "Add a new expense"),
    ("2", "View all expenses"),
    ("3", "View total expense"),
    ("4", "View total expense by category"),
    ("5", "View most and least expensive categories"),
    ("6", "View expense trend"),
    ("7", "Exit"),
)
EXIT_CHOICE = "7"


class _LineSource:
    """Wraps a text stream so running out of input ends the session."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def readline(self) -> str:
        line = self._stream.readline()
        if not line:
            raise EOFError
        return line


def money(cents: int) -> str:
    return f"${format_cents(cents)}"


class ConsoleApp:
    """Numbered-menu loop that drives an :class:`ExpenseLedger`."""

    def __init__(
        self,
        ledger: ExpenseLedger,
        console: Optional[Console] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.ledger = ledger
        self.console = console or Console()
        # Prompts read from ``stream`` when given, otherwise from stdin.
        self.stream = _LineSource(stream) if stream is not None else None
        self._actions: Dict[str, Callable[[], None]] = {
            "1": self.add_expense,
            "2": self.show_expenses,
            "3": self.show_total,
            "4": self.show_by_category,
            "5": self.show_extremes,
            "6": self.show_trend,
        }

    def run(self) -> None:
        if self.ledger.load_error is not None:
            self.console.print(
                f"[yellow]Could not read saved expenses ({escape(str(self.ledger.load_error))}); "
                "starting with an empty ledger.[/yellow]"
            )
        try:
            while True:
                self.console.print(Panel(self._build_menu(), title="Expense Tracker Menu"))
                choice = self._ask(
                    "Enter your choice",
                    choices=[num for num, _ in MENU_ITEMS],
                    show_choices=False,
                )
                if choice == EXIT_CHOICE:
                    break
                self._actions[choice]()
                self.console.print()
        except (EOFError, KeyboardInterrupt):
            self.console.print()
        self.console.print("Exiting application.")

    # Menu actions ---------------------------------------------------------
    def add_expense(self) -> None:
        category = self._ask_valid(
            "Enter expense category", lambda raw: validate_text(raw, "category", required=True)
        )
        amount = self._ask_valid("Enter expense amount", parse_amount)
        note = self._ask_valid(
            "Enter expense note", lambda raw: validate_text(raw, "note"), default=""
        )
        expense_date = self._ask_valid("Enter date (MM/DD/YYYY)", parse_user_date)

        record = ExpenseRecord(category, amount, note, expense_date)
        try:
            self.ledger.enter_expense(record)
        except PersistenceError as exc:
            self.console.print(
                f"[red]Expense kept in memory but could not be saved: {escape(str(exc))}[/red]"
            )
            return
        self.console.print("[green]Expense recorded.[/green]")

    def show_expenses(self) -> None:
        records = self.ledger.list_all()
        if not records:
            self.console.print("No expenses recorded yet.")
            return
        table = Table(title="All Expenses", box=box.SIMPLE)
        table.add_column("Date")
        table.add_column("Category")
        table.add_column("Amount", justify="right")
        table.add_column("Note")
        for record in records:
            table.add_row(
                format_date(record.date),
                escape(record.category),
                money(record.amount),
                escape(record.note),
            )
        self.console.print(table)

    def show_total(self) -> None:
        self.console.print(f"Total expense: {money(self.ledger.total_expense())}")

    def show_by_category(self) -> None:
        totals = self.ledger.total_by_category()
        if not totals:
            self.console.print("No expenses to categorize.")
            return
        table = Table(title="Expense by Category", box=box.SIMPLE)
        table.add_column("Category")
        table.add_column("Total expense", justify="right")
        for category, total in totals.items():
            table.add_row(escape(category), money(total))
        self.console.print(table)

    def show_extremes(self) -> None:
        most = self.ledger.most_expensive_category() or "N/A"
        least = self.ledger.least_expensive_category() or "N/A"
        self.console.print(f"Most expensive category: {escape(most)}")
        self.console.print(f"Least expensive category: {escape(least)}")

    def show_trend(self) -> None:
        trend = self.ledger.expense_trend()
        if not trend:
            self.console.print("No expenses to show a trend.")
            return
        table = Table(title="Monthly Expense Trend", box=box.SIMPLE)
        table.add_column("Month")
        table.add_column("Total expense", justify="right")
        for month, total in trend.items():
            table.add_row(month, money(total))
        self.console.print(table)

    # Prompt helpers -------------------------------------------------------
    def _build_menu(self) -> Table:
        menu = Table(box=None, show_header=False, padding=(0, 1))
        menu.add_column(justify="right")
        menu.add_column()
        for num, label in MENU_ITEMS:
            menu.add_row(f"{num}.", label)
        return menu

    def _ask(self, prompt: str, **kwargs) -> str:
        return Prompt.ask(prompt, console=self.console, stream=self.stream, **kwargs)

    def _ask_valid(
        self, prompt: str, parse: Callable[[str], object], default: Optional[str] = None
    ):
        """Re-prompt until ``parse`` accepts the answer."""
        while True:
            if default is None:
                raw = self._ask(prompt)
            else:
                raw = self._ask(prompt, default=default, show_default=False)
            try:
                return parse(raw)
            except ValidationError as exc:
                self.console.print(f"[red]Invalid input: {escape(str(exc))}[/red]")
