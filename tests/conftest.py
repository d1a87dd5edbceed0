from datetime import date

import pytest

from expense_core.models import ExpenseRecord
from expense_core.services import ExpenseLedger
from expense_core.storage import FlatFileStorage


@pytest.fixture
def sample_records():
    return [
        ExpenseRecord("food", 1250, "lunch", date(2024, 1, 15)),
        ExpenseRecord("food", 300, "coffee", date(2024, 2, 1)),
        ExpenseRecord("rent", 150000, "", date(2024, 1, 1)),
    ]


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "expenses.csv"


@pytest.fixture
def file_ledger(data_file):
    return ExpenseLedger(FlatFileStorage(data_file))
