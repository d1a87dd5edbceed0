import logging
from pathlib import Path

import pytest

from expense_tracker.cli import build_parser, main
from expense_tracker.config import DATA_FILE_ENV, LOG_LEVEL_ENV, load_settings


def run_cli(data_file, *argv):
    return main(["--data-file", str(data_file), *argv])


def test_add_and_query_commands(data_file, capsys):
    assert run_cli(data_file, "add", "food", "12.50", "01/15/2024", "--note", "lunch") == 0
    assert run_cli(data_file, "add", "food", "3", "02/01/2024", "--note", "coffee") == 0
    assert run_cli(data_file, "add", "rent", "1500", "01/01/2024") == 0
    capsys.readouterr()

    assert run_cli(data_file, "total") == 0
    assert "Total expense: $1540.50" in capsys.readouterr().out

    assert run_cli(data_file, "by-category") == 0
    out = capsys.readouterr().out
    assert "food" in out and "$15.50" in out
    assert "rent" in out and "$1500.00" in out

    assert run_cli(data_file, "category", "food") == 0
    assert "$15.50" in capsys.readouterr().out

    assert run_cli(data_file, "extremes") == 0
    out = capsys.readouterr().out
    assert "Most expensive category: rent" in out
    assert "Least expensive category: food" in out

    assert run_cli(data_file, "trend") == 0
    out = capsys.readouterr().out
    assert out.index("2024-01") < out.index("2024-02")
    assert "$1512.50" in out

    assert run_cli(data_file, "list") == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0].startswith("01/15/2024")


def test_add_rejects_comma_in_note(data_file, capsys):
    assert run_cli(data_file, "add", "food", "1", "01/01/2024", "--note", "a,b") == 1
    assert "Validation error" in capsys.readouterr().err
    assert not data_file.exists()


def test_add_reports_storage_error(tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    assert run_cli(blocker / "expenses.csv", "add", "food", "1", "01/01/2024") == 1
    assert "Storage error" in capsys.readouterr().err


def test_bad_date_is_a_usage_error(data_file):
    with pytest.raises(SystemExit) as excinfo:
        run_cli(data_file, "add", "food", "1", "2024-01-01")
    assert excinfo.value.code == 2


def test_empty_views(data_file, capsys):
    assert run_cli(data_file, "list") == 0
    assert run_cli(data_file, "by-category") == 0
    assert run_cli(data_file, "trend") == 0
    out = capsys.readouterr().out
    assert "No expenses recorded yet." in out
    assert "No expenses to categorize." in out
    assert "No expenses to show a trend." in out


def test_no_command_means_interactive():
    args = build_parser().parse_args([])
    assert args.command is None


def test_settings_precedence():
    env = {DATA_FILE_ENV: "from-env.csv", LOG_LEVEL_ENV: "debug"}
    assert load_settings(environ=env).data_file == Path("from-env.csv")
    assert load_settings(environ=env).log_level == logging.DEBUG
    assert load_settings("flag.csv", "ERROR", environ=env).data_file == Path("flag.csv")
    assert load_settings("flag.csv", "ERROR", environ=env).log_level == logging.ERROR

    defaults = load_settings(environ={})
    assert defaults.data_file == Path("expenses.csv")
    assert defaults.log_level == logging.WARNING


def test_unknown_log_level_falls_back_to_warning():
    assert load_settings(log_level="chatty", environ={}).log_level == logging.WARNING


def test_settings_read_process_environment(monkeypatch, tmp_path):
    monkeypatch.setenv(DATA_FILE_ENV, str(tmp_path / "env.csv"))
    assert load_settings().data_file == tmp_path / "env.csv"
