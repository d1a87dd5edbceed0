"""Runtime settings and logging setup for the expense tracker front-ends."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from rich.console import Console
from rich.logging import RichHandler

from expense_core.storage import DEFAULT_FILE_NAME

DATA_FILE_ENV = "EXPENSE_TRACKER_DATA_FILE"
LOG_LEVEL_ENV = "EXPENSE_TRACKER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    data_file: Path
    log_level: int


def _level_from_name(name: Optional[str]) -> int:
    level = logging.getLevelName((name or DEFAULT_LOG_LEVEL).strip().upper())
    # getLevelName returns "Level X" for names it does not know.
    if not isinstance(level, int):
        return logging.WARNING
    return level


def load_settings(
    data_file: Optional[str] = None,
    log_level: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Resolve settings: explicit values first, then environment, then defaults."""
    env = os.environ if environ is None else environ
    resolved_file = data_file or env.get(DATA_FILE_ENV) or DEFAULT_FILE_NAME
    resolved_level = log_level or env.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL
    return Settings(data_file=Path(resolved_file), log_level=_level_from_name(resolved_level))


def configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
