#!/usr/bin/env python3
"""
Shared helpers for standup todo scripts.

Configuration via environment variables:
- STANDUP_NOTES_DIR: Directory holding YYYY-MM-DD.md standup documents
- STANDUP_BASE_URL: Fetch documents over HTTP from this base instead
- STANDUP_STATE_FILE: JSON file holding the saved todo list
- STANDUP_EXPORT_DIR: Where saved standup documents are written
"""

import logging
import os
import sys
import tempfile
from datetime import date, datetime, timedelta
from pathlib import Path

_LIB_DIR = Path(__file__).parent.resolve() / "lib"
if str(_LIB_DIR) not in sys.path:
    sys.path.insert(0, str(_LIB_DIR))

from standup_doc.generator import format_display_date

logger = logging.getLogger(__name__)

NOTES_DIR = Path(os.getenv("STANDUP_NOTES_DIR", Path.home() / "standups")).expanduser()
BASE_URL = os.getenv("STANDUP_BASE_URL") or None
STATE_FILE = Path(os.getenv("STANDUP_STATE_FILE", Path.home() / ".standup-todos.json")).expanduser()
EXPORT_DIR = Path(os.getenv("STANDUP_EXPORT_DIR", Path.home() / "Downloads")).expanduser()

DATE_FORMAT = "%Y-%m-%d"


def resolve_standup_date(date_str: str | None) -> date:
    """Parse standup date from YYYY-MM-DD, defaulting to today."""
    today = datetime.now().date()
    if not date_str:
        return today

    try:
        return datetime.strptime(date_str, DATE_FORMAT).date()
    except ValueError:
        return today


def today_iso(d: date | None = None) -> str:
    return (d or datetime.now().date()).strftime(DATE_FORMAT)


def yesterday_iso(d: date | None = None) -> str:
    return ((d or datetime.now().date()) - timedelta(days=1)).strftime(DATE_FORMAT)


def display_date(d: date | None = None) -> str:
    return format_display_date(d or datetime.now().date())


def recent_dates(today: date, days: int = 30) -> list[str]:
    """ISO dates from today back `days - 1` days, newest first."""
    return [(today - timedelta(days=offset)).strftime(DATE_FORMAT) for offset in range(days)]


def log_error(context: str, error: BaseException | str) -> None:
    """Log a caught failure with a description of where it happened."""
    logger.warning(f"[{context}] {error}")
    if isinstance(error, BaseException) and error.__traceback__ is not None:
        logger.debug("Stack trace:", exc_info=error)


def atomic_write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
