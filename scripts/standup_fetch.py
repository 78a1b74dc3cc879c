#!/usr/bin/env python3
"""
Locate and read standup documents named YYYY-MM-DD.md.

Documents come from a loader: a callable taking a filename and returning
the document text, or None when it does not exist.
"""

import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from standup_common import log_error, recent_dates, today_iso, yesterday_iso

logger = logging.getLogger(__name__)

Loader = Callable[[str], Optional[str]]

HTML_MARKERS = ("<!doctype", "<html")
FETCH_TIMEOUT = 10


@dataclass(frozen=True)
class StandupFile:
    content: str
    filename: str


def standup_filename(date_str: str) -> str:
    return f"{date_str}.md"


def looks_like_html(body: str) -> bool:
    """True for catch-all HTML pages served in place of a 404."""
    return body.lstrip().lower().startswith(HTML_MARKERS)


def directory_loader(notes_dir: Path) -> Loader:
    """Read documents from a local directory."""
    notes_dir = Path(notes_dir).expanduser()

    def load(filename: str) -> str | None:
        path = notes_dir / filename
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    return load


def http_loader(base_url: str, timeout: float = FETCH_TIMEOUT) -> Loader:
    """Fetch documents from `<base_url>/<filename>`; 404 means missing."""
    base = base_url.rstrip("/")

    def load(filename: str) -> str | None:
        url = f"{base}/{filename}"
        try:
            with urllib.request.urlopen(url, timeout=timeout) as response:
                charset = response.headers.get_content_charset() or "utf-8"
                return response.read().decode(charset)
        except urllib.error.HTTPError as exc:
            if exc.code == 404:
                return None
            raise

    return load


def fetch_standup(date_str: str, loader: Loader) -> StandupFile | None:
    """Fetch one date's document; errors and HTML fallbacks are 'not found'."""
    filename = standup_filename(date_str)
    try:
        content = loader(filename)
    except Exception as exc:
        log_error(f"fetch_standup: Failed to fetch standup file {filename}", exc)
        return None

    if content is None:
        return None
    if looks_like_html(content):
        logger.debug(f"Ignoring HTML fallback page for {filename}")
        return None
    return StandupFile(content=content, filename=filename)


def fetch_latest_standup(
    today: str,
    yesterday: str,
    loader: Loader,
) -> StandupFile | None:
    """Try today's document, then yesterday's; None when neither exists."""
    for date_str in (today, yesterday):
        found = fetch_standup(date_str, loader)
        if found is not None:
            return found
    return None


def fetch_latest_for(day: date, loader: Loader) -> StandupFile | None:
    return fetch_latest_standup(today_iso(day), yesterday_iso(day), loader)


def list_available_dates(loader: Loader, today: date, days: int = 30) -> list[str]:
    """ISO dates in the last `days` days that have a document, newest first."""
    return [
        date_str
        for date_str in recent_dates(today, days)
        if fetch_standup(date_str, loader) is not None
    ]
