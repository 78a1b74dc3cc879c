"""Bullet extraction for standup sections."""

import re

COMPLETE = "✅"
INCOMPLETE = "❌"

_BULLET_RE = re.compile(r"^[-*•]")
_BULLET_PREFIX_RE = re.compile(r"^[-*•]\s*")
_LEADING_STATUS_RE = re.compile(r"^[✅❌]\s*")


def _strip_bullet(line: str) -> str | None:
    """Return the bullet body, or None when the line is not a bullet."""
    stripped = line.strip()
    if not stripped or not _BULLET_RE.match(stripped):
        return None
    return _BULLET_PREFIX_RE.sub("", stripped, count=1)


def _strip_leading_status(text: str) -> str:
    return _LEADING_STATUS_RE.sub("", text.strip(), count=1).strip()


def parse_status_marker(text: str) -> tuple[str, bool]:
    """
    Split a bullet body into (clean_text, completed).

    ✅ is checked before ❌ and only the first occurrence of the matched
    marker is removed, so a body holding both keeps the other one.
    No marker means incomplete.
    """
    if COMPLETE in text:
        completed = True
        text = re.sub(rf"{COMPLETE}\s*", "", text, count=1)
    elif INCOMPLETE in text:
        completed = False
        text = re.sub(rf"{INCOMPLETE}\s*", "", text, count=1)
    else:
        completed = False
    return _strip_leading_status(text), completed


def extract_status_items(lines: list[str]) -> list[tuple[str, bool]]:
    """Extract (text, completed) pairs from Yesterday/Today lines."""
    items = []
    for line in lines:
        body = _strip_bullet(line)
        if body is None:
            continue
        text, completed = parse_status_marker(body)
        if text:
            items.append((text, completed))
    return items


def extract_simple_items(lines: list[str]) -> list[str]:
    """Extract plain text items from Blockers/Backlog lines."""
    items = []
    for line in lines:
        body = _strip_bullet(line)
        if body is None:
            continue
        text = _strip_leading_status(body)
        if text:
            items.append(text)
    return items
