"""Standup section classification."""

import re

YESTERDAY = "yesterday"
TODAY = "today"
BLOCKERS = "blockers"
BACKLOG = "backlog"

SECTIONS = (YESTERDAY, TODAY, BLOCKERS, BACKLOG)

# Sections whose bullets carry a ✅/❌ completion marker
STATUS_SECTIONS = (YESTERDAY, TODAY)

BULLET_MARKERS = ("-", "*", "•")

# Ordered (predicate, section) pairs; first match wins.
# Predicates receive the lower-cased heading with leading '#' markers removed.
HEADING_RULES = [
    (lambda h: "yesterday" in h or "completed" in h, YESTERDAY),
    (lambda h: h == "today" or "working on" in h, TODAY),
    (lambda h: "blocker" in h, BLOCKERS),
    (lambda h: "backlog" in h, BACKLOG),
]


def is_heading_candidate(line: str) -> bool:
    """A non-empty line that is neither a bullet nor the `_date_` stamp."""
    stripped = line.strip()
    if not stripped:
        return False
    return not stripped.startswith(BULLET_MARKERS + ("_",))


def classify_heading(line: str) -> str | None:
    """Return the section a heading line opens, or None."""
    heading = re.sub(r"^#+\s*", "", line.strip().lower())
    for predicate, section in HEADING_RULES:
        if predicate(heading):
            return section
    return None


def classify_sections(lines: list[str]) -> dict[str, list[str]]:
    """
    Assign document lines to sections.

    Rules:
    - Lines before the first recognised heading are discarded
    - Heading lines are consumed, never stored
    - Blank lines are never stored
    - Everything else is kept verbatim under the current section
    """
    sections = {section: [] for section in SECTIONS}
    current = None

    for line in lines:
        if is_heading_candidate(line):
            section = classify_heading(line)
            if section is not None:
                current = section
                continue

        if current is not None and line.strip():
            sections[current].append(line)

    return sections
