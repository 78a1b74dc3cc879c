"""Standup markdown generator."""

from datetime import date


def format_display_date(d: date) -> str:
    """Render a date like 'January 9, 2024'."""
    return f"{d:%B} {d.day}, {d.year}"


def generate_standup(todos, display_date: str) -> str:
    """
    Render the current todo list as a standup document.

    Sections, each followed by a blank line:
    - Yesterday: completed (✅) then incomplete (❌) tasks
    - Today: incomplete tasks only
    - Blockers / Backlog: fixed placeholders

    `todos` is any sequence of objects with `text` and `completed`.
    """
    completed = [todo for todo in todos if todo.completed]
    not_completed = [todo for todo in todos if not todo.completed]

    lines = [f"_{display_date}_", "", "Yesterday", ""]

    for todo in completed:
        lines.append(f"- {todo.text} ✅")
    for todo in not_completed:
        lines.append(f"- {todo.text} ❌")
    if not completed and not not_completed:
        lines.append("- No tasks")

    lines.extend(["", "Today", ""])

    if not_completed:
        for todo in not_completed:
            lines.append(f"- {todo.text}")
    else:
        lines.append("- No tasks planned")

    lines.extend([
        "",
        "Blockers",
        "",
        "- None",
        "",
        "Backlog",
        "",
        "- ",
        "",
    ])

    return "\n".join(lines)
