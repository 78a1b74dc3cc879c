#!/usr/bin/env python3
"""
Standup Todos - keep a daily todo list and round-trip it through
YYYY-MM-DD.md standup documents.

Usage:
    python3 scripts/standup_todos.py list [--json]
    python3 scripts/standup_todos.py add "Review https://github.com/org/repo/pull/12"
    python3 scripts/standup_todos.py toggle <id>
    python3 scripts/standup_todos.py import --sections today yesterday
    python3 scripts/standup_todos.py save
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))
import standup_common
from standup_common import resolve_standup_date
from standup_fetch import (
    directory_loader,
    fetch_latest_for,
    fetch_standup,
    http_loader,
    list_available_dates,
)
from todo_store import TodoStorage, TodoStore
from standup_doc.parser import default_selection, get_standup_tasks, parse_standup, selected_items
from standup_doc.sections import SECTIONS, STATUS_SECTIONS, TODAY

logger = logging.getLogger(__name__)


def _loader(args):
    base_url = args.base_url or standup_common.BASE_URL
    if base_url:
        return http_loader(base_url)
    return directory_loader(Path(args.notes_dir or standup_common.NOTES_DIR))


def _store(args) -> TodoStore:
    storage = TodoStorage(Path(args.state_file or standup_common.STATE_FILE))
    store = TodoStore(
        storage,
        loader=_loader(args),
        export_dir=Path(args.export_dir or standup_common.EXPORT_DIR),
    )
    store.load(resolve_standup_date(getattr(args, "date", None)))
    return store


def _resolve_id(store: TodoStore, prefix: str) -> str | None:
    """Match a full id or a unique id prefix."""
    matches = [todo.id for todo in store.todos if todo.id.startswith(prefix)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        print(f"No todo matching id '{prefix}'", file=sys.stderr)
    else:
        print(f"Ambiguous id '{prefix}' ({len(matches)} matches)", file=sys.stderr)
    return None


def _print_todos(todos) -> None:
    if not todos:
        print("_No todos_")
        return
    for todo in todos:
        mark = "x" if todo.completed else " "
        print(f"- [{mark}] {todo.text}  ({todo.id[:8]})")


def cmd_list(args) -> int:
    store = _store(args)
    if args.json:
        print(json.dumps([todo.to_dict() for todo in store.todos], indent=2, ensure_ascii=False))
    else:
        _print_todos(store.todos)
    return 0


def cmd_add(args) -> int:
    store = _store(args)
    todo = store.add(args.text)
    if todo is None:
        print("Error: todo text must not be empty", file=sys.stderr)
        return 1
    print(f"Added: {todo.text}  ({todo.id[:8]})")
    return 0


def cmd_toggle(args) -> int:
    store = _store(args)
    todo_id = _resolve_id(store, args.id)
    if todo_id is None:
        return 1
    todo = store.toggle(todo_id)
    state = "done" if todo.completed else "open"
    print(f"Marked {state}: {todo.text}")
    return 0


def cmd_edit(args) -> int:
    store = _store(args)
    todo_id = _resolve_id(store, args.id)
    if todo_id is None:
        return 1
    todo = store.update(todo_id, args.text)
    if todo is None:
        print("Error: todo text must not be empty", file=sys.stderr)
        return 1
    print(f"Updated: {todo.text}")
    return 0


def cmd_delete(args) -> int:
    store = _store(args)
    todo_id = _resolve_id(store, args.id)
    if todo_id is None:
        return 1
    store.delete(todo_id)
    print("Deleted.")
    return 0


def cmd_move(args) -> int:
    store = _store(args)
    active_id = _resolve_id(store, args.id)
    over_id = _resolve_id(store, args.over_id)
    if active_id is None or over_id is None:
        return 1
    store.reorder(active_id, over_id)
    _print_todos(store.todos)
    return 0


def cmd_import(args) -> int:
    store = _store(args)
    found = fetch_latest_for(resolve_standup_date(args.date), store.loader)
    if found is None:
        print("No standup file found for today or yesterday", file=sys.stderr)
        return 1

    parsed = parse_standup(found.content)
    if args.sections:
        added = store.import_standup(parsed, args.sections)
    else:
        tasks = get_standup_tasks(parsed)
        added = store.import_tasks(selected_items(tasks, default_selection(tasks)))

    print(f"Imported {len(added)} task(s) from {found.filename}")
    for todo in added:
        print(f"  • {todo.text}")
    return 0


def cmd_generate(args) -> int:
    store = _store(args)
    print(store.generate_markdown(resolve_standup_date(args.date)), end="")
    return 0


def cmd_save(args) -> int:
    store = _store(args)
    day = resolve_standup_date(args.date)
    path = store.save_and_archive(store.generate_markdown(day), day)
    if path is None:
        return 1
    print(f"Saved: {path}")
    return 0


def cmd_reload(args) -> int:
    store = _store(args)
    store.load_from_latest_document(resolve_standup_date(args.date))
    _print_todos(store.todos)
    return 0


def cmd_parse(args) -> int:
    try:
        content = Path(args.file).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot read '{args.file}': {exc}", file=sys.stderr)
        return 1

    parsed = parse_standup(content)
    if args.json:
        print(json.dumps(parsed.to_dict(), indent=2, ensure_ascii=False))
        return 0

    for section in SECTIONS:
        print(f"{section.capitalize()}:")
        for text, completed in parsed.section_items(section):
            if section in STATUS_SECTIONS:
                mark = " ✅" if completed else " ❌"
            else:
                mark = ""
            print(f"  • {text}{mark}")
    return 0


def cmd_dates(args) -> int:
    dates = list_available_dates(_loader(args), resolve_standup_date(args.date), args.days)
    if not dates:
        print("No standup files found", file=sys.stderr)
        return 1
    for date_str in dates:
        print(date_str)
    return 0


def cmd_show(args) -> int:
    try:
        day = datetime.strptime(args.day, standup_common.DATE_FORMAT)
    except ValueError:
        print(f"Error: invalid date '{args.day}' (expected YYYY-MM-DD)", file=sys.stderr)
        return 1
    date_str = day.strftime(standup_common.DATE_FORMAT)
    found = fetch_standup(date_str, _loader(args))
    if found is None:
        print(f"No standup file for {date_str}", file=sys.stderr)
        return 1
    print(found.content, end="")
    return 0


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    parser = argparse.ArgumentParser(description="Standup todo list")
    parser.add_argument("--notes-dir", help="Directory of YYYY-MM-DD.md standup files")
    parser.add_argument("--base-url", help="Fetch standup files over HTTP from this base URL")
    parser.add_argument("--state-file", help="JSON file holding the todo list")
    parser.add_argument("--export-dir", help="Directory saved standups are written to")
    parser.add_argument("--date", help="Treat this date (YYYY-MM-DD) as today")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List todos")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")
    list_parser.set_defaults(func=cmd_list)

    add_parser = subparsers.add_parser("add", help="Add a todo")
    add_parser.add_argument("text", help="Todo text")
    add_parser.set_defaults(func=cmd_add)

    toggle_parser = subparsers.add_parser("toggle", help="Toggle a todo done/open")
    toggle_parser.add_argument("id", help="Todo id (or unique prefix)")
    toggle_parser.set_defaults(func=cmd_toggle)

    edit_parser = subparsers.add_parser("edit", help="Change a todo's text")
    edit_parser.add_argument("id", help="Todo id (or unique prefix)")
    edit_parser.add_argument("text", help="New text")
    edit_parser.set_defaults(func=cmd_edit)

    delete_parser = subparsers.add_parser("delete", help="Delete a todo")
    delete_parser.add_argument("id", help="Todo id (or unique prefix)")
    delete_parser.set_defaults(func=cmd_delete)

    move_parser = subparsers.add_parser("move", help="Move a todo to another todo's position")
    move_parser.add_argument("id", help="Todo to move")
    move_parser.add_argument("over_id", help="Todo whose position it takes")
    move_parser.set_defaults(func=cmd_move)

    import_parser = subparsers.add_parser("import", help="Import tasks from the latest standup")
    import_parser.add_argument(
        "--sections",
        nargs="+",
        choices=list(SECTIONS),
        help=f"Sections to import (default: {TODAY} tasks)",
    )
    import_parser.set_defaults(func=cmd_import)

    subparsers.add_parser("generate", help="Print today's standup").set_defaults(func=cmd_generate)
    subparsers.add_parser(
        "save", help="Write today's standup and clear completed todos"
    ).set_defaults(func=cmd_save)
    subparsers.add_parser(
        "reload", help="Replace todos with the latest standup's tasks"
    ).set_defaults(func=cmd_reload)

    parse_parser = subparsers.add_parser("parse", help="Parse a standup file")
    parse_parser.add_argument("file", help="Path to a standup markdown file")
    parse_parser.add_argument("--json", action="store_true", help="Output as JSON")
    parse_parser.set_defaults(func=cmd_parse)

    dates_parser = subparsers.add_parser("dates", help="List recent dates with a standup file")
    dates_parser.add_argument("--days", type=int, default=30, help="How many days back to scan")
    dates_parser.set_defaults(func=cmd_dates)

    show_parser = subparsers.add_parser("show", help="Print one day's standup file")
    show_parser.add_argument("day", help="Date (YYYY-MM-DD)")
    show_parser.set_defaults(func=cmd_show)

    args = parser.parse_args()
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
