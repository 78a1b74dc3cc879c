#!/usr/bin/env python3
"""
Todo list store backing the standup workflow.

Owns the live todo list, keeps incomplete tasks ahead of completed ones,
persists after every mutation and notifies subscribers.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Iterable, Optional

from standup_common import atomic_write, display_date, log_error, today_iso
from standup_fetch import Loader, fetch_latest_for, standup_filename
from standup_doc.deduper import drop_existing, merge_tasks, partition_by_completion
from standup_doc.generator import generate_standup
from standup_doc.links import annotate_github_urls
from standup_doc.parser import ParsedStandup, parse_standup
from standup_doc.sections import TODAY, YESTERDAY

logger = logging.getLogger(__name__)

STORAGE_KEY = "standup-todos"

Listener = Callable[[str, list], None]


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


@dataclass(frozen=True)
class Todo:
    id: str
    text: str
    completed: bool
    created_at: str
    completed_at: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "created_at": self.created_at,
        }
        if self.completed_at:
            data["completed_at"] = self.completed_at
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Todo":
        return cls(
            id=str(data["id"]),
            text=str(data["text"]),
            completed=bool(data.get("completed", False)),
            created_at=str(data.get("created_at") or _now()),
            completed_at=data.get("completed_at"),
        )


def new_todo(text: str, completed: bool = False) -> Todo:
    """Synthesize a fresh todo; completed_at is set only when completed."""
    now = _now()
    return Todo(
        id=str(uuid.uuid4()),
        text=text,
        completed=completed,
        created_at=now,
        completed_at=now if completed else None,
    )


class TodoStorage:
    """Single keyed record in a JSON file."""

    def __init__(self, path: Path, key: str = STORAGE_KEY):
        self.path = Path(path)
        self.key = key

    def load(self) -> list[Todo] | None:
        """
        Return the saved todos, or None when nothing was saved yet.

        A corrupt record is logged and treated as an empty list.
        """
        if not self.path.exists():
            return None
        try:
            record = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(record, dict):
                raise ValueError(f"expected a JSON object, got {type(record).__name__}")
            if self.key not in record:
                return None
            return [Todo.from_dict(item) for item in record[self.key]]
        except (json.JSONDecodeError, ValueError, OSError, TypeError, KeyError) as exc:
            log_error("TodoStorage.load: Failed to parse saved todos", exc)
            return []

    def save(self, todos: list[Todo]) -> bool:
        """Write the record; a failed write is logged and returns False."""
        record = {}
        if self.path.exists():
            try:
                existing = json.loads(self.path.read_text(encoding="utf-8"))
                if isinstance(existing, dict):
                    record = existing
            except (json.JSONDecodeError, OSError):
                record = {}
        record[self.key] = [todo.to_dict() for todo in todos]
        try:
            atomic_write(self.path, json.dumps(record, indent=2, ensure_ascii=False) + "\n")
        except OSError as exc:
            log_error("TodoStorage.save: Failed to write todos", exc)
            return False
        return True


class TodoStore:
    def __init__(
        self,
        storage: TodoStorage,
        loader: Loader | None = None,
        export_dir: Path | None = None,
    ):
        self.storage = storage
        self.loader = loader
        self.export_dir = Path(export_dir) if export_dir else None
        self.todos: list[Todo] = []
        self._listeners: list[Listener] = []

    # -- subscriptions -----------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener(event, todos)`; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, event: str, todos: list[Todo], persist: bool = True) -> None:
        self.todos = todos
        if persist:
            self.storage.save(todos)
        for listener in list(self._listeners):
            listener(event, list(todos))

    # -- selectors ---------------------------------------------------------

    def completed(self) -> list[Todo]:
        return [todo for todo in self.todos if todo.completed]

    def incomplete(self) -> list[Todo]:
        return [todo for todo in self.todos if not todo.completed]

    def find(self, todo_id: str) -> Todo | None:
        return next((todo for todo in self.todos if todo.id == todo_id), None)

    def _index(self, todo_id: str) -> int:
        return next((i for i, todo in enumerate(self.todos) if todo.id == todo_id), -1)

    # -- mutations ---------------------------------------------------------

    def add(self, text: str) -> Todo | None:
        """Add an incomplete todo at the end of the incomplete tasks; blank text is ignored."""
        text = text.strip()
        if not text:
            return None
        todo = new_todo(annotate_github_urls(text))
        todos = list(self.todos)
        first_done = next((i for i, t in enumerate(todos) if t.completed), len(todos))
        todos.insert(first_done, todo)
        self._commit("add", todos)
        return todo

    def toggle(self, todo_id: str) -> Todo | None:
        index = self._index(todo_id)
        if index == -1:
            return None
        todo = self.todos[index]
        flipped = replace(
            todo,
            completed=not todo.completed,
            completed_at=None if todo.completed else _now(),
        )
        todos = list(self.todos)
        todos[index] = flipped
        self._commit("toggle", partition_by_completion(todos))
        return flipped

    def update(self, todo_id: str, text: str) -> Todo | None:
        text = text.strip()
        index = self._index(todo_id)
        if index == -1 or not text:
            return None
        updated = replace(self.todos[index], text=annotate_github_urls(text))
        todos = list(self.todos)
        todos[index] = updated
        self._commit("update", todos)
        return updated

    def delete(self, todo_id: str) -> bool:
        if self._index(todo_id) == -1:
            return False
        self._commit("delete", [todo for todo in self.todos if todo.id != todo_id])
        return True

    def reorder(self, active_id: str, over_id: str) -> bool:
        """Move `active_id` to the position of `over_id`; no-op if either is missing."""
        old_index = self._index(active_id)
        new_index = self._index(over_id)
        if old_index == -1 or new_index == -1:
            return False
        todos = list(self.todos)
        moved = todos.pop(old_index)
        todos.insert(new_index, moved)
        self._commit("reorder", todos)
        return True

    def clear_completed(self) -> list[Todo]:
        removed = self.completed()
        self._commit("archive", self.incomplete())
        return removed

    # -- import ------------------------------------------------------------

    def import_tasks(self, items: Iterable[tuple[str, bool]]) -> list[Todo]:
        """
        Merge (text, completed) pairs into the list, skipping texts that
        already exist (trimmed, case-insensitive).

        Returns the todos added; nothing is written when none survive.
        """
        try:
            survivors = drop_existing(self.todos, list(items))
            if not survivors:
                return []
            added = [new_todo(text, completed) for text, completed in survivors]
            merged = merge_tasks(self.todos, added)
        except Exception as exc:
            log_error("TodoStore.import_tasks: Failed to import todos", exc)
            raise
        self._commit("import", merged)
        logger.info(f"Imported {len(added)} task(s)")
        return added

    def import_standup(self, parsed: ParsedStandup, sections: Iterable[str]) -> list[Todo]:
        """Import every item of the selected sections."""
        items = []
        for section in sections:
            items.extend(parsed.section_items(section))
        return self.import_tasks(items)

    # -- loading -----------------------------------------------------------

    def load(self, today: date | None = None) -> list[Todo]:
        """Load saved todos, bootstrapping from the latest document if none."""
        saved = self.storage.load()
        if saved is None:
            return self.load_from_latest_document(today)
        self._commit("load", saved, persist=False)
        return self.todos

    def load_from_latest_document(self, today: date | None = None) -> list[Todo]:
        """Replace the list with Yesterday + Today tasks of the latest document."""
        found = fetch_latest_for(today or datetime.now().date(), self.loader) if self.loader else None
        if found is None:
            logger.info("No standup document found for today or yesterday")
            self._commit("load", [], persist=False)
            return self.todos

        parsed = parse_standup(found.content)
        todos = [
            new_todo(task.text, task.completed)
            for task in (*parsed.yesterday, *parsed.today)
        ]
        self._commit("load", partition_by_completion(todos))
        logger.info(f"Loaded {len(todos)} task(s) from {found.filename}")
        return self.todos

    # -- standup output ----------------------------------------------------

    def generate_markdown(self, day: date | None = None) -> str:
        return generate_standup(self.todos, display_date(day))

    def save_and_archive(self, markdown: str, day: date | None = None) -> Path | None:
        """
        Export `markdown` as <today>.md, then drop completed todos.

        When the export fails nothing is archived.
        """
        if self.export_dir is None:
            log_error("TodoStore.save_and_archive", "No export directory configured")
            return None
        path = self.export_dir / standup_filename(today_iso(day))
        try:
            atomic_write(path, markdown)
        except OSError as exc:
            log_error(f"TodoStore.save_and_archive: Failed to write {path}", exc)
            return None
        self.clear_completed()
        logger.info(f"Saved standup: {path}")
        return path
