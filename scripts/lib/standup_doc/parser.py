"""Standup document parser."""

from dataclasses import dataclass

from standup_doc.bullets import extract_simple_items, extract_status_items
from standup_doc.sections import (
    BACKLOG,
    BLOCKERS,
    TODAY,
    YESTERDAY,
    classify_sections,
)


@dataclass(frozen=True)
class ParsedTask:
    text: str
    completed: bool = False


@dataclass(frozen=True)
class ParsedStandup:
    yesterday: tuple[ParsedTask, ...] = ()
    today: tuple[ParsedTask, ...] = ()
    blockers: tuple[str, ...] = ()
    backlog: tuple[str, ...] = ()

    def section_items(self, section: str) -> list[tuple[str, bool]]:
        """Flatten a section into (text, completed) pairs."""
        if section in (YESTERDAY, TODAY):
            return [(task.text, task.completed) for task in getattr(self, section)]
        if section in (BLOCKERS, BACKLOG):
            return [(text, False) for text in getattr(self, section)]
        raise ValueError(f"Unknown standup section: {section}")

    def to_dict(self) -> dict:
        return {
            YESTERDAY: [{"text": t.text, "completed": t.completed} for t in self.yesterday],
            TODAY: [{"text": t.text, "completed": t.completed} for t in self.today],
            BLOCKERS: list(self.blockers),
            BACKLOG: list(self.backlog),
        }


@dataclass(frozen=True)
class StandupTask:
    """A selectable Yesterday/Today task; `id` is only unique within one parse."""

    id: str
    text: str
    completed: bool
    source: str


def parse_standup(content: str) -> ParsedStandup:
    """
    Parse standup markdown into its four sections.

    Never raises for text input; missing sections come back empty.
    """
    sections = classify_sections(content.splitlines())

    def _tasks(section):
        return tuple(
            ParsedTask(text, completed)
            for text, completed in extract_status_items(sections[section])
        )

    return ParsedStandup(
        yesterday=_tasks(YESTERDAY),
        today=_tasks(TODAY),
        blockers=tuple(extract_simple_items(sections[BLOCKERS])),
        backlog=tuple(extract_simple_items(sections[BACKLOG])),
    )


def get_standup_tasks(parsed: ParsedStandup) -> list[StandupTask]:
    """List Yesterday then Today tasks with `<source>-<index>` ids."""
    tasks = []
    for source in (YESTERDAY, TODAY):
        for index, task in enumerate(getattr(parsed, source)):
            tasks.append(
                StandupTask(
                    id=f"{source}-{index}",
                    text=task.text,
                    completed=task.completed,
                    source=source,
                )
            )
    return tasks


def default_selection(tasks: list[StandupTask]) -> set[str]:
    """Pre-select every Today task."""
    return {task.id for task in tasks if task.source == TODAY}


def selected_items(tasks: list[StandupTask], selected_ids) -> list[tuple[str, bool]]:
    """(text, completed) pairs for the selected tasks, in list order."""
    selected_ids = set(selected_ids)
    return [(task.text, task.completed) for task in tasks if task.id in selected_ids]
