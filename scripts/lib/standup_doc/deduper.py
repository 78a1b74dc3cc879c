"""Task deduplication and partition-preserving merges."""


def normalize_task(text: str) -> str:
    """Normalize task text for comparison: trimmed and case-insensitive."""
    return text.strip().lower()


def partition_by_completion(tasks: list) -> list:
    """Incomplete tasks first, then completed, each keeping relative order."""
    return [t for t in tasks if not t.completed] + [t for t in tasks if t.completed]


def drop_existing(existing: list, items: list[tuple[str, bool]]) -> list[tuple[str, bool]]:
    """
    Drop incoming (text, completed) pairs whose text already exists.

    Only pre-existing texts are compared; two equal incoming items are
    both kept.
    """
    seen = {normalize_task(task.text) for task in existing}
    return [(text, completed) for text, completed in items if normalize_task(text) not in seen]


def merge_tasks(existing: list, new: list) -> list:
    """
    Merge new tasks into an existing list.

    Order: existing incomplete, new incomplete, existing completed,
    new completed.
    """
    return (
        [t for t in existing if not t.completed]
        + [t for t in new if not t.completed]
        + [t for t in existing if t.completed]
        + [t for t in new if t.completed]
    )
