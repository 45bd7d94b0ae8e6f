"""Task helper utilities."""

from selectdo.errors import TaskNotFoundError
from selectdo.services.task_store import TaskStore


def _find_shortest_unique_suffix(task_ids: list[str], target_id: str) -> str:
    """
    Find the shortest suffix of target_id that uniquely identifies it.

    Args:
        task_ids: List of all task IDs
        target_id: The task ID to find a unique suffix for

    Returns:
        The shortest unique suffix
    """
    for length in range(1, len(target_id) + 1):
        suffix = target_id[-length:]
        matches = [tid for tid in task_ids if tid.endswith(suffix)]
        if len(matches) == 1:
            return suffix
    return target_id


def resolve_task_id(store: TaskStore, task_id_or_suffix: str) -> str:
    """
    Resolve a task ID or suffix to a full task ID.

    Args:
        store: The loaded task store
        task_id_or_suffix: Full task ID or suffix to resolve

    Returns:
        The full task ID

    Raises:
        TaskNotFoundError: If no task matches or the suffix is ambiguous
    """
    task_id_or_suffix = task_id_or_suffix.strip().lstrip("#")
    if not task_id_or_suffix:
        raise TaskNotFoundError("Task ID is required")

    if task_id_or_suffix in store:
        return task_id_or_suffix

    tasks = store.all()
    matching_tasks = [task for task in tasks if task.id.endswith(task_id_or_suffix)]

    if not matching_tasks:
        raise TaskNotFoundError(f"No task found with ID or suffix '{task_id_or_suffix}'")

    if len(matching_tasks) > 1:
        all_task_ids = [t.id for t in tasks]
        suggestions = []
        for task in matching_tasks:
            unique_suffix = _find_shortest_unique_suffix(all_task_ids, task.id)
            title = task.title
            if len(title) > 70:
                title = title[:67] + "..."
            suggestions.append(f"  [{unique_suffix}] {title}")

        raise TaskNotFoundError(
            f"Multiple tasks match suffix '{task_id_or_suffix}':\n"
            + "\n".join(suggestions)
            + "\n\nUse the suffix in brackets to select a specific task."
        )

    return matching_tasks[0].id
