"""Workflow Stats — pure computation of dashboard analytics from projects and tasks.

Invariants:
    - No IO, no DB: inputs are already-loaded rows (anything with .status / .id / .project_id)
    - Every status of the closed enum appears in the counts, zero when absent
    - completion_rate is an integer percent, 0 when there are no tasks (never divides by zero)

Design Decisions:
    - Pure functions, not repository queries: the dashboard needs several views
      over the same two lists, computed once per request
    - Unknown status strings are ignored rather than raising
"""

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any

from tracker.core.domain_types import ProjectStatus, TaskStatus


def _status_value(item: Any) -> str:
    status = item.status
    return status.value if isinstance(status, Enum) else status


def count_by_status(items: Iterable[Any], statuses: type[Enum]) -> dict[str, int]:
    """Count items per status; every member of `statuses` is present."""
    counts = {s.value: 0 for s in statuses}
    for item in items:
        value = _status_value(item)
        if value in counts:
            counts[value] += 1
    return counts


def completion_rate(tasks: Sequence[Any]) -> int:
    if not tasks:
        return 0
    completed = sum(
        1 for t in tasks if _status_value(t) == TaskStatus.COMPLETED.value
    )
    return round(completed / len(tasks) * 100)


def project_progress(
    projects: Sequence[Any], tasks: Sequence[Any],
) -> list[dict]:
    """Per-project completed/total task counts, in project order."""
    by_project: dict[Any, list[Any]] = {p.id: [] for p in projects}
    for task in tasks:
        if task.project_id in by_project:
            by_project[task.project_id].append(task)

    progress = []
    for project in projects:
        project_tasks = by_project[project.id]
        completed = sum(
            1 for t in project_tasks
            if _status_value(t) == TaskStatus.COMPLETED.value
        )
        progress.append({
            "project_id": str(project.id),
            "name": project.name,
            "status": _status_value(project),
            "completed": completed,
            "total": len(project_tasks),
            "completion_rate": completion_rate(project_tasks),
        })
    return progress


def compute_overview(projects: Sequence[Any], tasks: Sequence[Any]) -> dict:
    """Full dashboard overview. Pure, no IO."""
    return {
        "projects": {
            "total": len(projects),
            "by_status": count_by_status(projects, ProjectStatus),
        },
        "tasks": {
            "total": len(tasks),
            "by_status": count_by_status(tasks, TaskStatus),
            "completion_rate": completion_rate(tasks),
        },
        "project_progress": project_progress(projects, tasks),
    }
