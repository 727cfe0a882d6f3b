"""
In-memory filters used by the list endpoints
"""

from typing import Iterable, List, Optional

from smarttrack.schemas import TaskResponse, UserRecord


def _matches(term: str, *values: Optional[str]) -> bool:
    return any(term in value.lower() for value in values if value)


def filter_tasks(
    tasks: Iterable[TaskResponse],
    search: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    assigned_to: Optional[str] = None,
    department: Optional[str] = None,
) -> List[TaskResponse]:
    """
    Filter joined tasks.

    ``search`` is case-insensitive over title, department and the assignee's
    name; the other filters are exact matches.
    """
    term = search.strip().lower() if search else ""
    result = []
    for task in tasks:
        if status and task.status.value != status:
            continue
        if priority and task.priority.value != priority:
            continue
        if assigned_to and task.assigned_to != assigned_to:
            continue
        if department and task.department != department:
            continue
        assignee = task.assigned_user.name if task.assigned_user else None
        if term and not _matches(term, task.title, task.department, assignee):
            continue
        result.append(task)
    return result


def filter_users(
    users: Iterable[UserRecord],
    search: Optional[str] = None,
    department: Optional[str] = None,
) -> List[UserRecord]:
    """Case-insensitive search over name, email and department"""
    term = search.strip().lower() if search else ""
    result = []
    for user in users:
        if department and user.department != department:
            continue
        if term and not _matches(term, user.name, user.email, user.department):
            continue
        result.append(user)
    return result
