"""
Tasks API - Task CRUD with joined assignee/creator
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import Optional
import logging

from smarttrack.core.dependencies import get_current_user, get_store
from smarttrack.models import TaskPriority, TaskStatus
from smarttrack.schemas import TaskCreate, TaskListResponse, TaskResponse, TaskUpdate, UserRecord
from smarttrack.store import DataStore
from smarttrack.utils.search import filter_tasks

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=TaskListResponse)
def list_tasks(
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    priority: Optional[TaskPriority] = Query(None),
    search: Optional[str] = Query(None, description="Search title, department or assignee name"),
    assigned_to: Optional[str] = Query(None),
    department: Optional[str] = Query(None),
    current_user: UserRecord = Depends(get_current_user),
    store: DataStore = Depends(get_store),
):
    """
    List tasks, most recently created first.

    Filters are applied in memory after the joined read.
    """
    tasks = filter_tasks(
        store.list_tasks(),
        search=search,
        status=status_filter.value if status_filter else None,
        priority=priority.value if priority else None,
        assigned_to=assigned_to,
        department=department,
    )
    logger.info(f"✅ Returning {len(tasks)} tasks")
    return TaskListResponse(tasks=tasks, total=len(tasks))


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    current_user: UserRecord = Depends(get_current_user),
    store: DataStore = Depends(get_store),
):
    task = store.get_task(task_id)
    if task is None:
        logger.warning(f"⚠️  Task {task_id} not found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task with ID {task_id} not found",
        )
    return task


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    current_user: UserRecord = Depends(get_current_user),
    store: DataStore = Depends(get_store),
):
    """
    Create a task. ``created_by`` defaults to the signed-in user.
    Assignee ids are stored as given, even if no such user exists.
    """
    logger.info(f"➡️  Create task '{task_data.title}' by {current_user.email}")
    fields = task_data.model_dump()
    fields["created_by"] = fields.get("created_by") or current_user.id
    return store.create_task(fields)


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    current_user: UserRecord = Depends(get_current_user),
    store: DataStore = Depends(get_store),
):
    """
    Merge the sent fields into the task.

    Raises:
        404: Task not found (via RecordNotFoundError handler)
    """
    fields = task_data.model_dump(exclude_unset=True)
    logger.info(f"➡️  Update task {task_id} by {current_user.email}: {sorted(fields)}")
    return store.update_task(task_id, fields)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    current_user: UserRecord = Depends(get_current_user),
    store: DataStore = Depends(get_store),
):
    """Delete a task; deleting an unknown id also succeeds"""
    logger.info(f"➡️  Delete task {task_id} by {current_user.email}")
    store.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
