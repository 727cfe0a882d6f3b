"""
Task Schemas - Stored task records and request validation
"""

from pydantic import BaseModel, field_validator
from typing import Optional, List
from datetime import date, datetime

from smarttrack.models.task import TaskStatus, TaskPriority
from smarttrack.schemas.user import UserRecord

# Fields a caller may set; everything else is owned by the store
WRITABLE_TASK_FIELDS = (
    "title",
    "description",
    "assigned_to",
    "created_by",
    "department",
    "due_date",
    "priority",
    "status",
)


def _clean_title(v: str) -> str:
    if not v or not v.strip():
        raise ValueError('Task title cannot be empty')
    if len(v.strip()) > 200:
        raise ValueError('Task title cannot exceed 200 characters')
    return v.strip()


class TaskBase(BaseModel):
    """Base schema with common task fields"""
    title: str
    description: Optional[str] = None
    assigned_to: Optional[str] = None  # User id, not validated against the users collection
    created_by: Optional[str] = None  # User id
    department: Optional[str] = None
    due_date: Optional[date] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING


class TaskCreate(TaskBase):
    """Schema for creating a task - title is required and must not be blank"""

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _clean_title(v)


class TaskUpdate(BaseModel):
    """Schema for partial task updates - only fields that are sent get merged"""
    title: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    department: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None

    @field_validator('title', 'priority', 'status')
    @classmethod
    def reject_null(cls, v, info):
        # Omit the field to leave it unchanged; these can never be cleared
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _clean_title(v)


class TaskRecord(TaskBase):
    """A task as stored in the tasks collection"""
    id: str
    created_at: datetime
    updated_at: datetime


class TaskResponse(TaskRecord):
    """Task with its users joined by id at read time (never persisted)"""
    assigned_user: Optional[UserRecord] = None
    created_user: Optional[UserRecord] = None


class TaskListResponse(BaseModel):
    tasks: List[TaskResponse]
    total: int
