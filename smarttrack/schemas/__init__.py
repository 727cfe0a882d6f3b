"""
Schemas Package - Exports all Pydantic schemas
"""

from smarttrack.schemas.user import (
    UserRecord,
    LoginRequest,
    SessionRecord,
    TokenResponse,
    FacultyMemberResponse,
)
from smarttrack.schemas.task import (
    WRITABLE_TASK_FIELDS,
    TaskCreate,
    TaskUpdate,
    TaskRecord,
    TaskResponse,
    TaskListResponse,
)
from smarttrack.schemas.file import (
    FileRecord,
    FileResponse,
    FileListResponse,
)

__all__ = [
    "UserRecord",
    "LoginRequest",
    "SessionRecord",
    "TokenResponse",
    "FacultyMemberResponse",
    "WRITABLE_TASK_FIELDS",
    "TaskCreate",
    "TaskUpdate",
    "TaskRecord",
    "TaskResponse",
    "TaskListResponse",
    "FileRecord",
    "FileResponse",
    "FileListResponse",
]
