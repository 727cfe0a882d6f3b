"""
Models Package - Storage table and domain enumerations
"""

from smarttrack.models.storage_entry import StorageEntry
from smarttrack.models.user import UserRole
from smarttrack.models.task import TaskStatus, TaskPriority
from smarttrack.models.uploaded_file import FileStatus

__all__ = [
    "StorageEntry",
    "UserRole",
    "TaskStatus",
    "TaskPriority",
    "FileStatus",
]
