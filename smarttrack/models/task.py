"""
Task Model - Status and priority enumerations
"""

import enum


class TaskStatus(str, enum.Enum):
    """Task status enumeration - tracks task lifecycle"""
    PENDING = "pending"  # Not started
    IN_PROGRESS = "in_progress"  # Currently being worked on
    COMPLETED = "completed"  # Done

    @property
    def is_active(self) -> bool:
        return self is not TaskStatus.COMPLETED


class TaskPriority(str, enum.Enum):
    """Task priority enumeration"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
