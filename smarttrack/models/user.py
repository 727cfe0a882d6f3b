"""
User Model - Role enumeration shared by stored users and sessions
"""

import enum


class UserRole(str, enum.Enum):
    """User role - advisory only, permissions are not enforced server-side"""
    QA_OFFICE = "qa-office"  # Quality-assurance office, full access in the UI
    DEPARTMENT_HEAD = "department-head"  # Assigns and edits tasks within a department
    STAFF = "staff"  # Views and updates own assigned tasks
