"""
Users API - Faculty directory and user lookups
"""

from fastapi import APIRouter, Depends, HTTPException, status, Query
from collections import Counter
from typing import Optional
import logging

from smarttrack.core.dependencies import get_current_user, get_store
from smarttrack.models import UserRole
from smarttrack.schemas import FacultyMemberResponse, UserRecord
from smarttrack.store import DataStore
from smarttrack.utils.search import filter_users

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[UserRecord])
def list_users(
    role: Optional[UserRole] = Query(None, description="Exact role match"),
    search: Optional[str] = Query(None, description="Search name, email or department"),
    current_user: UserRecord = Depends(get_current_user),
    store: DataStore = Depends(get_store),
):
    """All users in insertion order, optionally filtered (used for assignee dropdowns)"""
    users = store.list_users(role.value if role else None)
    users = filter_users(users, search=search)
    logger.info(f"✅ Returning {len(users)} users")
    return users


@router.get("/directory", response_model=list[FacultyMemberResponse])
def faculty_directory(
    search: Optional[str] = Query(None, description="Search name, email or department"),
    department: Optional[str] = Query(None),
    current_user: UserRecord = Depends(get_current_user),
    store: DataStore = Depends(get_store),
):
    """
    Faculty directory.

    Each user is listed with how many of the tasks assigned to them are
    still active (pending or in progress) and how many are completed.
    """
    users = filter_users(store.list_users(), search=search, department=department)

    active = Counter()
    completed = Counter()
    for task in store.list_tasks():
        if not task.assigned_to:
            continue
        if task.status.is_active:
            active[task.assigned_to] += 1
        else:
            completed[task.assigned_to] += 1

    return [
        FacultyMemberResponse(
            **user.model_dump(),
            active_tasks=active[user.id],
            completed_tasks=completed[user.id],
        )
        for user in users
    ]


@router.get("/{user_id}", response_model=UserRecord)
def get_user(
    user_id: str,
    current_user: UserRecord = Depends(get_current_user),
    store: DataStore = Depends(get_store),
):
    """
    Raises:
        404: User not found
    """
    user = store.get_user(user_id)
    if user is None:
        logger.warning(f"⚠️  User {user_id} not found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User with ID {user_id} not found",
        )
    return user
