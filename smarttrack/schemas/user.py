"""
User Schemas - Stored user records, login and session payloads
"""

from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime

from smarttrack.models.user import UserRole


class UserRecord(BaseModel):
    """A user as stored in the users collection"""
    id: str
    email: EmailStr
    name: str
    role: UserRole
    department: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class LoginRequest(BaseModel):
    """Schema for login request - demo credentials, compared against configured values"""
    email: EmailStr
    role: UserRole
    password: str


class SessionRecord(BaseModel):
    """The signed-in identity, stored as a single object under the session key"""
    user: UserRecord
    signed_in_at: datetime


class TokenResponse(BaseModel):
    """Schema for authentication token response"""
    access_token: str
    token_type: str = "bearer"
    user: UserRecord


class FacultyMemberResponse(UserRecord):
    """Directory entry - user plus counts of their assigned tasks"""
    active_tasks: int = 0  # pending + in_progress
    completed_tasks: int = 0
