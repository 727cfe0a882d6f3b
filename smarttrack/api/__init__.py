"""
API Package - Exports all API routers
"""

from smarttrack.api import auth, tasks, files, users

__all__ = ["auth", "tasks", "files", "users"]
