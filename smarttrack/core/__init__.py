"""
Core Package - Configuration, security and errors

IMPORTANT: Only import config, security and exceptions here.
Dependencies must be imported directly to avoid circular imports.
"""

from smarttrack.core.config import settings, get_settings
from smarttrack.core.security import verify_demo_password, create_access_token, decode_token
from smarttrack.core.exceptions import (
    StoreError,
    RecordNotFoundError,
    InvalidCredentialsError,
    StoreValidationError,
    StoreTransportError,
)

__all__ = [
    "settings",
    "get_settings",
    "verify_demo_password",
    "create_access_token",
    "decode_token",
    "StoreError",
    "RecordNotFoundError",
    "InvalidCredentialsError",
    "StoreValidationError",
    "StoreTransportError",
]
