"""
Store Exceptions - Error taxonomy shared by every store backend

The store never recovers from these internally. Routes let them propagate
and the global handlers in main.py turn them into JSON error responses.
"""

from typing import Any, Dict, Optional


class StoreError(Exception):
    """Base exception for all store failures"""

    status_code = 500

    def __init__(self, message: str, code: str = "STORE_ERROR", details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Response body fields: error code, message and structured details"""
        return {"error": self.code, "detail": self.message, "details": self.details}


class RecordNotFoundError(StoreError):
    """Update or lookup on an id that is not in the collection"""

    status_code = 404

    def __init__(self, resource: str, record_id: str):
        super().__init__(
            f"{resource.capitalize()} not found",
            code="NOT_FOUND",
            details={"resource": resource, "id": record_id},
        )


class InvalidCredentialsError(StoreError):
    """No user matches the given email and role"""

    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class StoreValidationError(StoreError):
    """Rejected input (empty required field, bad upload, ...)"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="VALIDATION_ERROR", details={"field": field} if field else None)


class StoreTransportError(StoreError):
    """Remote round trip failed - surfaced verbatim, never retried"""

    status_code = 502

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message, code="TRANSPORT_ERROR", details={"status": status} if status else None)
