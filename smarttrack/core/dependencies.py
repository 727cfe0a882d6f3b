"""
FastAPI Dependencies - Store construction and the signed-in user
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from functools import lru_cache
from sqlalchemy.orm import Session
import logging

from smarttrack.core.config import settings
from smarttrack.core.security import decode_token
from smarttrack.database import get_db
from smarttrack.schemas import UserRecord
from smarttrack.store import DataStore, KeyValueStorage, LocalStore, RemoteClient, RemoteStore, SessionStore

logger = logging.getLogger(__name__)

# Expects "Authorization: Bearer <token>"
security = HTTPBearer()


@lru_cache()
def get_remote_client() -> RemoteClient:
    """One HTTP client per process, closed on shutdown"""
    return RemoteClient.from_settings(settings)


def get_storage(db: Session = Depends(get_db)) -> KeyValueStorage:
    return KeyValueStorage(db, namespace=settings.STORAGE_NAMESPACE)


def get_store(storage: KeyValueStorage = Depends(get_storage)) -> DataStore:
    """
    Store for the configured backend, initialized before use.

    Local: collections in the key-value table.
    Remote: hosted tables, or mock data when the remote is not configured.
    """
    if settings.STORE_BACKEND == "remote":
        store = RemoteStore(get_remote_client())
    else:
        store = LocalStore(storage)
    store.initialize()
    return store


def get_session_store(storage: KeyValueStorage = Depends(get_storage)) -> SessionStore:
    return SessionStore(storage)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    sessions: SessionStore = Depends(get_session_store),
) -> UserRecord:
    """
    Resolve the signed-in user.

    The token must be valid and belong to the user of the current session,
    so a logout invalidates every token issued before it.

    Raises:
        HTTPException 401: Invalid/expired token or no matching session
    """
    user_id = decode_token(credentials.credentials)
    if not user_id:
        logger.warning("⚠️  Invalid or expired token provided")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    session = sessions.current()
    if session is None or session.user.id != user_id:
        logger.warning(f"⚠️  Token for user {user_id} has no active session")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired. Please sign in again.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.debug(f"✅ Authenticated user: {session.user.email}")
    return session.user
