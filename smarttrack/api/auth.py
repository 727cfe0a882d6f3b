"""
Authentication API - Login, logout and current user
"""

from fastapi import APIRouter, Depends, HTTPException, status
import logging

from smarttrack.core.dependencies import get_current_user, get_session_store, get_store
from smarttrack.core.exceptions import InvalidCredentialsError
from smarttrack.core.security import create_access_token, verify_demo_password
from smarttrack.schemas import LoginRequest, TokenResponse, UserRecord
from smarttrack.store import DataStore, SessionStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/login", response_model=TokenResponse)
def login(
    credentials: LoginRequest,
    store: DataStore = Depends(get_store),
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Sign in with email, role and the demo password for that role.

    Process:
        1. Find the user by exact email + role
        2. Check the configured password for the role
        3. Replace the current session
        4. Issue a JWT for the user

    Raises:
        401: Unknown email/role pair or wrong password
    """
    logger.info(f"➡️  Login attempt for {credentials.email} as {credentials.role.value}")

    try:
        user = store.authenticate(credentials.email, credentials.role.value)
    except InvalidCredentialsError:
        logger.warning(f"⚠️  Login failed - no such user/role: {credentials.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if not verify_demo_password(user.role.value, credentials.password):
        logger.warning(f"⚠️  Login failed - incorrect password: {credentials.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    sessions.start(user)
    access_token = create_access_token(data={"sub": user.id})

    logger.info(f"✅ Login successful: {user.email}")
    return TokenResponse(access_token=access_token, token_type="bearer", user=user)


@router.post("/logout", status_code=status.HTTP_200_OK)
def logout(
    current_user: UserRecord = Depends(get_current_user),
    sessions: SessionStore = Depends(get_session_store),
):
    """End the session; tokens issued for it stop working"""
    sessions.end()
    logger.info(f"✅ User logged out: {current_user.email}")
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=UserRecord)
def get_current_user_info(current_user: UserRecord = Depends(get_current_user)):
    return current_user
