"""
Security Module - Demo password checks and JWT token generation/validation

Demo-grade only: there is one configured password per role and no rate
limiting. The hashing keeps plaintext passwords out of memory comparisons.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Dict, Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
import logging

from smarttrack.core.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a stored hash.

    Returns False (never raises) when the hash is malformed.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.error(f"❌ Password verification error: {str(e)}")
        return False


@lru_cache()
def demo_password_hashes() -> Dict[str, str]:
    """Hash the configured per-role demo passwords once per process"""
    return {role: hash_password(password) for role, password in settings.DEMO_PASSWORDS.items()}


def verify_demo_password(role: str, password: str) -> bool:
    hashed = demo_password_hashes().get(role)
    if hashed is None:
        logger.warning(f"⚠️  No demo password configured for role {role}")
        return False
    return verify_password(password, hashed)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT access token.

    Args:
        data: Claims to encode (typically {"sub": user_id})
        expires_delta: Optional custom lifetime

    Example:
        token = create_access_token({"sub": user.id})
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})

    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    logger.debug(f"✅ Created access token expiring at {expire}")
    return encoded_jwt


def verify_token(token: str) -> Optional[dict]:
    """Decode and verify a JWT; None if the signature is bad or it has expired"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.warning("⚠️  Token expired")
        return None
    except JWTError as e:
        logger.warning(f"⚠️  Invalid token: {str(e)}")
        return None


def decode_token(token: str) -> Optional[str]:
    """User id ("sub" claim) from a valid token, else None"""
    payload = verify_token(token)
    if payload:
        return payload.get("sub")
    return None
