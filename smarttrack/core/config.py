"""
Application Configuration - Environment-driven settings
"""

from functools import lru_cache
from typing import Any, Dict, List, Optional
import json

from pydantic_settings import BaseSettings

DEFAULT_SECRET_KEY = "change-me-in-production"


def parse_list(v: Any) -> List[str]:
    """Parse a list setting from a JSON array or a comma-separated string"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        return [item.strip() for item in v.split(',') if item.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # Application
    APP_NAME: str = "SmartTrack"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Database - backs the key-value storage table
    DATABASE_URL: str = "sqlite:///./smarttrack.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30

    # CORS
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        return parse_list(self.CORS_ORIGINS_STR)

    # Access tokens
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Store
    STORE_BACKEND: str = "local"  # "local" or "remote"
    STORAGE_NAMESPACE: str = "iqac"  # Key prefix: iqac_tasks, iqac_files, ...

    # Remote backend - leave URL or KEY empty to serve mock data
    REMOTE_URL: str = ""
    REMOTE_KEY: str = ""
    REMOTE_BUCKET: str = "task-files"
    REMOTE_TIMEOUT: Optional[float] = None  # None = wait indefinitely

    # Uploads
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB
    ALLOWED_EXTENSIONS_STR: str = "pdf,doc,docx,xls,xlsx,ppt,pptx,jpg,jpeg,png"

    @property
    def ALLOWED_EXTENSIONS(self) -> List[str]:
        return [ext.lower().lstrip('.') for ext in parse_list(self.ALLOWED_EXTENSIONS_STR)]

    # Demo login passwords, one per role (JSON object in the environment)
    DEMO_PASSWORDS: Dict[str, str] = {
        "qa-office": "admin123",
        "department-head": "hod123",
        "staff": "staff123",
    }

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance - environment is read once per process"""
    return Settings()


settings = get_settings()


def is_production() -> bool:
    return settings.ENVIRONMENT.lower() == "production"


def is_remote_configured() -> bool:
    """Remote backend is live only when both endpoint and key are set"""
    return bool(settings.REMOTE_URL and settings.REMOTE_KEY)


def validate_config() -> None:
    """
    Validate settings at startup - fail fast on inconsistent configuration.

    Raises:
        ValueError: If a setting is invalid
    """
    if settings.STORE_BACKEND not in ("local", "remote"):
        raise ValueError(f"Unknown STORE_BACKEND '{settings.STORE_BACKEND}' (expected 'local' or 'remote')")
    if is_production() and settings.SECRET_KEY == DEFAULT_SECRET_KEY:
        raise ValueError("SECRET_KEY must be set in production")
    if settings.MAX_UPLOAD_SIZE <= 0:
        raise ValueError("MAX_UPLOAD_SIZE must be positive")
    if settings.ACCESS_TOKEN_EXPIRE_MINUTES <= 0:
        raise ValueError("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")
