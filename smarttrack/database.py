"""
Database Session Management - Backing store for the key-value storage table
"""

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool
from typing import Generator
import logging

from smarttrack.core.config import settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """SQLite needs cross-thread access; pooled servers get pool sizing"""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DB_POOL_SIZE,  # Number of persistent connections
        "max_overflow": settings.DB_MAX_OVERFLOW,  # Extra connections when pool is exhausted
        "pool_timeout": settings.DB_POOL_TIMEOUT,  # Wait time for an available connection
        "pool_pre_ping": True,  # Verify connection health before use
    }


# Engine for the key-value table; pooling depends on the backend
engine = create_engine(
    settings.DATABASE_URL,  # SQLite file by default, PostgreSQL in deployment
    echo=settings.DEBUG,  # Log all SQL in debug mode
    **_engine_options(settings.DATABASE_URL),
)


@event.listens_for(engine, "connect")
def receive_connect(dbapi_conn, connection_record):
    logger.debug("🔌 New database connection established")


@event.listens_for(engine, "close")
def receive_close(dbapi_conn, connection_record):
    logger.debug("🔌 Database connection closed")


# Session factory - one session per request
SessionLocal = sessionmaker(
    autocommit=False,  # Require explicit commits
    autoflush=False,   # Control when changes are flushed to database
    bind=engine,
)

# Base class for all SQLAlchemy models - provides metadata and table registry
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session per request.
    Rolls back and re-raises on error, always closes.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"❌ Database error during request: {str(e)}", exc_info=True)
        db.rollback()  # Drop the failed transaction
        raise
    finally:
        db.close()  # Always close (prevents connection leaks)
        logger.debug("✅ Database session closed")


def init_db() -> None:
    """
    Create the storage table if it does not exist.
    Collections themselves are seeded lazily by the store.
    """
    logger.info("🏗️  Creating database tables...")
    try:
        from smarttrack.models import storage_entry  # noqa: F401 - registers the table with Base
        Base.metadata.create_all(bind=engine)
        logger.info("✅ Database tables created successfully")
    except Exception as e:
        logger.error(f"❌ Failed to create database tables: {str(e)}", exc_info=True)
        raise


def check_db_connection() -> bool:
    """
    Verify database connectivity - used for health checks and startup validation.
    Returns True if connection successful, False otherwise.
    """
    try:
        db = SessionLocal()
        db.execute(text("SELECT 1"))
        db.close()
        logger.debug("✅ Database connection successful")
        return True
    except Exception as e:
        logger.error(f"❌ Database connection failed: {str(e)}", exc_info=True)
        return False


def get_pool_stats() -> dict:
    """Connection pool statistics (empty for pools that do not track them, e.g. SQLite)"""
    pool = engine.pool
    if not isinstance(pool, QueuePool):
        return {"pool": type(pool).__name__}
    return {
        "pool_size": pool.size(),
        "checked_out": pool.checkedout(),
        "overflow": pool.overflow(),
        "checked_in": pool.checkedin(),
    }


def close_db_connections():
    """Dispose of every pooled connection - called on shutdown"""
    logger.info("🔌 Closing database connections...")
    engine.dispose()
    logger.info("✅ All database connections closed")
