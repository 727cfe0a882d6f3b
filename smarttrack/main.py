"""
FastAPI Application Entry Point - Application initialization and configuration
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
import logging
import sys
import time

from smarttrack.core.config import settings, validate_config, is_production, is_remote_configured
from smarttrack.core.exceptions import StoreError, StoreTransportError
from smarttrack.database import check_db_connection, close_db_connections, get_pool_stats, init_db

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def create_application() -> FastAPI:
    """Factory function to create and configure the FastAPI application"""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        docs_url="/api/docs" if not is_production() else None,
        redoc_url="/api/redoc" if not is_production() else None,
        description="Faculty task tracking for the quality-assurance office"
    )

    setup_middleware(app)
    setup_exception_handlers(app)
    setup_event_handlers(app)
    setup_routers(app)

    return app


def setup_middleware(app: FastAPI) -> None:
    """CORS plus per-request timing log"""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,  # Dashboard origins (e.g., http://localhost:3000)
        allow_credentials=True,  # Allow auth headers
        allow_methods=["*"],  # GET, POST, PATCH, DELETE, ...
        allow_headers=["*"],  # Allow all request headers
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        logger.info(f"➡️  {request.method} {request.url.path}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"⬅️  {request.method} {request.url.path} "
            f"- Status: {response.status_code} - Time: {process_time:.2f}s"
        )
        response.headers["X-Process-Time"] = str(process_time)
        return response


def _error(status_code: int, error: str, detail) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "detail": detail, "timestamp": time.time()}
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Map store, validation and unexpected errors to consistent JSON responses"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Field-level details for invalid request data"""
        errors = []
        for error in exc.errors():
            errors.append({
                "field": ".".join(str(x) for x in error["loc"]),
                "message": error["msg"],
                "type": error["type"]
            })

        logger.warning(f"❌ Validation error on {request.url.path}: {errors}")
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation Error", errors)

    @app.exception_handler(StoreTransportError)
    async def transport_exception_handler(request: Request, exc: StoreTransportError):
        """Remote backend failed - no retry, tell the client to try again"""
        logger.error(f"❌ Remote backend error on {request.method} {request.url.path}: {exc.message}")
        return _error(
            exc.status_code,
            "Backend Unavailable",
            "The data service did not respond as expected. Please try again."
        )

    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError):
        """Not-found, credential and validation errors raised by the store"""
        logger.warning(f"⚠️  {exc.code} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={**exc.to_dict(), "timestamp": time.time()}
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        """Log full details, return a generic message"""
        logger.error(
            f"❌ Database error on {request.method} {request.url.path}: {str(exc)}",
            exc_info=True
        )
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Database Error",
            "An error occurred while processing your request. Please try again later."
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Catch-all, including malformed stored JSON"""
        logger.error(
            f"❌ Unhandled exception on {request.method} {request.url.path}: {str(exc)}",
            exc_info=True
        )
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            "An unexpected error occurred. Please try again."
        )


def setup_event_handlers(app: FastAPI) -> None:
    """Startup and shutdown hooks"""

    @app.on_event("startup")
    async def startup_event():
        """Validate config and the storage table; exit if either is broken"""
        logger.info("🚀 Starting SmartTrack...")

        try:
            validate_config()
        except ValueError as e:
            logger.error(f"❌ Configuration validation failed: {e}")
            sys.exit(1)

        init_db()
        if not check_db_connection():
            logger.error("❌ Cannot connect to database. Exiting.")
            sys.exit(1)

        logger.info(f"📊 Database pool: {get_pool_stats()}")
        logger.info(f"🗄️  Store backend: {settings.STORE_BACKEND}")
        if settings.STORE_BACKEND == "remote" and not is_remote_configured():
            logger.warning("⚠️  Remote backend not configured - serving mock data")
        logger.info(f"🌍 Environment: {settings.ENVIRONMENT}")
        logger.info("✅ Application started successfully")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("🛑 Shutting down SmartTrack...")
        from smarttrack.core.dependencies import get_remote_client
        if get_remote_client.cache_info().currsize:
            get_remote_client().close()
        close_db_connections()
        logger.info("✅ Shutdown complete")


def setup_routers(app: FastAPI) -> None:
    """Health check plus the API routers"""

    @app.get("/health", tags=["Health"])
    async def health_check():
        db_healthy = check_db_connection()
        return {
            "status": "healthy" if db_healthy else "unhealthy",
            "database": "connected" if db_healthy else "disconnected",
            "pool_stats": get_pool_stats(),
            "store_backend": settings.STORE_BACKEND,
            "remote_configured": is_remote_configured(),
            "timestamp": time.time(),
            "version": settings.APP_VERSION
        }

    from smarttrack.api import auth, tasks, files, users
    app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])
    app.include_router(files.router, prefix="/api/files", tags=["Files"])
    app.include_router(users.router, prefix="/api/users", tags=["Users"])


app = create_application()

if __name__ == "__main__":
    # Development only. Production: uvicorn smarttrack.main:app --host 0.0.0.0 --port 8000
    import uvicorn
    uvicorn.run(
        "smarttrack.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
