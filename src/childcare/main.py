"""
Childcare Platform FastAPI Application

Role-based childcare management: children, attendance, evaluations,
notifications and reports.
"""

import logging
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from childcare.config import settings
from childcare.core.database import close_db, engine, get_db
from childcare.core.policy import validate_policy

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Startup:
    - Verify database connection

    Shutdown:
    - Close database connections
    """
    logger.info(f"Childcare Platform starting ({settings.ENVIRONMENT})...")

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection verified")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        raise

    logger.info("Childcare Platform ready")

    yield

    logger.info("Childcare Platform shutting down...")
    await close_db()
    logger.info("Shutdown complete")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTPException -> ``{success: false, message}`` with the same status."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    response = _error(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed or missing input -> 400 naming the first offending field."""
    errors = exc.errors()
    if not errors:
        return _error(400, "Invalid request")

    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    reason = str(first.get("msg", "invalid value")).removeprefix("Value error, ")
    message = f"{'.'.join(location)}: {reason}" if location else reason
    return _error(400, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unexpected -> 500 with a generic message; details go to the log."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _error(500, "Internal server error")


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    configure_logging()

    # Misconfigured access policy must stop startup, not surface per request
    validate_policy()

    app = FastAPI(
        title="Childcare Platform",
        description="Role-based childcare management API",
        version=VERSION,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_local else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
        )
        return response

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Health check endpoints
    @app.get("/health", tags=["Health"])
    async def health_check() -> dict[str, Any]:
        """Liveness: 200 whenever the process is serving requests."""
        return {
            "success": True,
            "message": "Server is running",
            "timestamp": datetime.now(UTC).isoformat(),
        }

    @app.get("/health/ready", tags=["Health"], response_model=None)
    async def readiness_check(db: AsyncSession = Depends(get_db)) -> dict[str, Any] | JSONResponse:  # noqa: B008
        """Readiness: 200 when the database answers, 503 otherwise."""
        try:
            await db.execute(text("SELECT 1"))
            return {"success": True, "message": "ready"}
        except Exception as e:
            logger.warning(f"Readiness check failed: {e}")
            return _error(503, "not ready")

    # Register API routers
    from childcare.api import attendance, auth, children, evaluations, notifications, reports, users

    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(users.router, prefix="/api/users", tags=["Users"])
    app.include_router(children.router, prefix="/api/children", tags=["Children"])
    app.include_router(attendance.router, prefix="/api/attendance", tags=["Attendance"])
    app.include_router(evaluations.router, prefix="/api/evaluations", tags=["Evaluations"])
    app.include_router(
        notifications.router, prefix="/api/notifications", tags=["Notifications"]
    )
    app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "childcare.main:app",
        host="0.0.0.0",  # nosec B104 - Intentional for containerized deployment
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
