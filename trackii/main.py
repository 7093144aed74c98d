from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from prometheus_client import make_asgi_app
from sqlalchemy import inspect, text
import uvicorn
import logging
import sys

from trackii.core.config import settings
from trackii.core.database_utils import get_db_session
from trackii.db.base import Base
from trackii.middleware.performance import PerformanceMiddleware
from trackii.reminders.config import settings as reminder_settings
import trackii.models  # noqa: F401  register tables on Base.metadata

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"Starting up {settings.PROJECT_NAME} backend ({settings.ENVIRONMENT.value})...")

    # Check database tables
    try:
        with get_db_session() as db:
            existing_tables = inspect(db.bind).get_table_names()
            missing_tables = [t for t in Base.metadata.tables if t not in existing_tables]
            if missing_tables:
                logger.warning(f"Missing database tables: {missing_tables}")
                logger.warning("Run `alembic upgrade head` before serving traffic")
            else:
                logger.info("All required database tables exist")
    except Exception as e:
        logger.warning(f"Could not check database tables: {e}")

    if reminder_settings.DISMISSAL_BACKEND == "redis":
        try:
            from trackii.core.redis import get_redis_client
            get_redis_client().ping()
            logger.info("Redis connection established")
        except Exception as e:
            logger.warning(f"Redis connection failed: {e}")

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME} backend...")


def create_application() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Trackii - family health tracking: profiles, logs, prescriptions and medication reminders",
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(PerformanceMiddleware)

    # Import API routes after middleware setup
    from trackii.api.v1.api import api_router
    app.include_router(api_router, prefix=settings.API_V1_STR)

    if reminder_settings.METRICS_ENABLED:
        app.mount("/metrics", make_asgi_app())

    return app


# Create the FastAPI app instance
app = create_application()


@app.get("/health", tags=["Health Check"])
def health_check():
    """Health check endpoint"""
    try:
        with get_db_session() as db:
            db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        db_status = "unhealthy"

    redis_status = "not configured"
    if reminder_settings.DISMISSAL_BACKEND == "redis":
        try:
            from trackii.core.redis import get_redis_client
            get_redis_client().ping()
            redis_status = "healthy"
        except Exception as e:
            logger.error(f"Redis health check failed: {e}")
            redis_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "version": settings.VERSION,
        "project": settings.PROJECT_NAME,
        "database": db_status,
        "redis": redis_status,
    }


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Global HTTP exception handler"""
    logger.info(f"HTTP {exc.status_code}: {exc.detail} - {request.url}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code,
        },
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled exceptions"""
    logger.exception(f"Unhandled exception: {exc} - {request.url}")
    return JSONResponse(
        status_code=500,
        content={
            "error": True,
            "message": "Internal server error",
            "status_code": 500,
        },
    )


if __name__ == "__main__":
    uvicorn.run(
        "trackii.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.is_development,
        log_level="info",
    )
