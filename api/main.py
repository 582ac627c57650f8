"""
FastAPI application entry point.
App factory with logging middleware, error translation, startup/shutdown events
and router registration.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from typing import Optional
import logging
import time
import sys

from .routers import health, trips
from .config import Settings
from analytics.time import elapsed_ms
from db.client import DatabaseClient
from db.errors import ConfigurationError, DatabaseConnectionError, QueryExecutionError

SERVICE_NAME = "Trip Analytics API"
VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    # Startup
    logger.info(f"Starting {SERVICE_NAME}...")
    logger.info(f"Port: {settings.port}")
    logger.info(f"Database: {settings.db_name}")
    logger.info(f"MongoDB URI configured: {'yes' if settings.mongo_uri else 'no'}")

    try:
        settings.validate()
    except ConfigurationError as e:
        logger.critical(f"Startup failed: {e.message}")
        raise

    yield

    # Shutdown
    logger.info(f"Shutting down {SERVICE_NAME}...")
    await app.state.db_client.disconnect()


def _error(status_code: int, error: str, message: Optional[str] = None) -> JSONResponse:
    content = {"error": error}
    if message is not None:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI):
    """Translate errors into {error, message} JSON bodies."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            logger.info(f"404 - Route not found: {request.url.path}")
            return _error(404, "not found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.error(f"Configuration error: {exc.message}")
        return _error(500, "Configuration error", exc.message)

    @app.exception_handler(DatabaseConnectionError)
    async def connection_error_handler(request: Request, exc: DatabaseConnectionError):
        logger.error(f"Database unavailable: {exc.message}")
        return _error(503, "Database unavailable", exc.message)

    @app.exception_handler(QueryExecutionError)
    async def query_error_handler(request: Request, exc: QueryExecutionError):
        return _error(500, f"Query {exc.query} failed", exc.message)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return _error(500, "Internal server error", str(exc))


def create_app(
    settings: Optional[Settings] = None,
    db_client: Optional[DatabaseClient] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Runtime configuration (defaults to Settings.from_env())
        db_client: Connection manager (defaults to a DatabaseClient for settings)

    Returns:
        Configured FastAPI instance; the client lives on app.state.db_client
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title=SERVICE_NAME,
        description="Read-only aggregations over the trips collection.",
        version=VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.db_client = db_client or DatabaseClient(settings)

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all incoming requests with timing."""
        start_time = time.time()

        logger.info(f"→ {request.method} {request.url.path}")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"Request failed: {str(e)}", exc_info=True)
            raise

        logger.info(
            f"← {request.method} {request.url.path} "
            f"[{response.status_code}] {elapsed_ms(start_time, time.time()):.2f}ms"
        )

        return response

    register_exception_handlers(app)

    # Register routers
    app.include_router(health.router, prefix="/api/health", tags=["Health"])
    app.include_router(trips.router, prefix="/api/trips", tags=["Trips"])

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": SERVICE_NAME,
            "version": VERSION,
            "status": "running",
            "docs": "/docs",
            "health": "/api/health",
            "endpoints": [
                "/api/trips/1.1",
                "/api/trips/1.2",
                "/api/trips/1.3",
                "/api/trips/1.4",
                "/api/trips/1.5"
            ]
        }

    return app


def main():
    """Serve the API with uvicorn; MONGODB_URI, DB_NAME and PORT are required."""
    settings = Settings.from_env()

    try:
        settings.validate(require_port=True)
    except ConfigurationError as e:
        logger.critical(e.message)
        sys.exit(1)

    import uvicorn
    uvicorn.run("api.main:app", host=settings.host, port=settings.port)


_settings = Settings.from_env()
configure_logging(_settings.log_level)
app = create_app(_settings)


if __name__ == "__main__":
    main()
