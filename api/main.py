"""Main FastAPI application."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pymongo.errors import PyMongoError
from api import user_routes
from api.dependencies import open_user_store
from config.settings import Settings, settings
from models.database import close_mongo_connection
from services.errors import TrackerError
from services.user_store import UserStore
from utils.logger import setup_logger

logger = setup_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent
PUBLIC_DIR = BASE_DIR / "public"
INDEX_PAGE = BASE_DIR / "views" / "index.html"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    logger.info("Starting application...")
    owns_store = app.state.user_store is None
    if owns_store:
        app.state.user_store = await open_user_store(app.state.settings)
    logger.info("Application started successfully")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if owns_store:
        await app.state.user_store.close()
        app.state.user_store = None
        await close_mongo_connection()
    logger.info("Application shut down")


def _error_status(app_settings: Settings, status_code: int) -> int:
    # Clients of the original service expect every error with HTTP 200
    return 200 if app_settings.legacy_error_status else status_code


def create_app(user_store: Optional[UserStore] = None, app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the application.

    Args:
        user_store: Store to serve from. When omitted, the store selected by
            settings is opened during startup and closed on shutdown.
        app_settings: Overrides the module level settings
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description="Register users and keep a log of their exercises",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.user_store = user_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(request: Request, exc: TrackerError):
        logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=_error_status(app_settings, exc.status_code),
            content={"error": exc.message},
        )

    @app.exception_handler(PyMongoError)
    async def database_error_handler(request: Request, exc: PyMongoError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=_error_status(app_settings, 500),
            content={"error": f"Database error: {str(exc)}"},
        )

    app.include_router(user_routes.router)

    if PUBLIC_DIR.is_dir():
        app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

    @app.get("/", include_in_schema=False)
    async def root():
        """Serve the HTML form page."""
        return FileResponse(INDEX_PAGE)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": app_settings.app_name
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
