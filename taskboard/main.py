import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, load_settings
from .logging_setup import setup_logging
from .routers import tasks
from .stores import build_store

logger = logging.getLogger(__name__)

API_FALLBACK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the task API application."""
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, settings.log_file)
        # Open the store before accepting requests, close it on shutdown
        app.state.store = build_store(settings.database_url)
        try:
            yield
        finally:
            app.state.store.close()

    app = FastAPI(
        title="Task Tracker API",
        description="CRUD API for tasks",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            {"error": str(exc.detail)},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": _validation_message(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"error": str(exc) or "Internal server error"}, status_code=500)

    # Include routers
    app.include_router(tasks.router, prefix="/api", tags=["tasks"])

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    @app.api_route("/api/{rest:path}", methods=API_FALLBACK_METHODS, include_in_schema=False)
    def api_not_found(rest: str):
        return JSONResponse({"error": "Not found"}, status_code=404)

    @app.get("/{full_path:path}", include_in_schema=False)
    def spa_fallback(full_path: str):
        """Serve the client entry page for any non-API path."""
        if full_path == "api":
            return JSONResponse({"error": "Not found"}, status_code=404)
        if settings.static_dir:
            index = Path(settings.static_dir) / "index.html"
            if index.is_file():
                return FileResponse(index)
        return JSONResponse({"error": "Not found"}, status_code=404)

    return app


app = create_app()
