"""
SafeSpace - Main FastAPI application.

Anonymous mental-health support platform: therapist directory, community board
and real-time anonymous room chat.
"""
from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from safespace import __version__
from safespace.core.api import blog, chat_rooms, health, therapists
from safespace.core.config import settings
from safespace.core.memory.storage import Storage, create_storage
from safespace.core.observability.metrics import RelayMetrics
from safespace.core.websocket.manager import ConnectionRegistry
from safespace.core.websocket.relay import ChatRelay
from safespace.core.websocket.routes import websocket_endpoint

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown."""
    logger.info(
        "SafeSpace binding on %s:%s (storage=%s)",
        settings.api_host,
        settings.api_port,
        type(app.state.storage).__name__,
    )
    yield
    logger.info(
        "SafeSpace shutting down (%d open connections dropped)",
        len(app.state.registry),
    )


def create_app(storage: Optional[Storage] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        storage: record store to serve; defaults to create_storage() from settings
    """
    app = FastAPI(
        title="SafeSpace",
        description="Anonymous mental-health support platform",
        version=__version__,
        lifespan=lifespan,
    )

    registry = ConnectionRegistry()
    metrics = RelayMetrics()
    app.state.storage = storage if storage is not None else create_storage()
    app.state.registry = registry
    app.state.metrics = metrics
    app.state.relay = ChatRelay(
        app.state.storage,
        registry,
        metrics,
        recent_limit=settings.recent_messages_limit,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests. Health checks at DEBUG to reduce log spam."""
        path = request.url.path
        level = logger.debug if path == "/health" else logger.info
        response = await call_next(request)
        level("%s %s - %s", request.method, path, response.status_code)
        return response

    # Error handlers
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render HTTP errors as {"message": ...}."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors with a generic 400."""
        logger.debug("Request validation failed for %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request data"},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error("Unhandled exception: %s", exc, exc_info=True)
        content = {"message": "Internal server error"}
        if settings.debug:
            content["error"] = str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
        )

    # WebSocket for anonymous room chat
    app.add_api_websocket_route("/ws", websocket_endpoint)

    # Include routers
    app.include_router(health.router)
    app.include_router(therapists.router)
    app.include_router(blog.router)
    app.include_router(chat_rooms.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "safespace.core.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
