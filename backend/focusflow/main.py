"""
FocusFlow - Main FastAPI Application
"""

import logging
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from .config import settings
from .api import session_router, history_router, studio_router
from .core.logging_config import setup_logging
from .middleware import RequestLoggingMiddleware
from .state import FocusFlowState, build_state, get_state

# Logger will be initialized after setup_logging() is called
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    setup_logging(settings)

    state = build_state(settings)
    await state.store.load()
    app.state.focusflow = state

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Storage path: {settings.local_storage_path}")
    logger.info(f"History entries: {len(state.store)}")
    yield
    # Shutdown
    await state.coordinator.wait_idle()
    logger.info(f"Shutting down {settings.app_name}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Distraction-free YouTube study player with deduplicated watch history and AI study aids",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware (after CORS)
if settings.log_api_requests:
    app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(session_router)
app.include_router(history_router)
app.include_router(studio_router)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    """Last-resort boundary: log and render a fallback notice instead of a bare 500."""
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Something went wrong.", "detail": str(exc)},
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "message": "Welcome to FocusFlow - paste a YouTube link to focus"
    }


@app.get("/health")
async def health_check(state: FocusFlowState = Depends(get_state)):
    """Health check endpoint, including whether history writes are reaching disk."""
    return {
        "status": "healthy",
        "storage": "degraded" if state.store.persistence_error else "ok",
        "storage_error": state.store.persistence_error.message if state.store.persistence_error else None,
        "history_size": len(state.store),
        "version": settings.app_version
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "focusflow.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.debug
    )
