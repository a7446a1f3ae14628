"""API module."""

from .session import router as session_router
from .history import router as history_router
from .studio import router as studio_router

__all__ = ['session_router', 'history_router', 'studio_router']
