"""Core module - identity resolution, history synchronization and AI enrichment."""

from .errors import (
    FocusFlowError, InvalidLink, RecordNotFound, MalformedHistory, EnrichmentFailure, PersistenceFailure,
)
from .identity import resolve_video_id, watch_url, embed_url
from .history_store import HistoryStore
from .session_controller import SessionController, LoadResult
from .enrichment import EnrichmentCoordinator

__all__ = [
    'FocusFlowError', 'InvalidLink', 'RecordNotFound', 'MalformedHistory',
    'EnrichmentFailure', 'PersistenceFailure',
    'resolve_video_id', 'watch_url', 'embed_url',
    'HistoryStore', 'SessionController', 'LoadResult', 'EnrichmentCoordinator',
]
