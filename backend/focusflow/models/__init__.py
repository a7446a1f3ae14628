"""Models module."""

from .history import SessionRecord, SessionUpdate, LoadLinkRequest, ActiveSessionView
from .enrichment import StudyAidKind, EnrichmentState, Idle, Requesting, Ready, Failed

__all__ = [
    'SessionRecord', 'SessionUpdate', 'LoadLinkRequest', 'ActiveSessionView',
    'StudyAidKind', 'EnrichmentState', 'Idle', 'Requesting', 'Ready', 'Failed',
]
