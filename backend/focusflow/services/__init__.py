"""Services module - provides external service integrations."""

from .study_aid import StudyAidGenerator

__all__ = ['StudyAidGenerator']
