"""
Error taxonomy for the FocusFlow core.

Controller operations report expected failures as values (see LoadResult);
these classes are what those values carry, and what the store raises for
malformed history documents.
"""

from typing import Optional


class FocusFlowError(Exception):
    """Base class for all FocusFlow domain errors."""

    default_message = "FocusFlow error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidLink(FocusFlowError):
    """No canonical video ID could be resolved from the submitted link."""

    default_message = "Please paste a valid YouTube link."

    def __init__(self, raw_input: Optional[str] = None, message: Optional[str] = None):
        self.raw_input = raw_input
        super().__init__(message)


class RecordNotFound(FocusFlowError):
    """A history entry id is not present in the collection."""

    default_message = "History entry not found."

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"History entry not found: {record_id}")


class MalformedHistory(FocusFlowError):
    """A history document could not be parsed or validated."""

    default_message = "Invalid JSON file."


class EnrichmentFailure(FocusFlowError):
    """The AI study-aid call failed or returned unusable content."""

    default_message = "AI generation failed."


class PersistenceFailure(FocusFlowError):
    """Durable storage could not be read or written."""

    default_message = "History could not be saved."
