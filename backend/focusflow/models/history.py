"""
History Models - Defines watch-history records and the shapes exchanged with the player UI.

Field aliases are the wire names used by the browser client and by exported
history files (id, url, lastPlayed, ...).
"""

import time
from typing import Optional
from pydantic import BaseModel, Field


def now_millis() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


class SessionRecord(BaseModel):
    """One watched or queued video."""
    record_id: str = Field(..., alias="id", min_length=1)
    source_url: str = Field(..., alias="url")
    title: str = ""
    last_played: int = Field(default_factory=now_millis, alias="lastPlayed", ge=0)  # epoch millis
    progress: float = Field(0.0, ge=0)  # seconds
    duration: float = Field(0.0, ge=0)  # seconds
    completed: bool = False
    notes: str = ""

    class Config:
        populate_by_name = True

    def to_wire(self) -> dict:
        """Dump using the wire field names."""
        return self.model_dump(by_alias=True)


class SessionUpdate(BaseModel):
    """Partial update for the active session - all fields optional."""
    title: Optional[str] = None
    notes: Optional[str] = None
    progress: Optional[float] = Field(None, ge=0)
    duration: Optional[float] = Field(None, ge=0)
    completed: Optional[bool] = None


class LoadLinkRequest(BaseModel):
    """Link pasted by the user."""
    url: str


class ActiveSessionView(BaseModel):
    """What the player surface needs to render the active session."""
    session: Optional[SessionRecord] = None
    video_id: Optional[str] = None
    embed_url: Optional[str] = None
    created: bool = False
