"""
Session Controller - Owns the active session and routes every change through the History Store.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from .errors import InvalidLink, RecordNotFound
from .history_store import HistoryStore, parse_history
from .identity import resolve_video_id, watch_url
from ..models.history import SessionRecord, SessionUpdate, now_millis

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TITLE = "Focus Session"

ActiveListener = Callable[[Optional[SessionRecord]], None]


@dataclass
class LoadResult:
    """Outcome of loading a link or selecting a history entry."""
    session: Optional[SessionRecord] = None
    error: Optional[Union[InvalidLink, RecordNotFound]] = None
    created: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class SessionController:
    """
    Tracks at most one active SessionRecord.
    Listeners registered with subscribe() are told whenever the active record changes.

    Each operation updates the history and the active record in memory before
    its only suspension point, the storage write, so an overlapping request
    always starts from the latest state.
    """

    def __init__(
        self,
        store: HistoryStore,
        default_title: str = DEFAULT_SESSION_TITLE,
        clock: Callable[[], int] = now_millis,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        """
        Initialize the controller.

        Args:
            store: History store holding all records
            default_title: Title given to newly created records
            clock: Returns the current time in epoch milliseconds
            id_factory: Produces fresh record ids
        """
        self.store = store
        self.default_title = default_title
        self._clock = clock
        self._id_factory = id_factory
        self._active: Optional[SessionRecord] = None
        self._listeners: List[ActiveListener] = []

    @property
    def active(self) -> Optional[SessionRecord]:
        return self._active

    @property
    def active_video_id(self) -> Optional[str]:
        return resolve_video_id(self._active.source_url) if self._active else None

    def subscribe(self, listener: ActiveListener) -> None:
        self._listeners.append(listener)

    def _set_active(self, record: Optional[SessionRecord]) -> None:
        self._active = record
        for listener in self._listeners:
            listener(record)

    def clear(self) -> None:
        """Drop the active session, leaving history untouched."""
        if self._active is not None:
            self._set_active(None)

    async def load_link(self, raw_input: Optional[str]) -> LoadResult:
        """
        Resolve a pasted link and resume or create its session.

        Args:
            raw_input: Link or bare video ID as typed by the user

        Returns:
            LoadResult with the active record, or an InvalidLink error
        """
        video_id = resolve_video_id(raw_input)
        if video_id is None:
            logger.info(f"Rejected link: {raw_input!r}")
            self.clear()
            return LoadResult(error=InvalidLink(raw_input))

        existing = self.store.find_by_canonical_id(video_id)
        if existing is not None:
            return LoadResult(session=await self._resume(existing))

        record = SessionRecord(
            record_id=self._id_factory(),
            source_url=watch_url(video_id),
            title=self.default_title,
            last_played=self._clock(),
        )
        stored = self.store.apply_upsert(record)
        self._set_active(stored)
        await self.store.flush()
        logger.info(
            f"Created session for video {video_id}",
            extra={"extra_fields": {"record_id": stored.record_id, "video_id": video_id}}
        )
        return LoadResult(session=stored, created=True)

    async def select_existing(self, record_id: str) -> LoadResult:
        """Activate a record picked from the history list."""
        record = self.store.get(record_id)
        if record is None:
            self.clear()
            return LoadResult(error=RecordNotFound(record_id))

        if resolve_video_id(record.source_url) is None:
            self.clear()
            return LoadResult(error=InvalidLink(record.source_url))

        return LoadResult(session=await self._resume(record))

    async def _resume(self, record: SessionRecord) -> SessionRecord:
        """Re-activate a stored record, refreshing only its recency."""
        touched = record.model_copy(update={"last_played": self._clock()})
        stored = self.store.apply_upsert(touched)
        self._set_active(stored)
        await self.store.flush()
        logger.info(f"Resumed session {stored.record_id}")
        return stored

    async def apply_update(self, update: SessionUpdate) -> Optional[SessionRecord]:
        """
        Merge field changes into the active record and persist them.

        Args:
            update: Fields to change; unset fields are left alone

        Returns:
            The stored record, or None when no session is active
        """
        if self._active is None:
            logger.debug("Update ignored, no active session")
            return None

        changes = update.model_dump(exclude_unset=True, exclude_none=True)
        changes["last_played"] = self._clock()
        updated = self._active.model_copy(update=changes)
        stored = self.store.apply_upsert(updated)
        self._set_active(stored)
        await self.store.flush()
        return stored

    async def delete_record(self, record_id: str) -> bool:
        """Delete a history entry, deactivating it if it was active."""
        removed = self.store.apply_remove(record_id)
        if self._active is not None and self._active.record_id == record_id:
            self.clear()
        if removed:
            await self.store.flush()
        return removed

    async def import_history(self, data: bytes | str) -> int:
        """
        Replace the history with an imported document.

        The active session is re-bound to the imported record for the same
        video, or cleared if the import does not contain it.

        Raises:
            MalformedHistory: If the document is invalid; nothing changes
        """
        records = parse_history(data)
        self.store.apply_replace_all(records)

        if self._active is not None:
            match = self.store.find_by_canonical_id(self.active_video_id) or self.store.get(self._active.record_id)
            self._set_active(match)
        await self.store.flush()
        return len(self.store)

    def export_history(self) -> str:
        return self.store.serialize()
