"""
History Store - Owns the ordered watch history and keeps it durable.

The collection is ordered by descending lastPlayed and holds at most one
record per canonical video ID. Canonical IDs are never stored: they are
re-derived from each record's URL whenever identities are compared.
Every successful mutation writes the whole collection through the storage
backend (write-through, no batching).
"""

import asyncio
import json
import logging
from typing import Any, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from .errors import MalformedHistory, PersistenceFailure
from .identity import resolve_video_id
from ..models.history import SessionRecord
from ..storage.interface import StorageInterface

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "focusflow_history.json"


def _normalize(records: Iterable[SessionRecord]) -> List[SessionRecord]:
    """
    Order by recency and collapse duplicates.

    The sort is stable, so among equal timestamps earlier entries stay first.
    When two records share a canonical video ID (or a record id) only the first,
    i.e. most recent, survives.
    """
    ordered = sorted(records, key=lambda r: r.last_played, reverse=True)
    seen_ids = set()
    seen_videos = set()
    result = []
    for record in ordered:
        video_id = resolve_video_id(record.source_url)
        if record.record_id in seen_ids or (video_id and video_id in seen_videos):
            continue
        seen_ids.add(record.record_id)
        if video_id:
            seen_videos.add(video_id)
        result.append(record)
    return result


def validate_records(items: Any) -> List[SessionRecord]:
    """
    Validate a sequence of SessionRecord-shaped values.

    Args:
        items: List of dicts in wire shape, or SessionRecord instances

    Returns:
        Normalized list of records

    Raises:
        MalformedHistory: If items is not a list or any entry is invalid
    """
    if not isinstance(items, (list, tuple)):
        raise MalformedHistory(
            f"Invalid JSON file: expected a list of history entries, got {type(items).__name__}"
        )

    records = []
    for index, item in enumerate(items):
        if isinstance(item, SessionRecord):
            records.append(item)
            continue
        if not isinstance(item, dict):
            raise MalformedHistory(f"Invalid JSON file: entry {index} is not an object")
        try:
            records.append(SessionRecord.model_validate(item))
        except ValidationError as e:
            raise MalformedHistory(f"Invalid JSON file: entry {index} is malformed ({e.error_count()} errors)") from e

    return _normalize(records)


def parse_history(data: bytes | str) -> List[SessionRecord]:
    """Decode a serialized history document."""
    try:
        items = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedHistory(f"Invalid JSON file: {e}") from e
    return validate_records(items)


class HistoryStore:
    """
    Ordered, deduplicated collection of SessionRecords.
    Knows nothing about which record is active; that is the Session Controller's job.
    """

    def __init__(self, storage: StorageInterface, key: str = DEFAULT_HISTORY_KEY):
        """
        Initialize an empty store.

        Args:
            storage: Durable storage backend
            key: Fixed key the whole history is written under
        """
        self.storage = storage
        self.key = key
        self._records: List[SessionRecord] = []
        self._write_lock = asyncio.Lock()
        self.persistence_error: Optional[PersistenceFailure] = None

    @property
    def records(self) -> List[SessionRecord]:
        """Snapshot of the collection, most recent first."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def get(self, record_id: str) -> Optional[SessionRecord]:
        for record in self._records:
            if record.record_id == record_id:
                return record
        return None

    def find_by_canonical_id(self, video_id: Optional[str]) -> Optional[SessionRecord]:
        """Return the first record whose URL resolves to video_id."""
        if not video_id:
            return None
        for record in self._records:
            if resolve_video_id(record.source_url) == video_id:
                return record
        return None

    async def upsert(self, record: SessionRecord) -> SessionRecord:
        """
        Insert or replace a record and move it to the front, then persist.

        A stored record with the same canonical video ID, or the same record id,
        is replaced; the stored record id wins so ids stay stable.

        Args:
            record: New value for the record

        Returns:
            SessionRecord: The value actually stored
        """
        stored = self.apply_upsert(record)
        await self.flush()
        return stored

    async def remove(self, record_id: str) -> bool:
        """Delete a record by id and persist. Returns False if it was not present."""
        removed = self.apply_remove(record_id)
        if removed:
            await self.flush()
        return removed

    async def replace_all(self, records: Sequence[Any]) -> List[SessionRecord]:
        """
        Replace the whole collection (used by import) and persist.

        Raises:
            MalformedHistory: If records is not a well-formed sequence; the store is untouched
        """
        self.apply_replace_all(records)
        await self.flush()
        return self.records

    # apply_* change memory only and never suspend; follow them with flush().

    def apply_upsert(self, record: SessionRecord) -> SessionRecord:
        video_id = resolve_video_id(record.source_url)
        existing = self.find_by_canonical_id(video_id)
        if existing is not None and existing.record_id != record.record_id:
            record = record.model_copy(update={"record_id": existing.record_id})

        remaining = [
            r for r in self._records
            if r.record_id != record.record_id
            and not (video_id and resolve_video_id(r.source_url) == video_id)
        ]
        # Stable sort keeps the new record ahead of others with the same timestamp
        self._records = sorted([record, *remaining], key=lambda r: r.last_played, reverse=True)

        logger.debug(
            f"Upserted history record {record.record_id}",
            extra={"extra_fields": {"record_id": record.record_id, "video_id": video_id,
                                    "replaced": existing is not None, "size": len(self._records)}}
        )
        return record

    def apply_remove(self, record_id: str) -> bool:
        remaining = [r for r in self._records if r.record_id != record_id]
        if len(remaining) == len(self._records):
            return False

        self._records = remaining
        logger.info(f"Removed history record {record_id}")
        return True

    def apply_replace_all(self, records: Sequence[Any]) -> None:
        # Validate before assigning so a malformed input leaves the store untouched
        validated = validate_records(records)
        self._records = validated
        logger.info(f"History replaced with {len(validated)} records")

    def serialize(self) -> str:
        """Serialize the collection as a JSON array in wire shape."""
        return json.dumps([r.to_wire() for r in self._records], ensure_ascii=False)

    def hydrate(self, data: bytes | str) -> None:
        """
        Load the collection from a serialized document without persisting.

        Raises:
            MalformedHistory: On corrupt or non-array input; the current collection is kept
        """
        self._records = parse_history(data)

    async def load(self) -> None:
        """Hydrate from durable storage at startup. Absent history is an empty history."""
        try:
            content = await self.storage.load(self.key)
        except PersistenceFailure as e:
            self.persistence_error = e
            logger.error(f"History could not be read, starting empty: {e}")
            return

        if content is None:
            logger.info("No saved history found, starting empty")
            return

        try:
            self.hydrate(content)
        except MalformedHistory as e:
            logger.error(f"Saved history is malformed, starting empty: {e}")
            return

        logger.info(f"Loaded {len(self._records)} history records")

    async def flush(self) -> None:
        """Write the current collection. Failures are logged and remembered, never raised."""
        async with self._write_lock:
            # Serialize inside the lock so the last write always carries the latest state
            payload = self.serialize()
            saved = await self.storage.save(self.key, payload)

        if saved:
            self.persistence_error = None
            return

        self.persistence_error = PersistenceFailure(f"Could not write {self.key}")
        logger.error(
            "History write failed, keeping changes in memory only",
            extra={"extra_fields": {"key": self.key, "size": len(self._records)}}
        )
