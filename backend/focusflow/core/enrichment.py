"""
Enrichment Coordinator - Single-flight AI study-aid requests for the active session.

Each request is stamped with the record it was issued for. A result is only
published if that exact request is still current and its record is still
active; anything else is discarded when it arrives.
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Set

from .errors import EnrichmentFailure
from .identity import resolve_video_id
from .session_controller import SessionController
from ..models.enrichment import (
    EnrichmentState, Failed, Idle, Ready, Requesting, StudyAidKind, describe_state,
)
from ..models.history import SessionRecord
from ..services.study_aid import StudyAidGenerator

logger = logging.getLogger(__name__)


class EnrichmentCoordinator:
    """Drives Idle -> Requesting -> Ready | Failed for the active session."""

    def __init__(self, controller: SessionController, generator: StudyAidGenerator):
        self.controller = controller
        self.generator = generator
        self._state: EnrichmentState = Idle()
        self._tasks: Set[asyncio.Task] = set()
        self._record_id: Optional[str] = controller.active.record_id if controller.active else None
        controller.subscribe(self._on_active_changed)

    @property
    def state(self) -> EnrichmentState:
        return self._state

    def describe(self) -> Dict[str, Any]:
        return describe_state(self._state)

    def _on_active_changed(self, record: Optional[SessionRecord]) -> None:
        record_id = record.record_id if record else None
        if record_id == self._record_id:
            return
        self._record_id = record_id
        if not isinstance(self._state, Idle):
            logger.debug(f"Active session changed, enrichment reset from {self._state.status}")
        self._state = Idle()

    def generate(self, kind: StudyAidKind | str) -> Optional[asyncio.Task]:
        """
        Start generating a study aid for the active session.

        Ignored when nothing is active or a request is already in flight.
        Must be called from a running event loop.

        Args:
            kind: "plan", "quiz" or "summary"

        Returns:
            The task running the request, or None if the trigger was ignored
        """
        kind = StudyAidKind(kind)
        record = self.controller.active
        if record is None:
            logger.debug("Enrichment ignored, no active session")
            return None
        if isinstance(self._state, Requesting):
            logger.debug(f"Enrichment ignored, {self._state.kind.value} already in flight")
            return None

        request = Requesting(record_id=record.record_id, kind=kind)
        self._state = request
        title = record.title or resolve_video_id(record.source_url) or record.source_url

        task = asyncio.get_running_loop().create_task(self._run(request, title, record.notes))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info(
            f"Enrichment requested: {kind.value}",
            extra={"extra_fields": {"record_id": record.record_id, "kind": kind.value}}
        )
        return task

    async def _run(self, request: Requesting, title: str, notes: str) -> None:
        try:
            content = await self.generator.generate(request.kind, title, notes)
            outcome: EnrichmentState = Ready(record_id=request.record_id, kind=request.kind, content=content)
        except EnrichmentFailure as e:
            outcome = Failed(record_id=request.record_id, kind=request.kind, reason=e.message)
        except Exception as e:
            logger.error(f"Unexpected enrichment error: {str(e)}", exc_info=True)
            outcome = Failed(record_id=request.record_id, kind=request.kind, reason=EnrichmentFailure.default_message)

        if not self._is_current(request):
            logger.info(
                f"Discarded stale {request.kind.value} result",
                extra={"extra_fields": {"record_id": request.record_id, "kind": request.kind.value}}
            )
            return

        self._state = outcome
        logger.info(f"Enrichment {outcome.status}: {request.kind.value}")

    def _is_current(self, request: Requesting) -> bool:
        active = self.controller.active
        return (
            self._state is request
            and active is not None
            and active.record_id == request.record_id
        )

    async def wait_idle(self) -> None:
        """Wait for in-flight requests to finish (used at shutdown and in tests)."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
