"""
History API endpoints - List, delete, export and import watch history.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Depends, File, Response, UploadFile, status

from ..config import settings
from ..core.errors import MalformedHistory
from ..models import SessionRecord
from ..state import FocusFlowState, get_state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=List[SessionRecord])
async def list_history(state: FocusFlowState = Depends(get_state)):
    """Get all history entries, most recent first."""
    return state.store.records


@router.get("/export")
async def export_history(state: FocusFlowState = Depends(get_state)):
    """Download the history as a JSON file."""
    return Response(
        content=state.controller.export_history(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{settings.export_filename}"'},
    )


@router.post("/import")
async def import_history(
    file: UploadFile = File(...),
    state: FocusFlowState = Depends(get_state)
):
    """
    Replace the history with an uploaded JSON export.
    The import is all-or-nothing: a malformed file leaves the history unchanged.

    Raises:
        400 if the file is not a JSON array of history entries
    """
    content = await file.read()
    try:
        count = await state.controller.import_history(content)
    except MalformedHistory as e:
        logger.warning(f"Rejected history import {file.filename}: {e.message}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    return {"imported": count, "filename": file.filename}


@router.delete("/{record_id}")
async def delete_history_entry(record_id: str, state: FocusFlowState = Depends(get_state)):
    """Delete one history entry. Deleting the active entry also closes it."""
    deleted = await state.controller.delete_record(record_id)
    return {"deleted": deleted, "record_id": record_id}
