"""
AI Studio API endpoints - Trigger and poll study-aid generation for the active session.
"""

from fastapi import APIRouter, Depends, status

from ..models import StudyAidKind
from ..state import FocusFlowState, get_state

router = APIRouter(prefix="/studio", tags=["studio"])


@router.get("")
async def get_studio_state(state: FocusFlowState = Depends(get_state)):
    """Current enrichment state: idle, requesting, ready (with content) or failed (with reason)."""
    return state.coordinator.describe()


@router.post("/generate/{kind}", status_code=status.HTTP_202_ACCEPTED)
async def generate_study_aid(kind: StudyAidKind, state: FocusFlowState = Depends(get_state)):
    """
    Start generating a study plan, quiz or note summary.

    The call returns immediately; poll GET /studio for the result. A trigger
    while a request is in flight, or without an active session, is ignored
    and reported with accepted=false.
    """
    task = state.coordinator.generate(kind)
    return {"accepted": task is not None, "state": state.coordinator.describe()}
