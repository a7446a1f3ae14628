"""
Session API endpoints - Load links, pick history entries and edit the active session.
"""

from fastapi import APIRouter, HTTPException, Depends, Response, status

from ..core.errors import RecordNotFound
from ..core.identity import embed_url
from ..core.session_controller import LoadResult, SessionController
from ..models import ActiveSessionView, LoadLinkRequest, SessionUpdate
from ..state import FocusFlowState, get_state

router = APIRouter(prefix="/session", tags=["session"])


def _view(controller: SessionController, created: bool = False) -> ActiveSessionView:
    video_id = controller.active_video_id
    return ActiveSessionView(
        session=controller.active,
        video_id=video_id,
        embed_url=embed_url(video_id) if video_id else None,
        created=created,
    )


def _raise_for(result: LoadResult) -> None:
    if result.ok:
        return
    if isinstance(result.error, RecordNotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.error.message)
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error.message)


@router.get("", response_model=ActiveSessionView)
async def get_active_session(state: FocusFlowState = Depends(get_state)):
    """Get the active session, if any."""
    return _view(state.controller)


@router.post("/load", response_model=ActiveSessionView)
async def load_link(
    request: LoadLinkRequest,
    response: Response,
    state: FocusFlowState = Depends(get_state)
):
    """
    Load a pasted link: resume its history entry or create a new one.

    Returns:
        The active session (201 when a new history entry was created)

    Raises:
        400 if the link has no recognizable video ID
    """
    result = await state.controller.load_link(request.url)
    _raise_for(result)
    if result.created:
        response.status_code = status.HTTP_201_CREATED
    return _view(state.controller, created=result.created)


@router.post("/select/{record_id}", response_model=ActiveSessionView)
async def select_existing(record_id: str, state: FocusFlowState = Depends(get_state)):
    """Activate an entry picked from the history list."""
    result = await state.controller.select_existing(record_id)
    _raise_for(result)
    return _view(state.controller)


@router.patch("", response_model=ActiveSessionView)
async def update_active_session(update: SessionUpdate, state: FocusFlowState = Depends(get_state)):
    """
    Apply notes/progress/title changes to the active session.
    Without an active session nothing changes and session is null.
    """
    await state.controller.apply_update(update)
    return _view(state.controller)
