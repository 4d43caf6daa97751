"""Studio routes: the page's input screen, busy flag and result display."""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from ...agents.base import DataUrlFormatError
from ...services.downloads import download_filename
from ...services.images import UploadRejectedError
from ...services.studio import DownloadNotAvailableError, StudioSession, StudioStateError
from ..dependencies import LogoAgentDep, SessionManagerDep
from ..schemas import StudioInputUpdate, StudioSnapshot
from ..security import RateLimitDep, SessionIdDep
from ..services.session_manager import SessionManager, SessionNotFoundError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/studio/sessions")


def snapshot(session: StudioSession) -> StudioSnapshot:
    """Serialize a session for the page."""
    brand_name = getattr(session.state, "brand_name", "")
    return StudioSnapshot(
        session_id=session.id,
        mode=session.inputs.mode,
        brand_name=session.inputs.brand_name,
        prompt=session.inputs.prompt,
        uploaded_image=session.inputs.uploaded_image,
        validation_message=session.validation_message,
        state=session.state,
        downloads=[
            download_filename(brand_name, i)
            for i in range(1, len(session.result_images()) + 1)
        ],
    )


def load_session(sessions: SessionManager, session_id: str) -> StudioSession:
    try:
        return sessions.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session '{session_id}' not found",
        ) from None


@router.post("", response_model=StudioSnapshot, status_code=status.HTTP_201_CREATED)
async def create_session(sessions: SessionManagerDep, agent: LogoAgentDep, _: RateLimitDep):
    """Open a new studio on the input screen."""
    session = await sessions.create(agent)
    return snapshot(session)


@router.get("/{session_id}", response_model=StudioSnapshot)
async def get_session(session_id: SessionIdDep, sessions: SessionManagerDep):
    """Current inputs and state of a session."""
    return snapshot(load_session(sessions, session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: SessionIdDep, sessions: SessionManagerDep):
    """Forget a session."""
    try:
        await sessions.delete(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session '{session_id}' not found",
        ) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{session_id}", response_model=StudioSnapshot)
async def update_inputs(
    session_id: SessionIdDep,
    update: StudioInputUpdate,
    sessions: SessionManagerDep,
    _: RateLimitDep,
):
    """Apply edits from the input screen."""
    session = load_session(sessions, session_id)
    try:
        session.update_inputs(
            mode=update.mode,
            brand_name=update.brand_name,
            prompt=update.prompt,
            uploaded_image=update.uploaded_image,
            clear_image=update.clear_image,
        )
    except StudioStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except UploadRejectedError as e:
        code = (
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE if e.too_large else status.HTTP_400_BAD_REQUEST
        )
        raise HTTPException(status_code=code, detail=str(e)) from e
    except DataUrlFormatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return snapshot(session)


@router.post("/{session_id}/generate", response_model=StudioSnapshot)
async def generate(session_id: SessionIdDep, sessions: SessionManagerDep, _: RateLimitDep):
    """Generate logos. Returns immediately with the busy state if a request is in flight."""
    session = load_session(sessions, session_id)
    await session.generate()
    return snapshot(session)


@router.post("/{session_id}/enhance", response_model=StudioSnapshot)
async def enhance(session_id: SessionIdDep, sessions: SessionManagerDep, _: RateLimitDep):
    """Enhance the uploaded logo. Same busy semantics as generate."""
    session = load_session(sessions, session_id)
    await session.enhance()
    return snapshot(session)


@router.post("/{session_id}/start-over", response_model=StudioSnapshot)
async def start_over(session_id: SessionIdDep, sessions: SessionManagerDep):
    """Clear everything and return to the input screen."""
    session = load_session(sessions, session_id)
    session.start_over()
    return snapshot(session)


@router.get("/{session_id}/downloads/{index}")
async def download(index: int, session_id: SessionIdDep, sessions: SessionManagerDep):
    """Serve one result image as a PNG attachment."""
    session = load_session(sessions, session_id)
    try:
        filename, data = session.download(index)
    except DownloadNotAvailableError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return Response(
        content=data,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
