from __future__ import annotations

from fastapi import APIRouter

from backend.models.video_session import PastSessionOut
from backend.routers.deps import CurrentUserIdDep, SessionDep
from backend.services.visibility_service import list_past_sessions

router = APIRouter(prefix="/video", tags=["video"])


@router.get("/sessions/past", response_model=list[PastSessionOut])
def list_my_past_sessions(
    current_id: CurrentUserIdDep,
    session: SessionDep,
) -> list[PastSessionOut]:
    return list_past_sessions(session, current_id)
