from __future__ import annotations

from fastapi import APIRouter

from backend.models.profile_media import ProfileMediaOut
from backend.routers.deps import CurrentUserIdDep, SessionDep
from backend.schemas.profile import ProfileOut
from backend.services.visibility_service import get_visible_profile

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/{user_id}", response_model=ProfileOut)
def get_profile(
    user_id: int,
    current_id: CurrentUserIdDep,
    session: SessionDep,
) -> ProfileOut:
    profile = get_visible_profile(session, current_id, user_id)
    return ProfileOut(
        user=profile.user,
        media=[
            ProfileMediaOut.model_validate(item, from_attributes=True)
            for item in profile.media
        ],
    )
