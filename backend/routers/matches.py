from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, Response

from backend.core.config import settings
from backend.models.like import LikeCreate, LikeOut, LikerOut
from backend.models.match import MatchCheckOut, MatchDetailOut, MatchListItem
from backend.routers.deps import CurrentUserIdDep, SessionDep
from backend.services.like_service import record_like
from backend.services.match_service import (
    get_counterpart,
    is_matched,
    list_matches_for_user,
)
from backend.services.visibility_service import get_visible_profile, list_likers

router = APIRouter(prefix="/matches", tags=["matches"])


@router.get("/check", response_model=MatchCheckOut)
def check_match(
    user_id: Annotated[int, Query(alias="userId")],
    current_id: CurrentUserIdDep,
    session: SessionDep,
) -> MatchCheckOut:
    lookup = is_matched(session, current_id, user_id)
    return MatchCheckOut(is_matched=lookup.is_matched, match_id=lookup.match_id)


@router.post("/like", response_model=LikeOut)
def like_user(
    payload: LikeCreate,
    current_id: CurrentUserIdDep,
    session: SessionDep,
) -> LikeOut:
    outcome = record_like(session, current_id, payload.liked_id)
    return LikeOut(matched=outcome.matched, match_id=outcome.match_id)


@router.get("/likers", response_model=list[LikerOut])
def list_my_likers(current_id: CurrentUserIdDep, session: SessionDep) -> list[LikerOut]:
    return list_likers(session, current_id, limit=settings.likers_limit)


@router.get("", response_model=list[MatchListItem])
def list_my_matches(
    current_id: CurrentUserIdDep,
    session: SessionDep,
    response: Response,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[MatchListItem]:
    total_count, items = list_matches_for_user(
        session,
        current_id,
        limit=limit,
        offset=offset,
    )
    response.headers["X-Total-Count"] = str(total_count)
    return items


@router.get("/{match_id}", response_model=MatchDetailOut)
def get_match_detail(
    match_id: int,
    current_id: CurrentUserIdDep,
    session: SessionDep,
) -> MatchDetailOut:
    other_id = get_counterpart(session, match_id, current_id)
    profile = get_visible_profile(session, current_id, other_id)
    return MatchDetailOut(id=match_id, other_id=other_id, user=profile.user)
