from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest
from sqlmodel import Session

from backend.core.errors import InvalidIdentifier, NotFound
from backend.models.like import Like
from backend.models.match import Match
from backend.models.profile_media import MediaType, ProfileMedia
from backend.models.video_session import VideoSession, VideoSessionState
from backend.services.block_service import block
from backend.services.visibility_service import (
    can_view,
    filter_listing,
    get_visible_profile,
    list_likers,
    list_past_sessions,
)


def test_block_hides_both_directions(
    session: Session, make_users: Callable[..., list[int]]
) -> None:
    make_users(4, 10)
    assert can_view(session, 10, 4)

    block(session, 10, 4)

    assert not can_view(session, 10, 4)
    assert not can_view(session, 4, 10)


def test_user_can_always_view_self(session: Session) -> None:
    assert can_view(session, 5, 5)


def test_filter_listing_is_stable(
    session: Session, make_users: Callable[..., list[int]]
) -> None:
    make_users(1, 5)
    block(session, 1, 5)

    assert filter_listing(session, 1, [5, 2, 9, 2]) == [2, 9, 2]
    assert filter_listing(session, 1, []) == []


def test_filter_listing_rejects_bad_candidates(session: Session) -> None:
    with pytest.raises(InvalidIdentifier):
        filter_listing(session, 1, [2, 0])


def test_likers_newest_first_without_blocked(
    session: Session, make_users: Callable[..., list[int]]
) -> None:
    make_users(1, 2, 3, 4)
    now = datetime.now(timezone.utc)
    session.add(Like(liker_id=2, liked_id=1, created_at=now - timedelta(minutes=30)))
    session.add(Like(liker_id=3, liked_id=1, created_at=now - timedelta(minutes=10)))
    session.add(Like(liker_id=4, liked_id=1, created_at=now))
    session.add(Like(liker_id=1, liked_id=2, created_at=now))
    session.add(ProfileMedia(user_id=2, type=MediaType.video, url="/v/2", sort_order=0))
    session.add(ProfileMedia(user_id=2, type=MediaType.photo, url="/p/2", sort_order=1))
    session.commit()
    block(session, 1, 4)

    likers = list_likers(session, 1, limit=50)

    assert [liker.user.id for liker in likers] == [3, 2]
    assert likers[1].user.photo == "/p/2"
    assert likers[0].user.photo is None

    assert [liker.user.id for liker in list_likers(session, 1, limit=1)] == [3]


def test_past_sessions_exclude_blocked_counterparts(
    session: Session, make_users: Callable[..., list[int]]
) -> None:
    make_users(1, 2, 3, 4)
    visible = Match(user_a_id=1, user_b_id=2)
    hidden = Match(user_a_id=1, user_b_id=3)
    unrelated = Match(user_a_id=2, user_b_id=4)
    session.add_all([visible, hidden, unrelated])
    session.commit()

    now = datetime.now(timezone.utc)
    session.add_all(
        [
            VideoSession(
                match_id=visible.id,
                caller_id=1,
                callee_id=2,
                state=VideoSessionState.ended,
                started_at=now - timedelta(days=2),
            ),
            VideoSession(
                match_id=visible.id,
                caller_id=2,
                callee_id=1,
                state=VideoSessionState.pending,
            ),
            VideoSession(
                match_id=visible.id,
                caller_id=2,
                callee_id=1,
                state=VideoSessionState.ended,
                started_at=now,
            ),
            VideoSession(match_id=hidden.id, caller_id=1, callee_id=3, started_at=now),
            VideoSession(match_id=unrelated.id, caller_id=2, callee_id=4, started_at=now),
        ]
    )
    session.commit()
    block(session, 3, 1)

    sessions = list_past_sessions(session, 1)

    assert [item.other_user_id for item in sessions] == [2, 2, 2]
    assert sessions[0].started_at is not None
    assert sessions[1].started_at is not None
    assert sessions[0].started_at > sessions[1].started_at
    assert sessions[2].started_at is None


def test_profile_media_in_display_order(
    session: Session, make_users: Callable[..., list[int]]
) -> None:
    make_users(1, 2)
    session.add(ProfileMedia(user_id=2, type=MediaType.photo, url="/c", sort_order=1))
    session.add(ProfileMedia(user_id=2, type=MediaType.video, url="/a", sort_order=0))
    session.add(ProfileMedia(user_id=2, type=MediaType.photo, url="/b", sort_order=0))
    session.commit()

    profile = get_visible_profile(session, 1, 2)

    assert [item.url for item in profile.media] == ["/a", "/b", "/c"]
    assert profile.user.photo == "/b"


def test_blocked_profile_reads_as_missing(
    session: Session, make_users: Callable[..., list[int]]
) -> None:
    make_users(1, 2)
    block(session, 2, 1)

    with pytest.raises(NotFound):
        get_visible_profile(session, 1, 2)
    with pytest.raises(NotFound):
        get_visible_profile(session, 1, 77)
