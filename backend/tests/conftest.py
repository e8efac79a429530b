from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from backend.models import (  # noqa: F401
    blocker,
    like,
    match,
    profile_media,
    video_session,
)
from backend.models.user import User


@pytest.fixture
def session() -> Iterator[Session]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as db_session:
        yield db_session
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def make_users(session: Session) -> Callable[..., list[int]]:
    def _make(*user_ids: int) -> list[int]:
        for user_id in user_ids:
            session.add(
                User(
                    id=user_id,
                    email=f"user{user_id}@example.com",
                    name=f"User {user_id}",
                    password_hash="not-a-real-hash",
                )
            )
        session.commit()
        return list(user_ids)

    return _make
