from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime
from sqlalchemy.types import Enum as SAEnum
from sqlmodel import Field, SQLModel

from backend.core.clock import utc_now


class VideoSessionState(str, Enum):
    pending = "pending"
    active = "active"
    ended = "ended"


class VideoSession(SQLModel, table=True):
    __tablename__ = "video_session"

    id: int | None = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", nullable=False, index=True)
    caller_id: int = Field(foreign_key="user.id", nullable=False)
    callee_id: int = Field(foreign_key="user.id", nullable=False)
    state: VideoSessionState = Field(
        default=VideoSessionState.pending,
        sa_column=Column(
            SAEnum(VideoSessionState, name="videosessionstate"),
            nullable=False,
            server_default="pending",
        ),
    )
    started_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
    ended_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class PastSessionOut(SQLModel):
    id: int
    match_id: int
    other_user_id: int
    caller_id: int
    callee_id: int
    state: VideoSessionState
    started_at: datetime | None = None
    ended_at: datetime | None = None
