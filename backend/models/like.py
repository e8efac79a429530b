from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Index,
    UniqueConstraint,
    desc,
)
from sqlmodel import Field, SQLModel

from backend.core.clock import utc_now
from backend.models.user import UserSummary


class Like(SQLModel, table=True):
    __tablename__ = "like"
    __table_args__ = (
        UniqueConstraint("liker_id", "liked_id", name="uq_like_liker_liked"),
        CheckConstraint("liker_id <> liked_id", name="ck_like_no_self_like"),
        Index("ix_like_liked_id_created_at_desc", "liked_id", desc("created_at")),
    )

    id: int | None = Field(default=None, primary_key=True)
    liker_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    liked_id: int = Field(foreign_key="user.id", nullable=False)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class LikeCreate(SQLModel):
    liked_id: int


class LikeOut(SQLModel):
    ok: bool = True
    matched: bool
    match_id: int | None = None


class LikerOut(SQLModel):
    user: UserSummary
    liked_at: datetime
