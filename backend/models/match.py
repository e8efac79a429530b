from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from backend.core.clock import utc_now
from backend.models.user import UserSummary


class Match(SQLModel, table=True):
    """Mutual match, stored once per canonical pair (user_a_id < user_b_id)."""

    __tablename__ = "match"
    __table_args__ = (
        UniqueConstraint("user_a_id", "user_b_id", name="uq_match_users"),
        CheckConstraint("user_a_id < user_b_id", name="ck_match_canonical_order"),
    )

    id: int | None = Field(default=None, primary_key=True)
    user_a_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    user_b_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    last_chat_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )


class MatchCheckOut(SQLModel):
    is_matched: bool
    match_id: int | None = None


class MatchListItem(SQLModel):
    match_id: int
    user: UserSummary
    created_at: datetime
    last_chat_at: datetime | None = None


class MatchDetailOut(SQLModel):
    id: int
    other_id: int
    user: UserSummary
