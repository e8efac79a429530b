from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, Index, UniqueConstraint
from sqlmodel import Field, SQLModel

from backend.core.clock import utc_now


class Blocker(SQLModel, table=True):
    """Directional block row: blocker_id hides blocked_id (and vice versa)."""

    __tablename__ = "blocker"
    __table_args__ = (
        UniqueConstraint("blocker_id", "blocked_id", name="uq_blocker_pair"),
        CheckConstraint("blocker_id <> blocked_id", name="ck_blocker_no_self_block"),
        Index("ix_blocker_blocked_blocker", "blocked_id", "blocker_id"),
    )

    id: int | None = Field(default=None, primary_key=True)
    blocker_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    blocked_id: int = Field(foreign_key="user.id", nullable=False)
    notes: str | None = None
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class BlockCreate(SQLModel):
    blocked_id: int


class BlockNotesUpdate(SQLModel):
    blocked_id: int
    notes: str | None = None


class BlockedUserOut(SQLModel):
    id: int
    blocked_id: int
    name: str | None = None
    image: str | None = None
    created_at: datetime
    notes: str | None = None
