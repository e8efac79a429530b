from __future__ import annotations

from enum import Enum

from sqlalchemy import Column, ForeignKey, Index, Integer
from sqlalchemy.types import Enum as SAEnum
from sqlmodel import Field, SQLModel


class MediaType(str, Enum):
    photo = "photo"
    video = "video"


class ProfileMedia(SQLModel, table=True):
    __tablename__ = "profile_media"
    __table_args__ = (
        Index("ix_profile_media_user_sort", "user_id", "sort_order", "id"),
    )

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("user.id", ondelete="CASCADE"),
            nullable=False,
        )
    )
    type: MediaType = Field(
        default=MediaType.photo,
        sa_column=Column(SAEnum(MediaType, name="mediatype"), nullable=False),
    )
    url: str = Field(nullable=False)
    sort_order: int = Field(default=0, nullable=False)


class ProfileMediaOut(SQLModel):
    id: int
    type: MediaType
    url: str
    sort_order: int
