"""users, matches, likes, blockers, profile media and video sessions

Revision ID: 7a1c0e5d2b94
Revises:
Create Date: 2026-10-19 10:00:00

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "7a1c0e5d2b94"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("immediate_available", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_user_email"),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=False)

    op.create_table(
        "match",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_a_id", sa.Integer(), nullable=False),
        sa.Column("user_b_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_chat_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_a_id"], ["user.id"]),
        sa.ForeignKeyConstraint(["user_b_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_a_id", "user_b_id", name="uq_match_users"),
        sa.CheckConstraint("user_a_id < user_b_id", name="ck_match_canonical_order"),
    )
    op.create_index("ix_match_user_a_id", "match", ["user_a_id"], unique=False)
    op.create_index("ix_match_user_b_id", "match", ["user_b_id"], unique=False)

    op.create_table(
        "like",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("liker_id", sa.Integer(), nullable=False),
        sa.Column("liked_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["liker_id"], ["user.id"]),
        sa.ForeignKeyConstraint(["liked_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("liker_id", "liked_id", name="uq_like_liker_liked"),
        sa.CheckConstraint("liker_id <> liked_id", name="ck_like_no_self_like"),
    )
    op.create_index("ix_like_liker_id", "like", ["liker_id"], unique=False)
    op.create_index(
        "ix_like_liked_id_created_at_desc",
        "like",
        ["liked_id", sa.text("created_at DESC")],
        unique=False,
    )

    op.create_table(
        "blocker",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("blocker_id", sa.Integer(), nullable=False),
        sa.Column("blocked_id", sa.Integer(), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["blocker_id"], ["user.id"]),
        sa.ForeignKeyConstraint(["blocked_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("blocker_id", "blocked_id", name="uq_blocker_pair"),
        sa.CheckConstraint("blocker_id <> blocked_id", name="ck_blocker_no_self_block"),
    )
    op.create_index("ix_blocker_blocker_id", "blocker", ["blocker_id"], unique=False)
    op.create_index(
        "ix_blocker_blocked_blocker",
        "blocker",
        ["blocked_id", "blocker_id"],
        unique=False,
    )

    op.create_table(
        "profile_media",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column(
            "type",
            sa.Enum("photo", "video", name="mediatype"),
            nullable=False,
        ),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_profile_media_user_sort",
        "profile_media",
        ["user_id", "sort_order", "id"],
        unique=False,
    )

    op.create_table(
        "video_session",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("match_id", sa.Integer(), nullable=False),
        sa.Column("caller_id", sa.Integer(), nullable=False),
        sa.Column("callee_id", sa.Integer(), nullable=False),
        sa.Column(
            "state",
            sa.Enum("pending", "active", "ended", name="videosessionstate"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["match_id"], ["match.id"]),
        sa.ForeignKeyConstraint(["caller_id"], ["user.id"]),
        sa.ForeignKeyConstraint(["callee_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_video_session_match_id",
        "video_session",
        ["match_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_video_session_match_id", table_name="video_session")
    op.drop_table("video_session")
    op.drop_index("ix_profile_media_user_sort", table_name="profile_media")
    op.drop_table("profile_media")
    op.drop_index("ix_blocker_blocked_blocker", table_name="blocker")
    op.drop_index("ix_blocker_blocker_id", table_name="blocker")
    op.drop_table("blocker")
    op.drop_index("ix_like_liked_id_created_at_desc", table_name="like")
    op.drop_index("ix_like_liker_id", table_name="like")
    op.drop_table("like")
    op.drop_index("ix_match_user_b_id", table_name="match")
    op.drop_index("ix_match_user_a_id", table_name="match")
    op.drop_table("match")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_table("user")
    sa.Enum(name="videosessionstate").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="mediatype").drop(op.get_bind(), checkfirst=True)
