from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager, suppress

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from backend.core.config import settings
from backend.core.errors import StorageUnavailable

logger = logging.getLogger(__name__)


def _connect_args(url: str) -> dict[str, object]:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.database_url,
    connect_args=_connect_args(settings.database_url),
    pool_pre_ping=True,
)


def init_db() -> None:
    # Register every table on the shared metadata before creating.
    from backend.models import (  # noqa: F401
        blocker,
        like,
        match,
        profile_media,
        user,
        video_session,
    )

    SQLModel.metadata.create_all(engine)


def get_session() -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@contextmanager
def storage_guard(session: Session, operation: str) -> Iterator[None]:
    """Re-raise connection-level database failures as StorageUnavailable."""
    try:
        yield
    except OperationalError as err:
        logger.warning("storage failure during %s: %s", operation, err)
        # A dead connection fails the rollback too.
        with suppress(SQLAlchemyError):
            session.rollback()
        raise StorageUnavailable() from err
