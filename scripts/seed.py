from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from sqlmodel import Session, select

# --- make project root importable even if CWD is different ---
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.core.db import engine, init_db  # noqa: E402
from backend.core.logging_config import configure_logging  # noqa: E402
from backend.core.security import hash_password  # noqa: E402
from backend.models.profile_media import MediaType, ProfileMedia  # noqa: E402
from backend.models.user import User  # noqa: E402
from backend.services.like_service import record_like  # noqa: E402

logger = logging.getLogger("seed")

SEED_USERS = (
    ("avery@example.com", "Avery"),
    ("blake@example.com", "Blake"),
    ("casey@example.com", "Casey"),
)


def _ensure_user(session: Session, email: str, name: str) -> User:
    user = session.exec(select(User).where(User.email == email)).first()
    if user is not None:
        logger.info("user already exists: %s", email)
        return user

    user = User(email=email, name=name, password_hash=hash_password("SeedPass123!"))
    session.add(user)
    session.commit()
    session.refresh(user)
    session.add(
        ProfileMedia(
            user_id=user.id,
            type=MediaType.photo,
            url=f"/media/{name.lower()}-1.jpg",
            sort_order=0,
        )
    )
    session.commit()
    logger.info("created user: %s", email)
    return user


def run() -> None:
    configure_logging()
    logger.info("ENV_FILE=%s", os.environ.get("ENV_FILE", "backend/.env"))
    init_db()

    with Session(engine) as session:
        users = [_ensure_user(session, email, name) for email, name in SEED_USERS]
        avery, blake, casey = (user.id for user in users)
        if avery is None or blake is None or casey is None:
            raise RuntimeError("seed users were not persisted")

        # Avery and Blake match; Casey has only liked Avery.
        record_like(session, avery, blake)
        outcome = record_like(session, blake, avery)
        record_like(session, casey, avery)

    logger.info("done. match_id=%s", outcome.match_id)


if __name__ == "__main__":
    run()
