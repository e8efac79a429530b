from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, cast

import jwt
from passlib.context import CryptContext

from backend.core.config import settings

_ALGO: str = settings.jwt_algorithm

# argon2 for new hashes; bcrypt variants still verify for imported accounts
_pwd = CryptContext(
    schemes=["argon2", "bcrypt_sha256", "bcrypt"],
    default="argon2",
    deprecated="auto",
)


def hash_password(raw: str) -> str:
    return cast(str, _pwd.hash(raw))


def verify_password(raw: str, hashed: str) -> bool:
    return cast(bool, _pwd.verify(raw, hashed))


def create_access_token(user_id: int, *, minutes: int | None = None) -> str:
    minutes = minutes or settings.access_token_expire_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    payload: dict[str, Any] = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=_ALGO)


def decode_token(token: str) -> dict[str, Any]:
    return cast(
        dict[str, Any],
        jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[_ALGO],
        ),
    )
