from __future__ import annotations

from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from backend.core.config import settings
from backend.core.db import get_session
from backend.core.security import decode_token
from backend.models.user import User

bearer = HTTPBearer(auto_error=False)

SessionDep = Annotated[Session, Depends(get_session)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(creds: CredentialsDep, session: SessionDep) -> User:
    if settings.auth_bypass_user_id is not None:
        bypass_user = session.get(User, settings.auth_bypass_user_id)
        if bypass_user is None:
            raise _unauthorized("User not found")
        return bypass_user

    if creds is None:
        raise _unauthorized("Unauthorized")

    try:
        payload = decode_token(creds.credentials)
    except jwt.PyJWTError as err:
        raise _unauthorized("Invalid token") from err

    subject = payload.get("sub")
    if not subject or not str(subject).isdigit():
        raise _unauthorized("Invalid token")

    user = session.get(User, int(subject))
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_current_user_id(user: Annotated[User, Depends(get_current_user)]) -> int:
    if user.id is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="authenticated user missing identifier",
        )
    return user.id


CurrentUserDep = Annotated[User, Depends(get_current_user)]
CurrentUserIdDep = Annotated[int, Depends(get_current_user_id)]
