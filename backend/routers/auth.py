from fastapi import APIRouter, HTTPException, status
from sqlmodel import select

from backend.core.security import (
    create_access_token,
    hash_password,
    verify_password,
)
from backend.models.user import User
from backend.routers.deps import SessionDep
from backend.schemas.auth import LoginRequest, SignupRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=TokenResponse)
def signup(payload: SignupRequest, session: SessionDep) -> TokenResponse:
    email = payload.email.lower()
    exists = session.exec(select(User).where(User.email == email)).first()
    if exists:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )

    user = User(
        email=email,
        name=payload.name,
        password_hash=hash_password(payload.password),
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return TokenResponse(access_token=create_access_token(user_id=user.id or 0))


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, session: SessionDep) -> TokenResponse:
    statement = select(User).where(User.email == payload.email.lower())
    user = session.exec(statement).first()
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return TokenResponse(access_token=create_access_token(user_id=user.id or 0))
