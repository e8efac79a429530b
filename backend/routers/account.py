from __future__ import annotations

from fastapi import APIRouter

from backend.routers.deps import CurrentUserDep, CurrentUserIdDep, SessionDep
from backend.schemas.auth import UserRead
from backend.services.account_service import delete_account

router = APIRouter(prefix="/account", tags=["account"])


@router.get("/me", response_model=UserRead)
def read_me(current: CurrentUserDep) -> UserRead:
    return UserRead.model_validate(current, from_attributes=True)


@router.post("/delete")
def delete_my_account(current_id: CurrentUserIdDep, session: SessionDep) -> dict[str, bool]:
    delete_account(session, current_id)
    return {"ok": True}
