from pydantic import BaseModel

from backend.models.profile_media import ProfileMediaOut
from backend.models.user import UserSummary


class ProfileOut(BaseModel):
    user: UserSummary
    media: list[ProfileMediaOut]
