from datetime import datetime

from taskhub.schemas.base import CamelModel


class UserSummary(CamelModel):
    id: str
    name: str | None = None
    image: str | None = None


class UserResponse(UserSummary):
    email: str
    created_at: datetime | None = None
