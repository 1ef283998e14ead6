from datetime import datetime

from pydantic import Field, field_validator

from taskhub.models.project import MemberRole
from taskhub.schemas.base import CamelModel, reject_null
from taskhub.schemas.user import UserSummary
from taskhub.utils.sanitization import sanitize_string


class ProjectCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: str | None = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class ProjectUpdate(CamelModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v):
        return reject_null(v)


class MemberUser(UserSummary):
    email: str


class ProjectMemberResponse(CamelModel):
    user_id: str
    role: MemberRole
    joined_at: datetime | None = None
    user: MemberUser


class ProjectResponse(CamelModel):
    id: str
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    task_count: int = 0
    # The caller's own role in the project
    role: MemberRole | None = None


class ProjectDetail(ProjectResponse):
    members: list[ProjectMemberResponse] = []
