import re
from datetime import datetime, timezone

from pydantic import Field, field_validator

from taskhub.models.tasks import TaskStatus, TaskPriority
from taskhub.schemas.base import CamelModel, reject_null
from taskhub.schemas.user import UserSummary
from taskhub.utils.sanitization import sanitize_string


# ── Tag schemas ─────────────────────────────────────────

class TagCreate(CamelModel):
    name: str = Field(..., min_length=1)
    color: str = Field("#6B7280", pattern=r"^#[0-9A-Fa-f]{6}$")

    @field_validator("name", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class TagResponse(CamelModel):
    id: str
    name: str
    color: str


# ── Comment schemas ─────────────────────────────────────

class CommentCreate(CamelModel):
    content: str = Field(..., min_length=1)

    @field_validator("content", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class CommentResponse(CamelModel):
    id: str
    task_id: str
    content: str
    created_at: datetime | None = None
    author: UserSummary


# ── Task schemas ────────────────────────────────────────

# Calendar date, "T", then a clock time; the offset is optional (naive means UTC)
ISO_DATETIME_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?$"
)


def _require_iso_datetime(v):
    if v is None:
        return v
    if not isinstance(v, str) or not ISO_DATETIME_RE.match(v):
        raise ValueError("must be an ISO 8601 date-time string")
    return v


def _assume_utc(v: datetime | None):
    if v is not None and v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


class TaskCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    assignee_id: str | None = None
    tag_ids: list[str] | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("description", "priority", "due_date", "assignee_id", "tag_ids")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def due_date_is_string(cls, v):
        return _require_iso_datetime(v)

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, v):
        return _assume_utc(v)


class TaskUpdate(CamelModel):
    title: str | None = Field(None, min_length=1)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    assignee_id: str | None = None
    tag_ids: list[str] | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("title", "status", "tag_ids")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def due_date_is_string(cls, v):
        return _require_iso_datetime(v)

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, v):
        return _assume_utc(v)


class TaskResponse(CamelModel):
    id: str
    title: str
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    project_id: str
    creator_id: str
    assignee_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    assignee: UserSummary | None = None
    creator: UserSummary
    tags: list[TagResponse] = []


class TaskListItem(TaskResponse):
    comment_count: int = 0


class TaskDetail(TaskResponse):
    comments: list[CommentResponse] = []
