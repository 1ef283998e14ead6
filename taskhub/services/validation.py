"""
Payload validation per resource kind.

`validate` never raises for bad client input: it returns a `ValidationResult`
holding either the normalized model or a field-indexed error list, so
handlers can branch on it and report per-field feedback.
"""
import enum
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

from taskhub.errors import InvalidInput
from taskhub.schemas.project import ProjectCreate, ProjectUpdate
from taskhub.schemas.task import TaskCreate, TaskUpdate, CommentCreate, TagCreate


class ResourceKind(str, enum.Enum):
    CREATE_PROJECT = "create-project"
    UPDATE_PROJECT = "update-project"
    CREATE_TASK = "create-task"
    UPDATE_TASK = "update-task"
    CREATE_COMMENT = "create-comment"
    CREATE_TAG = "create-tag"


SCHEMAS: dict[ResourceKind, type[BaseModel]] = {
    ResourceKind.CREATE_PROJECT: ProjectCreate,
    ResourceKind.UPDATE_PROJECT: ProjectUpdate,
    ResourceKind.CREATE_TASK: TaskCreate,
    ResourceKind.UPDATE_TASK: TaskUpdate,
    ResourceKind.CREATE_COMMENT: CommentCreate,
    ResourceKind.CREATE_TAG: TagCreate,
}


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    type: str

    def as_dict(self) -> dict:
        return {"field": self.field, "message": self.message, "type": self.type}


@dataclass(frozen=True)
class ValidationResult:
    value: BaseModel | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _field_errors(exc: ValidationError) -> list[FieldError]:
    errors = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "body"
        message = err["msg"].removeprefix("Value error, ")
        errors.append(FieldError(field=loc, message=message, type=err["type"]))
    return errors


def validate(kind: ResourceKind, payload: Any) -> ValidationResult:
    if not isinstance(payload, dict):
        return ValidationResult(errors=[
            FieldError(field="body", message="Request body must be a JSON object", type="dict_type")
        ])

    schema = SCHEMAS[ResourceKind(kind)]
    try:
        value = schema.model_validate(payload)
    except ValidationError as exc:
        return ValidationResult(errors=_field_errors(exc))
    return ValidationResult(value=value)


def validate_or_raise(kind: ResourceKind, payload: Any) -> BaseModel:
    result = validate(kind, payload)
    if not result.ok:
        raise InvalidInput(details=[e.as_dict() for e in result.errors])
    return result.value
