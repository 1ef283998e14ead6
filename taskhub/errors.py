"""
Error taxonomy shared by every resource handler, and the translation of
persistence failures into store-agnostic error kinds.

Handlers raise the `AppError` subclasses; `register_exception_handlers`
turns them (and anything unexpected) into the JSON failure envelope
`{"error": str, "details"?: list}`.
"""
import enum
import functools
import logging
from contextlib import contextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: str | None = None, details: list | None = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    def to_body(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication required"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "You do not have permission to access this project"


class InvalidInput(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid input data"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Resource not found"


class InternalFault(AppError):
    pass


# ── Store errors ────────────────────────────────────────

class StoreErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    TRANSIENT = "transient"


class StoreError(Exception):
    """A persistence failure, classified independently of the database driver."""

    def __init__(self, kind: StoreErrorKind, message: str | None = None):
        self.kind = kind
        self.message = message
        super().__init__(message or kind.value)


@contextmanager
def translate_store_errors():
    try:
        yield
    except NoResultFound as exc:
        raise StoreError(StoreErrorKind.NOT_FOUND) from exc
    except IntegrityError as exc:
        raise StoreError(StoreErrorKind.CONSTRAINT_VIOLATION, str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        raise StoreError(StoreErrorKind.TRANSIENT, str(exc)) from exc


def store_operation(func):
    """Run an async store function with SQLAlchemy errors translated to StoreError."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        with translate_store_errors():
            return await func(*args, **kwargs)

    return wrapper


def store_error_to_app_error(exc: StoreError) -> AppError:
    if exc.kind is StoreErrorKind.NOT_FOUND:
        return NotFound(exc.message)
    if exc.kind is StoreErrorKind.CONSTRAINT_VIOLATION:
        return NotFound("Related resource not found")
    return InternalFault()


# ── Handlers ────────────────────────────────────────────

def register_exception_handlers(app: FastAPI):

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        if exc.kind is StoreErrorKind.TRANSIENT:
            logger.error("[STORE] %s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        else:
            logger.info("[STORE] %s %s: %s", request.method, request.url.path, exc.kind.value)
        error = store_error_to_app_error(exc)
        return JSONResponse(status_code=error.status_code, content=error.to_body())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())),
                "message": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors()
        ]
        error = InvalidInput(details=details)
        return JSONResponse(status_code=error.status_code, content=error.to_body())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    # Global exception handler to ensure a JSON body on failure
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("[ERROR] Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        error = InternalFault()
        return JSONResponse(status_code=error.status_code, content=error.to_body())
