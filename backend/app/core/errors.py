"""Application error taxonomy.

Services raise these; the API layer maps each one to an HTTP status in
``register_error_handlers``.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

import pydantic
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str = "", *, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(AppError):
    """Malformed or out-of-range input, rejected before any query."""

    status_code = 422


class AuthorizationError(AppError):
    """Caller lacks the role required for the operation."""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class PersistenceError(AppError):
    """The store is unavailable or a query failed. Never retried."""

    status_code = 503


def validate_input(schema: type[ModelT], data: ModelT | Mapping[str, Any] | None) -> ModelT:
    """Coerce ``data`` into ``schema``, raising ValidationError on failure."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(dict(data or {}))
    except pydantic.ValidationError as exc:
        raise ValidationError(
            f"Invalid {schema.__name__}",
            details=exc.errors(include_url=False, include_context=False, include_input=False),
        ) from None


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    content: dict[str, Any] = {"detail": exc.message or exc.__class__.__name__}
    if exc.details is not None:
        content["errors"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)  # type: ignore[arg-type]
