"""
Error taxonomy for the back office API and the FastAPI handlers that render it.

Every error body carries a `message` constant from `constants`; validation
errors additionally list every violated field.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from constants import (
    APPLICATION_NOT_FOUND_ERROR,
    INTERNAL_SERVER_ERROR,
    INVALID_FILTER_ERROR,
    MINIMUM_DATE_EXCEEDS_MAXIMUM_DATE_ERROR,
    UNAUTHORIZED_ERROR,
    VALIDATION_ERROR,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldViolation:
    field: str
    message: str


class BackOfficeError(Exception):
    """Base class for errors rendered as `{"message": ...}` responses."""

    def __init__(self, message: str, status_code: int = 400, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"message": self.message}
        if self.details:
            result["details"] = self.details
        return result


class ValidationError(BackOfficeError):
    """One or more application fields are invalid. Lists all of them."""

    def __init__(self, violations: list[FieldViolation]):
        super().__init__(VALIDATION_ERROR, status_code=422)
        self.violations = list(violations)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": [asdict(v) for v in self.violations],
        }


class InvalidFilterError(BackOfficeError):
    """A query parameter is outside its enumerated domain."""

    def __init__(self, parameter: str, value: Any, allowed: list[str]):
        super().__init__(
            INVALID_FILTER_ERROR,
            status_code=400,
            details={"parameter": parameter, "value": value, "allowed": allowed},
        )
        self.parameter = parameter


class InvalidDateError(BackOfficeError):
    """A date parameter was supplied but could not be parsed."""

    def __init__(self, message: str, parameter: str):
        super().__init__(message, status_code=400)
        self.parameter = parameter


class DateRangeError(BackOfficeError):
    def __init__(self):
        super().__init__(MINIMUM_DATE_EXCEEDS_MAXIMUM_DATE_ERROR, status_code=400)


class ApplicationNotFoundError(BackOfficeError):
    def __init__(self, application_id: int):
        super().__init__(APPLICATION_NOT_FOUND_ERROR, status_code=404, details={"id": application_id})


class UnauthorizedError(BackOfficeError):
    def __init__(self):
        super().__init__(UNAUTHORIZED_ERROR, status_code=401)


def violations_from_errors(errors: list[dict[str, Any]], skip_prefix: tuple[str, ...] = ()) -> list[FieldViolation]:
    """Flatten pydantic-style error dicts into field violations."""
    violations = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if str(part) not in skip_prefix]
        violations.append(FieldViolation(field=".".join(loc) or "__root__", message=err.get("msg", "")))
    return violations


async def back_office_exception_handler(request: Request, exc: BackOfficeError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI body/param errors in the same exhaustive shape as ValidationError."""
    error = ValidationError(violations_from_errors(exc.errors(), skip_prefix=("body", "query", "path", "header")))
    return await back_office_exception_handler(request, error)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": INTERNAL_SERVER_ERROR})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BackOfficeError, back_office_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
