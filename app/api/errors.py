# change_cab_project/app/api/errors.py

from __future__ import annotations

from fastapi import HTTPException

from app.services.errors import (
    ChangeflowError,
    ConfigurationError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)

_STATUS_CODES = (
    (NotFoundError, 404),
    (ValidationError, 400),
    (InvalidStateError, 409),
    (ConfigurationError, 500),
)


def to_http_exception(exc: ChangeflowError) -> HTTPException:
    """Translate a workflow error into the matching HTTP error."""
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
