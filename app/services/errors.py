# change_cab_project/app/services/errors.py

"""
Exceptions raised by the change workflow and its collaborators.

Calculators never raise these for malformed wizard data; only the workflow
orchestration (and the stores it drives) does. The HTTP layer translates them
into responses.
"""

from __future__ import annotations

from typing import Optional


class ChangeflowError(Exception):
    """Base exception for change workflow operations."""


class NotFoundError(ChangeflowError):
    """Entity not found in the store."""

    def __init__(self, entity_type: str, entity_id: object):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class ValidationError(ChangeflowError):
    """Caller supplied a missing or invalid value."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class InvalidStateError(ChangeflowError):
    """Operation is not allowed in the change request's current status."""

    def __init__(self, change_id: object, status: str, operation: str):
        self.change_id = change_id
        self.status = status
        self.operation = operation
        super().__init__(f"Cannot {operation} change request {change_id} in status '{status}'")


class ConfigurationError(ChangeflowError):
    """Required scoring configuration is missing or unusable."""


__all__ = [
    "ChangeflowError",
    "NotFoundError",
    "ValidationError",
    "InvalidStateError",
    "ConfigurationError",
]
