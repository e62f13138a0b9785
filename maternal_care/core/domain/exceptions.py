"""
Domain errors raised by the pregnancy and reminder layers.

Every error carries a stable machine code, a human message and a details
mapping. ``http_status`` is the status the API answers with; the domain
itself never looks at it.
"""

from typing import Any


class DomainException(Exception):
    """Base class for business rule violations."""

    default_code = "DOMAIN_ERROR"
    http_status = 400

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class ValidationException(DomainException):
    """
    Input the domain cannot work with, such as a malformed or future LMP.

    Args:
        message: What is wrong with the input
        field: Name of the offending input, echoed under ``details["field"]``
        details: Extra values that help the caller fix the request
    """

    default_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        details = dict(details or {})
        if field:
            details["field"] = field
        super().__init__(message, details=details)
        self.field = field


class EntityNotFoundException(DomainException):
    """A subject or reminder id that does not exist."""

    default_code = "ENTITY_NOT_FOUND"
    http_status = 404

    def __init__(self, entity_type: str, entity_id: Any, message: str | None = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            message or f"{entity_type} {entity_id} does not exist",
            details={"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class InvalidOperationException(DomainException):
    """A lifecycle transition the current state does not allow."""

    default_code = "INVALID_OPERATION"
    http_status = 409

    def __init__(self, operation: str, current_state: str, message: str | None = None):
        self.operation = operation
        self.current_state = current_state
        super().__init__(
            message or f"'{operation}' is not allowed while {current_state}",
            details={"operation": operation, "current_state": current_state},
        )


class ConcurrencyException(DomainException):
    """A reminder row changed underneath a writer holding an older version."""

    default_code = "CONCURRENCY_CONFLICT"
    http_status = 409

    def __init__(self, entity_type: str, entity_id: Any, expected_version: int):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected_version = expected_version
        super().__init__(
            f"{entity_type} {entity_id} was modified concurrently (expected version {expected_version})",
            details={"entity_type": entity_type, "entity_id": str(entity_id), "expected_version": expected_version},
        )
