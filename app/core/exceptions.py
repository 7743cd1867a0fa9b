"""
Domain errors raised by services and routes.

Repositories return ``None`` for rows that do not exist and let database
errors propagate; everything that is a rule violation is one of the classes
below. ``app.main`` maps them onto the response envelope::

    {"success": false, "error": {"code": ..., "message": ..., "details": ...}}
"""
from __future__ import annotations

from typing import Any


class ConferenceError(Exception):
    status_code = 500

    def __init__(self, message: str, code: str = "INTERNAL_ERROR", details: dict[str, Any] | None = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details or None}


class NotFoundError(ConferenceError):
    status_code = 404

    def __init__(self, resource: str, resource_id: Any = None, message: str | None = None):
        details = {"resource": resource}
        if resource_id is not None:
            details["id"] = str(resource_id)
        super().__init__(
            message or f"{resource} not found",
            code=f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            details=details,
        )


class DuplicateAssignmentError(ConferenceError):
    status_code = 409

    def __init__(self, submission_id: Any, reviewer_id: Any):
        super().__init__(
            "Reviewer is already assigned to this submission",
            code="REVIEWER_ALREADY_ASSIGNED",
            details={"submissionId": str(submission_id), "reviewerId": str(reviewer_id)},
        )


class ValidationFailure(ConferenceError):
    status_code = 400

    def __init__(self, message: str, code: str = "VALIDATION_ERROR", field: str | None = None):
        super().__init__(message, code=code, details={"field": field} if field else None)


class InvalidTransitionError(ConferenceError):
    """Raised when an entity is asked to leave a terminal state."""

    status_code = 409

    def __init__(self, message: str, code: str = "INVALID_STATE_TRANSITION", details: dict[str, Any] | None = None):
        super().__init__(message, code=code, details=details)


class AuthenticationError(ConferenceError):
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="UNAUTHORIZED")


class ForbiddenError(ConferenceError):
    status_code = 403

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message, code="FORBIDDEN")
