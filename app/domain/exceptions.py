"""Domain exceptions for the dispatch engine.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class DispatchEngineException(Exception):
    """Base exception for all dispatch engine errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for an error response body."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DispatchEngineException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(DispatchEngineException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task', 'webhook').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ReminderRuleException(DispatchEngineException):
    """Raised when a reminder rule breaks the anchor/custom-datetime pairing."""

    def __init__(self, message: str, reference_type: str) -> None:
        super().__init__(
            message,
            "INVALID_REMINDER_RULE",
            {"reference_type": reference_type},
        )


class WorkflowDefinitionException(DispatchEngineException):
    """Raised when stored workflow nodes cannot be parsed."""

    def __init__(self, message: str, workflow_id: str | None = None) -> None:
        details = {"workflow_id": workflow_id} if workflow_id else {}
        super().__init__(message, "INVALID_WORKFLOW_DEFINITION", details)


class SqlNotConfiguredException(DispatchEngineException):
    """Raised when an operation requires the database but it is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
