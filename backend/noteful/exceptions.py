"""
Noteful Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions, one per error class the API reports.
Why:   Routes and stores raise typed errors; global handlers registered in
       main.py turn each type into a status code and the uniform body
       `{"error": {"message": ...}}`. Classification is by type, never by
       inspecting message text.
How:   Each exception carries a client-safe `message` and a `context` dict
       that is logged but never returned.

Exception Hierarchy:
    NotefulError (base)
    ├── ValidationError          → 400 Bad Request
    │   ├── MissingFieldError        (required field absent on create)
    │   └── NoUpdatableFieldsError   (PATCH without any updatable field)
    ├── NotFoundError            → 404 Not Found
    └── StoreError               → 500 Internal Server Error
"""

from typing import Any, Dict, Optional, Sequence


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefulError):
    """
    Raised when client input fails validation.

    Detected before any database call, so a rejected request never causes a
    partial write.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class MissingFieldError(ValidationError):
    """A required field is absent or empty on create."""

    def __init__(self, field: str):
        super().__init__(message=f"Missing '{field}' in request body", field=field)


def _describe_fields(fields: Sequence[str]) -> str:
    # ["name"] → "a 'name'"; ["name", "content"] → "a 'name' and a 'content'"
    parts = [f"a '{f}'" for f in fields]
    if len(parts) == 1:
        return parts[0]
    return ", ".join(parts[:-1]) + " and " + parts[-1]


class NoUpdatableFieldsError(ValidationError):
    """A partial update carried none of the updatable fields."""

    def __init__(self, fields: Sequence[str]):
        super().__init__(
            message=f"Request body must contain {_describe_fields(fields)}",
            context={"updatable_fields": list(fields)},
        )
        self.fields = tuple(fields)


class NotFoundError(NotefulError):
    """
    Raised when a requested entity does not exist.

    SQLAlchemy returns None for missing rows; stores convert that None into
    this exception so routes never compare against None themselves.

    Example response:
        {"error": {"message": "Note doesn't exist"}}
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} doesn't exist", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class StoreError(NotefulError):
    """
    Raised when a database operation fails unexpectedly.

    Security Note:
        The message returned to the client is always generic. The original
        exception type and the operation are kept in `context` and logged
        server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
