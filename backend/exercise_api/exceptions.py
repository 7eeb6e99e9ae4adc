"""
Exercise API Backend: Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the three ways a request can fail.
How:   Each exception carries a log message, an optional context dict, and
       the HTTP status + public message it renders as. Global exception
       handlers (registered in main.py) turn them into `{"Error": ...}`
       JSON responses.
Who:   Raised by the validation layer and the exercise service.

Exception Hierarchy:
    ExerciseApiError (base)
    ├── ValidationError   → 400 {"Error": "Invalid request"}
    ├── NotFoundError     → 404 {"Error": "Not found"}
    └── StoreError        → status/message chosen by the failing operation

The public message is the only thing a client ever sees. `message` and
`context` are for the server log.
"""

from typing import Any, Dict, List, Optional

INVALID_REQUEST = "Invalid request"
NOT_FOUND = "Not found"
REQUEST_FAILED = "Request failed"


class ExerciseApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:        Server-side description (logged, never returned)
        context:        Additional debug info (logged, never returned)
        status_code:    HTTP status the error renders as
        public_message: Value of the `Error` field in the response body
    """

    status_code: int = 500
    public_message: str = REQUEST_FAILED

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ExerciseApiError):
    """
    Raised when the request payload violates a field constraint.

    `fields` lists the violated field names in check order (name, reps,
    weight, unit, date). Detected before any store call.
    """

    status_code = 400
    public_message = INVALID_REQUEST

    def __init__(
        self,
        fields: Optional[List[str]] = None,
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.fields = list(fields or [])
        ctx = context or {}
        if self.fields:
            ctx["fields"] = self.fields
        super().__init__(message=message, context=ctx)


class NotFoundError(ExerciseApiError):
    """Raised when no exercise exists for the requested id."""

    status_code = 404
    public_message = NOT_FOUND

    def __init__(
        self,
        resource: str = "exercise",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreError(ExerciseApiError):
    """
    Raised when a Record Store call rejects.

    Unlike the other errors the rendered status and message are not fixed:
    each operation picks them (create/replace answer 400 "Invalid request",
    lookup answers 400 "Request failed", list/delete answer 200 "Request
    failed" in legacy mode). The underlying exception is kept in `context`
    for the log.
    """

    def __init__(
        self,
        message: str = "Record store operation failed",
        status_code: int = 400,
        public_message: str = REQUEST_FAILED,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.status_code = status_code
        self.public_message = public_message
