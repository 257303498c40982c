"""
Notes API — Exceptions
=======================

Services raise these; the handlers in main.py turn them into JSON bodies.

    NotesAPIError
    ├── ValidationError   400  bad note fields, unknown sort key or direction
    ├── NotFoundError     404  id not in the store
    └── DatabaseError     500  the store failed; client sees a generic message

`message` is safe to show a client. `context` is a dict of structured
details; for 400/404 it is returned as `details`, for 500 it is only logged.
"""

from typing import Any, Dict, List, Optional


class NotesAPIError(Exception):
    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAPIError):
    """
    Client input that can be corrected and resent.

    One instance may carry several failures. `errors` lists each as
    {"field", "rule", "message"}; `field` and `message` repeat the first
    one, so single-failure callers need not look at the list:

        {"error": "validation_error",
         "message": "title must not be blank",
         "details": {"field": "title",
                     "errors": [{"field": "title", "rule": "blank",
                                 "message": "title must not be blank"}]}}
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        if field:
            ctx["field"] = field
        if errors:
            ctx["errors"] = errors
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors or []


class NotFoundError(NotesAPIError):
    """
    The id is not in the store at the time of the call.

    A repeated DELETE ends up here as well; callers wanting idempotent
    deletes treat it as success.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        else:
            message = f"The requested {resource} was not found"
        ctx = dict(context or {})
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NotesAPIError):
    """The store failed mid-operation. The original error type stays in `context`."""

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
