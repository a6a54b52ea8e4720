"""
Notes Service: Exception Hierarchy
===================================

What:  Application-specific exceptions mapped to HTTP responses by the
       global handlers registered in main.py.
Who:   Raised by services; caught by those handlers.

Exception Hierarchy:
    NotesServiceError (base)     → 500
    ├── ValidationError          → 400 Bad Request
    └── DatabaseError            → 500 {"error": "db_error"}

The `context` dict is logged server-side and never returned to the client.
"""

from typing import Any, Dict, Optional


class NotesServiceError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  description that is safe to return to the client
        context:  debug info, logged but NOT returned
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesServiceError):
    """
    Raised when client input is missing a required field.

    HTTP: 400 Bad Request, body `{"error": <message>}`.
    No database access happens once this is raised.
    """

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


class DatabaseError(NotesServiceError):
    """
    Raised when a database statement fails during request handling.

    HTTP: 500, body `{"error": "db_error"}`. Driver details (SQL, constraint
    names, hostnames) only ever reach the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
