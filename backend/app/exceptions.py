"""
Storefront Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for the resource handlers.
How:   Each exception carries a message and optional context dict. Global
       exception handlers (registered in main.py) catch these and return
       JSON error responses with the matching HTTP status code.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    StorefrontError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    └── DatabaseError     → 500 Internal Server Error
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence


@dataclass(frozen=True)
class FieldError:
    """
    One failed validation rule.

    Attributes:
        field:   Request field name as the client sent it (e.g. "categoryName")
        message: Human-readable problem (e.g. "invalid categoryName")
    """
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


def render_errors(errors: Sequence[FieldError]) -> str:
    """Joins field errors into the wire format: "invalid email; invalid password; "."""
    return "".join(f"{error.message}; " for error in errors)


class StorefrontError(Exception):
    """
    Base exception for all Storefront application errors.

    Attributes:
        message:  User-facing error description
        context:  Additional debug info (logged server-side)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """
    Raised when client input fails validation.

    What:    Carries every failing field, not just the first one.
    When:    Missing required fields, malformed ids, bad email, duplicate email.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "invalid categoryName; ",
            "details": [{"field": "categoryName", "message": "invalid categoryName"}]
        }
    """

    def __init__(
        self,
        errors: Sequence[FieldError],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.errors: List[FieldError] = list(errors)
        ctx = context or {}
        ctx["fields"] = [error.field for error in self.errors]
        super().__init__(message=render_errors(self.errors), context=ctx)


class DatabaseError(StorefrontError):
    """
    Raised when a statement or connection fails.

    What:    Wraps any SQLAlchemy/driver failure. No retry is attempted.
    HTTP:    500 Internal Server Error

    `message` holds the driver's own text. Whether that text reaches the
    client is decided by the EXPOSE_STORE_ERRORS setting in the handler.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
