"""
FileRelay: Custom Exception Hierarchy
=======================================

What:  Defines application-specific exceptions for the three request-level
       failure kinds (missing input, invalid input, downstream failure) and
       the startup-time configuration failure.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by services and routes; caught by global handlers.
When:  During request processing, or once at startup for configuration.

Exception Hierarchy:
    FileRelayError (base)
    ├── MissingFileError    → 400 Bad Request  {"error": "File is required"}
    ├── ValidationError     → 400 Bad Request  {"error": <message>}
    ├── GenerationError     → 500 Server Error {"error": ..., "details": ...}
    └── ConfigurationError  → fatal at startup (never reaches a handler)

All request-level errors are terminal: nothing is retried.
"""

from typing import Any, Dict, Optional


class FileRelayError(Exception):
    """
    Base exception for all FileRelay application errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged, NOT returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class MissingFileError(FileRelayError):
    """
    Raised when the request carries no `file` form field.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        field: str = "file",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        ctx["field"] = field
        super().__init__(message="File is required", context=ctx)
        self.field = field


class ValidationError(FileRelayError):
    """
    Raised when the uploaded file fails validation.

    When:    MIME type outside the allowed set, or size above the limit.
    HTTP:    400 Bad Request

    Example response:
        {"error": "Invalid file type"}
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class GenerationError(FileRelayError):
    """
    Raised when the generative-content API call fails for any reason.

    What:    Network error, exhausted quota, rejected input or model error.
    HTTP:    500 Internal Server Error

    `details` holds the underlying failure's message and is returned to the
    caller alongside the generic `message`.
    """

    def __init__(
        self,
        details: str = "",
        message: str = "An error occurred while generating content",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.details = details


class ConfigurationError(FileRelayError):
    """
    Raised when required configuration is missing at startup.

    The process refuses to start; this never becomes an HTTP response.
    """

    def __init__(
        self,
        message: str = "Configuration validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
