"""
GeoJournal Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions, one per failure kind a handler can report.
Why:   Handlers classify every failure into exactly one of these kinds; the
       global exception handlers turn each kind into a fixed HTTP status and a
       generic, user-safe message.
How:   Each exception carries a message, an optional context dict (logged,
       never returned), an HTTP status code and a machine-readable error code.

Exception Hierarchy:
    GeoJournalError (base)                 → 500
    ├── UnprocessableInputError            → 422 Unprocessable Entity
    ├── NotFoundError                      → 404 Not Found
    ├── ConflictError                      → 422 Unprocessable Entity
    ├── InvalidCredentialsError            → 401 Unauthorized
    ├── StoreUnavailableError              → 500 Internal Server Error
    └── GeocodeError                       → status chosen by the geocoder

Retry semantics:
    NotFoundError is final for a given id. StoreUnavailableError reports a
    failure of the persistence layer itself and may succeed on a later call.
    Nothing in this backend retries automatically.
"""

from typing import Any, Dict, Optional


class GeoJournalError(Exception):
    """
    Base exception for all GeoJournal application errors.

    Attributes:
        message:     User-facing error description (safe to return in API response)
        context:     Additional debug info (logged but NOT returned to client)
        status_code: HTTP status reported by the error handler
        error_code:  Machine-readable code placed in the response body
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class UnprocessableInputError(GeoJournalError):
    """
    Raised when request input is missing or malformed.

    When:    Always before any store access; no side effects have happened.
    HTTP:    422 Unprocessable Entity
    """

    status_code = 422
    error_code = "unprocessable_input"

    def __init__(
        self,
        message: str = "Invalid inputs passed, please check your data.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(GeoJournalError):
    """
    Raised when an identifier does not resolve to a stored record.

    Why a custom exception:
        The gateway returns None for missing records (not an exception).
        Services convert None → NotFoundError so a 404 is reported without
        any HTTP knowledge in the service layer.
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(
            message=message or f"Could not find {resource} for the provided id.",
            context=ctx,
        )


class ConflictError(GeoJournalError):
    """
    Raised when a unique key is already taken (signup with a known email).

    HTTP:    422, matching the other "fix your input" responses.
    """

    status_code = 422
    error_code = "conflict"

    def __init__(
        self,
        message: str = "User exists already, please login instead.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(GeoJournalError):
    """
    Raised when login fails.

    Unknown email and wrong password share this exception and its message so
    a caller cannot tell which one was wrong.
    """

    status_code = 401
    error_code = "invalid_credentials"

    def __init__(
        self,
        message: str = "Invalid credentials, could not log you in.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreUnavailableError(GeoJournalError):
    """
    Raised when the persistence layer itself fails.

    When:    Connection lost, driver error, failed commit, unexpected exception
             around a gateway call.
    HTTP:    500 Internal Server Error

    Security Note:
        The message is fixed per operation. Driver messages, SQL and
        constraint names stay in `context` and the server log.
    """

    status_code = 500
    error_code = "store_unavailable"

    def __init__(
        self,
        message: str = "Something went wrong, please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class GeocodeError(GeoJournalError):
    """
    Raised by a geocoding client when a location name cannot be resolved.

    Entry creation passes this error through untouched, so the status code
    chosen here (422 for "no such place", 502 for upstream failures) is the
    one the client sees.
    """

    error_code = "geocode_failure"

    def __init__(
        self,
        message: str = "Could not find location for the specified address.",
        status_code: int = 422,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.status_code = status_code
