"""
NoteKeeper — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for each way a note request can fail.
How:   Each exception carries a message, an HTTP status code and an optional
       context dict. Global exception handlers (registered in main.py) catch
       these and answer with the status code and a plain-text body.
Who:   Raised by handlers, the note service and the request body reader.

Exception Hierarchy:
    NoteKeeperError (base)
    ├── BadRequestError          → 400 Bad Request (missing id, malformed body)
    ├── NotFoundError            → 404 Not Found (unknown id)
    ├── MethodNotAllowedError    → 405 Method Not Allowed
    ├── RequestTimeoutError      → 408 Request Timeout (body read too slow)
    └── EncodingError            → 500 Internal Server Error

All errors are terminal for the request: nothing is retried and nothing
already applied to the store is rolled back.
"""

from typing import Any, Dict, Iterable, Optional


class NoteKeeperError(Exception):
    """
    Base exception for all NoteKeeper application errors.

    Attributes:
        message:      Text returned to the client as the response body
        context:      Additional debug info (logged, NOT returned to client)
        status_code:  HTTP status the global handler responds with
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def headers(self) -> Dict[str, str]:
        """Extra response headers for this error (none by default)."""
        return {}


class BadRequestError(NoteKeeperError):
    """
    Raised when the request is missing a parameter or carries a body that
    cannot be decoded into a note payload.

    HTTP: 400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "bad request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NoteKeeperError):
    """
    Raised when a note id is not present in the store.

    HTTP: 404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class MethodNotAllowedError(NoteKeeperError):
    """
    Raised when a handler (or the dispatcher) receives a verb it does not serve.

    HTTP:    405 Method Not Allowed
    Headers: Allow, a comma-separated list of the accepted verbs
    """

    status_code = 405

    def __init__(
        self,
        method: str,
        allowed: Iterable[str] = (),
        context: Optional[Dict[str, Any]] = None,
    ):
        self.method = method
        self.allowed = tuple(allowed)
        ctx = context or {}
        ctx["method"] = method
        super().__init__(message="method not allowed", context=ctx)

    @property
    def headers(self) -> Dict[str, str]:
        if not self.allowed:
            return {}
        return {"Allow": ", ".join(self.allowed)}


class RequestTimeoutError(NoteKeeperError):
    """
    Raised when the request body does not arrive within the read timeout.

    HTTP: 408 Request Timeout
    """

    status_code = 408

    def __init__(
        self,
        timeout: float,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["timeout"] = timeout
        super().__init__(message="request body read timed out", context=ctx)
        self.timeout = timeout


class EncodingError(NoteKeeperError):
    """
    Raised when a response body cannot be serialized.

    HTTP: 500 Internal Server Error

    The store mutation that preceded the encoding step (if any) is NOT
    undone: a create that fails here leaves the note stored.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "failed to encode",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
