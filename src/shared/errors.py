"""Error taxonomy shared by the Ordering and Reviews domains.

Domain errors extend Protean's own exceptions so command handlers raise them
the same way the framework raises its validation and lookup errors. The
FastAPI layer maps each class to a distinct status code and error name.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

from shared.auth.port import AuthError, Forbidden, Unauthenticated


class InvalidReference(ValidationError):
    """A product identifier did not resolve to a usable catalogue record."""


class InvalidStatus(ValidationError):
    """An order status outside the supported set was requested."""


class DuplicateReview(ValidationError):
    """The reviewer already has a review for this product."""


class _LookupFailure(ObjectNotFoundError):
    """Lookup errors that carry field messages the way `ValidationError` does."""

    def __init__(self, messages: dict):
        self.messages = messages
        super().__init__(messages)


class NotFound(_LookupFailure):
    """No order or review exists with the given identifier."""


class NotFoundOrUnauthorized(_LookupFailure):
    """The review does not exist or belongs to someone else.

    Both cases share one error so callers cannot probe for reviews written
    by other users.
    """


class AlreadyAccepted(InvalidOperationError):
    """The order has already been accepted by an operator."""


# Most specific classes first; Starlette resolves handlers along the MRO.
_STATUS_CODES = {
    InvalidReference: 400,
    InvalidStatus: 400,
    DuplicateReview: 409,
    NotFoundOrUnauthorized: 404,
    NotFound: 404,
    AlreadyAccepted: 409,
    ValidationError: 400,
    ObjectNotFoundError: 404,
    InvalidOperationError: 400,
    Unauthenticated: 401,
    Forbidden: 403,
}


def error_body(exc: Exception) -> dict:
    """Render an exception as the JSON error envelope."""
    messages = getattr(exc, "messages", None)
    if messages is None and exc.args and isinstance(exc.args[0], dict):
        messages = exc.args[0]
    if not isinstance(messages, dict):
        messages = {"_error": [str(messages if messages is not None else exc)]}
    return {"error": type(exc).__name__, "messages": messages}


async def _handle_error(request: Request, exc: Exception) -> JSONResponse:
    status_code = 500
    for cls in type(exc).__mro__:
        if cls in _STATUS_CODES:
            status_code = _STATUS_CODES[cls]
            break
    return JSONResponse(status_code=status_code, content=error_body(exc))


def register_error_handlers(app: FastAPI) -> None:
    """Attach the domain and auth error handlers to a FastAPI app."""
    for exc_cls in _STATUS_CODES:
        app.add_exception_handler(exc_cls, _handle_error)
    app.add_exception_handler(AuthError, _handle_error)
