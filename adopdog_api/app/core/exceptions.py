"""
Error taxonomy for the dog service and its HTTP rendering.

The service layer raises the exceptions below; ``register_exception_handlers``
turns them into JSON responses of the form ``{"error": ..., "details": ...}``
so that clients can branch on the stable ``error`` key.  Only validation
failures carry ``details``; store failures never leak their cause.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class DogServiceError(Exception):
    """Base class for failures surfaced by the dog service."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidIdError(DogServiceError):
    """The identifier is not a syntactically valid store identifier."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Invalid ID format") -> None:
        super().__init__(message)


class DogNotFoundError(DogServiceError):
    """The identifier is well formed but no record matches it."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Dog not found") -> None:
        super().__init__(message)


class DogValidationError(DogServiceError):
    """Submitted fields violate a presence or type constraint."""

    status_code = status.HTTP_400_BAD_REQUEST


class StoreUnavailableError(DogServiceError):
    """The store could not be reached or returned an unexpected error.

    Raised by store implementations with a technical message; the
    service re-raises it with the operation's public message.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def dog_service_error_handler(request: Request, exc: DogServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed request bodies in the service's error shape."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg')}")
    details = "; ".join(messages)
    logger.warning("Rejected request %s %s: %s", request.method, request.url.path, details)
    body = DogValidationError("Invalid request body", details=details).to_dict()
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the service error handlers to ``app``."""
    app.add_exception_handler(DogServiceError, dog_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
