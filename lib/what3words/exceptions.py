"""
what3words API Exceptions

This module contains custom exception classes for handling what3words API errors.
Every error carries the context of the operation that failed, so the message
reads like "retrieving grid section: request for ... returned unexpected status 500 ...".
"""

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class What3WordsError(Exception):
    """Base exception class for all what3words client errors, dood!

    Attributes:
        message: Human-readable error message (without context prefix)
        context: Short description of the operation that failed (if any)
    """

    def __init__(self, message: str, context: Optional[str] = None) -> None:
        self.message = message
        self.context = context
        super().__init__(str(self))
        logger.debug(f"{type(self).__name__}: {self}")

    def __str__(self) -> str:
        if self.context:
            return f"{self.context}: {self.message}"
        return self.message


class ValidationError(What3WordsError):
    """Raised locally, before any network call, when the request input is invalid.

    For example when a clip-to-polygon filter has too many points.
    """


class TransportError(What3WordsError):
    """Raised when the request could not be delivered or answered.

    Covers DNS failures, refused connections and timeouts. The original
    httpx exception is available as ``__cause__``.
    """


class ServiceError(What3WordsError):
    """Raised when the service answers with a non-200 status.

    Attributes:
        url: Requested URL (with query string)
        statusCode: HTTP status code
        status: Status line, e.g. "400 Bad Request"
        errorCode: Error code from the service error body (if it could be parsed)
        errorMessage: Error message from the service error body (if it could be parsed)
    """

    def __init__(
        self,
        url: str,
        statusCode: int,
        status: str,
        context: Optional[str] = None,
        errorCode: Optional[str] = None,
        errorMessage: Optional[str] = None,
    ) -> None:
        self.url = url
        self.statusCode = statusCode
        self.status = status
        self.errorCode = errorCode
        self.errorMessage = errorMessage

        message = f"request for {url} returned unexpected status {status}"
        if errorCode:
            message += f" (code: {errorCode}, message: {errorMessage or ''})"
        super().__init__(message, context)


class DecodeError(What3WordsError):
    """Raised when a 200 response body does not match the expected JSON shape.

    The underlying exception is available as ``__cause__``.
    """


def parseServiceError(
    url: str,
    statusCode: int,
    reasonPhrase: str,
    body: Any,
    context: Optional[str] = None,
) -> ServiceError:
    """Build ServiceError from a failed response.

    The what3words API reports failures as ``{"error": {"code": ..., "message": ...}}``.
    Any other body shape is ignored and only the status line is reported.

    Args:
        url: Requested URL
        statusCode: HTTP status code
        reasonPhrase: HTTP reason phrase (e.g. "Bad Request")
        body: Parsed JSON body, or None if it was not JSON
        context: Operation context

    Returns:
        ServiceError instance

    Example:
        >>> err = parseServiceError(url, 400, "Bad Request", {"error": {"code": "BadWords", "message": "..."}})
        >>> err.errorCode
        'BadWords'
    """
    status = f"{statusCode} {reasonPhrase}".strip()
    errorCode: Optional[str] = None
    errorMessage: Optional[str] = None

    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        errorCode = body["error"].get("code")
        errorMessage = body["error"].get("message")

    return ServiceError(
        url=url,
        statusCode=statusCode,
        status=status,
        context=context,
        errorCode=errorCode,
        errorMessage=errorMessage,
    )
