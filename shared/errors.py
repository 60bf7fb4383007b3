"""
Shared error handling for the calendar feed service.
"""

from typing import Dict, Any, Optional


class FeedServiceException(Exception):
    """Base exception for feed service errors.

    ``message`` and ``details`` describe the underlying cause and are logged
    server-side; clients only ever see ``public_message``.
    """

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class FeedGenerationError(FeedServiceException):
    """A feed document could not be produced from upstream data."""

    public_message = "Could not create feed"


class FetchFailedError(FeedGenerationError):
    """Upstream fetch errors (transport failure, timeout, non-200 status)."""

    def __init__(self, message: str = "Could not fetch data", details: Optional[Dict[str, Any]] = None):
        super().__init__("FETCH_FAILED", message, details)


class DecodeFailedError(FeedGenerationError):
    """Upstream payload was not a valid list of calendar entries."""

    def __init__(self, message: str = "Could not decode data", details: Optional[Dict[str, Any]] = None):
        super().__init__("DECODE_FAILED", message, details)


class EncodeFailedError(FeedGenerationError):
    """Calendar entries could not be serialized."""

    def __init__(self, message: str = "Could not encode calendar", details: Optional[Dict[str, Any]] = None):
        super().__init__("ENCODE_FAILED", message, details)


class TokenNotFoundError(FeedServiceException):
    """No feed has been created for the requested token."""

    status_code = 404
    public_message = "No Feed for this Token"

    def __init__(self, message: str = "No Feed for this Token", details: Optional[Dict[str, Any]] = None):
        super().__init__("TOKEN_NOT_FOUND", message, details)
