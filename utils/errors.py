import logging
from enum import Enum
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    CONTENT_POLICY = "content_policy"
    UNPARSEABLE_RESPONSE = "unparseable_response"
    STORAGE = "storage"
    GENERIC = "generic"


# (HTTP status, user-facing message) per error kind
ERROR_RESPONSES: Dict[ErrorKind, Tuple[int, str]] = {
    ErrorKind.INVALID_INPUT: (400, "Invalid request."),
    ErrorKind.AUTHENTICATION: (401, "Invalid API key. Please check your API key."),
    ErrorKind.RATE_LIMIT: (429, "Rate limit exceeded. Please wait a moment and try again."),
    ErrorKind.CONTENT_POLICY: (400, "Request was rejected due to content policy. Try adjusting your prompt or images."),
    ErrorKind.UNPARSEABLE_RESPONSE: (502, "Failed to parse platform-specific prompts from response"),
    ErrorKind.STORAGE: (500, "Failed to upload image"),
    ErrorKind.GENERIC: (500, "Internal server error. Please try again."),
}

# Never worth retrying
NON_RETRYABLE_KINDS = {ErrorKind.INVALID_INPUT, ErrorKind.AUTHENTICATION, ErrorKind.CONTENT_POLICY}

_AUTH_MARKERS = ("authentication", "invalid api", "unauthorized", "unauthenticated", "invalid_api_key")
_RATE_LIMIT_MARKERS = ("rate limit", "rate_limit", "too many requests")
_CONTENT_POLICY_MARKERS = ("content policy", "content_policy", "safety", "sensitive", "nsfw", "flagged")


class StyleExtractorError(Exception):
    """Base error carrying an ErrorKind and an optional user-facing message."""

    kind = ErrorKind.GENERIC

    def __init__(self, message: Optional[str] = None, kind: Optional[ErrorKind] = None):
        if kind is not None:
            self.kind = kind
        self.message = message or ERROR_RESPONSES[self.kind][1]
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return ERROR_RESPONSES[self.kind][0]


class InputValidationError(StyleExtractorError):
    kind = ErrorKind.INVALID_INPUT


class ModelInvocationError(StyleExtractorError):
    """Raised when a model call fails; kind comes from classify_invocation_error."""


class UnparseableResponseError(StyleExtractorError):
    kind = ErrorKind.UNPARSEABLE_RESPONSE


class StorageError(StyleExtractorError):
    kind = ErrorKind.STORAGE


def _status_code_of(exc: Exception) -> Optional[int]:
    status = getattr(exc, "status_code", None)
    if status is None:
        response = getattr(exc, "response", None)
        status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def classify_invocation_error(exc: Exception) -> ErrorKind:
    """
    Map an exception raised by an external model API to an ErrorKind.

    This is best-effort matching against third-party error text and status
    codes; keep every such check here so call sites never inspect messages.

    Args:
        exc: Exception raised by the Groq SDK, httpx, or a failed prediction

    Returns:
        The closed error kind used for the response mapping and retry policy
    """
    if isinstance(exc, StyleExtractorError) and exc.kind != ErrorKind.GENERIC:
        return exc.kind

    status = _status_code_of(exc)
    if status in (401, 403):
        return ErrorKind.AUTHENTICATION
    if status == 429:
        return ErrorKind.RATE_LIMIT

    message = str(exc).lower()
    if any(marker in message for marker in _AUTH_MARKERS) or "401" in message:
        return ErrorKind.AUTHENTICATION
    if any(marker in message for marker in _RATE_LIMIT_MARKERS):
        return ErrorKind.RATE_LIMIT
    if any(marker in message for marker in _CONTENT_POLICY_MARKERS):
        return ErrorKind.CONTENT_POLICY
    return ErrorKind.GENERIC


def error_payload(exc: Exception, generic_message: Optional[str] = None) -> Tuple[int, str]:
    """Return (HTTP status, user-facing message) for any exception."""
    status, message = ERROR_RESPONSES[ErrorKind.GENERIC]
    if isinstance(exc, StyleExtractorError):
        if exc.kind in (ErrorKind.INVALID_INPUT, ErrorKind.UNPARSEABLE_RESPONSE, ErrorKind.STORAGE):
            return exc.status_code, exc.message
        if exc.kind != ErrorKind.GENERIC:
            return ERROR_RESPONSES[exc.kind]
    else:
        logger.error(f"Unexpected error: {str(exc)}")
    return status, generic_message or message
