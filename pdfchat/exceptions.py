"""
Error types raised by the PDF Chat services.

Every failure the answer flow can produce is one of these kinds. The API layer
maps them onto HTTP responses; ``kind`` and ``retryable`` are reported to the
caller alongside the message.
"""

from typing import Any, Dict, Optional


GENERIC_PROCESSING_ERROR = "Failed to parse the PDF or answer the question."


class PDFChatError(Exception):
    """Base class for all PDF Chat errors."""

    kind = "internal"
    status_code = 500
    retryable = False

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class DocumentValidationError(PDFChatError):
    """The request does not carry what is needed to answer it."""

    kind = "validation"
    status_code = 400


class ExtractionError(PDFChatError):
    """The uploaded file could not be read as a PDF."""

    kind = "extraction"


class UpstreamAPIError(PDFChatError):
    """The generative AI endpoint could not be reached or returned an error status."""

    kind = "upstream_api"
    retryable = True

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.status = status
        # Client errors from the API (bad key, bad request) won't succeed on retry
        if status is not None and 400 <= status < 500 and status != 429:
            self.retryable = False


class UpstreamResponseError(PDFChatError):
    """The generative AI endpoint answered with an unexpected payload."""

    kind = "upstream_response"
