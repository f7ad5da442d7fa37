"""Exception classes for METAR retrieval and decoding.

A fetch can fail in four ways: the request never completes, the server
answers with an HTTP error status, the envelope carries a failure code,
or the body is not the expected JSON. Each has its own MetarAPIError
subclass. Decoding has a single hard failure, MetarTimeFormatError.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class MetarAPIError(Exception):
    """Base class for failures while fetching a METAR report."""

    def __init__(
        self, code: int, message: str, response: Optional[Dict[str, Any]] = None
    ) -> None:
        """Initialize the exception.

        Args:
            code: HTTP status, envelope code, or 0 when there is neither
            message: Human-readable error message
            response: Optional raw response body for debugging
        """
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message: str = message
        self.response: Optional[Dict[str, Any]] = response


class NetworkError(MetarAPIError):
    """The request did not complete (DNS, connection, timeout)."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        super().__init__(0, message)
        self.original_error = original_error


class HTTPStatusError(MetarAPIError):
    """The endpoint answered with a status other than 200."""

    @classmethod
    def from_response(
        cls, status_code: int, body: Optional[Dict[str, Any]], text: str = ""
    ) -> HTTPStatusError:
        """Build the error from a failed response.

        The message is the body's ``message`` field when the body is a JSON
        object carrying one, else the raw text, else ``HTTP <status>``.
        """
        message = body.get("message") if isinstance(body, dict) else None
        return cls(status_code, str(message or text or f"HTTP {status_code}"), body)


class UpstreamError(MetarAPIError):
    """The envelope came back with a code other than the success code."""


class ParseError(MetarAPIError):
    """The body is not JSON, or not shaped like the envelope."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        super().__init__(0, message)
        self.original_error = original_error


class MetarTimeFormatError(ValueError):
    """Raised when raw METAR text has no ``DDHHMMZ`` observation time."""

    def __init__(self, metar: str) -> None:
        super().__init__("Invalid METAR time format")
        self.metar = metar
