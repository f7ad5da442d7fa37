"""Weather API client for the XFlysim real-time METAR endpoint."""

from __future__ import annotations

import logging
from typing import Any, Final

import requests

from metarimage.constants import API_SUCCESS_CODE, DEFAULT_API_URL
from metarimage.i18n import ZH_CN, Messages

from .errors import HTTPStatusError, NetworkError, ParseError, UpstreamError
from .models import RawReport

logger: Final = logging.getLogger(__name__)


class MetarAPI:
    """Client for the METAR endpoint.

    Issues one GET per report, unwraps the ``{code, message, data}``
    envelope and returns the ``data`` object as a RawReport. No retries.
    """

    def __init__(
        self,
        url_template: str = DEFAULT_API_URL,
        timeout: float = 10,
        messages: Messages = ZH_CN,
    ) -> None:
        """Initialize the API client.

        Args:
            url_template: Endpoint URL with an ``{icao}`` placeholder
            timeout: Timeout for API requests in seconds
            messages: Locale table for the default failure message
        """
        self.url_template = url_template
        self.timeout = timeout
        self.messages = messages

    def build_url(self, icao: str) -> str:
        """Return the endpoint URL for an airport (code is upper-cased)."""
        return self.url_template.format(icao=icao.strip().upper())

    def fetch_report(self, icao: str) -> RawReport:
        """Retrieve the current METAR of an airport.

        Args:
            icao: ICAO airport code

        Returns:
            RawReport built from the envelope's ``data`` object

        Raises:
            NetworkError: When network connectivity issues occur
            ParseError: When the body is not a JSON object
            UpstreamError: When the envelope code is not a success
            HTTPStatusError: For HTTP error statuses
        """
        url = self.build_url(icao)

        try:
            resp = requests.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("METAR API network error: %s", exc)
            raise NetworkError(f"Network error: {exc}", exc) from exc

        if resp.status_code != 200:
            try:
                body = resp.json()
            except ValueError:
                body = None
            error = HTTPStatusError.from_response(
                resp.status_code, body if isinstance(body, dict) else None, resp.text
            )
            logger.error("METAR API error: %s", error)
            raise error

        try:
            envelope: Any = resp.json()
        except ValueError as exc:
            raise ParseError(f"Invalid JSON from METAR API: {exc}", exc) from exc

        if not isinstance(envelope, dict):
            raise ParseError(f"Unexpected METAR API response: {envelope!r}")

        code = envelope.get("code")
        if code != API_SUCCESS_CODE:
            message = envelope.get("message") or self.messages.upstream_failed
            raise UpstreamError(
                code if isinstance(code, int) else 0, str(message), envelope
            )

        data = envelope.get("data") or {}
        if not isinstance(data, dict):
            raise ParseError(f"Unexpected METAR data: {data!r}")

        return RawReport.from_payload(data)
