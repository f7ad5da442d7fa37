# filepath: src/metarimage/controller.py
"""Core controller for the METAR image report."""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from metarimage.display.protocols import HtmlRenderer
from metarimage.display.render import TemplateRenderer, WkhtmlToImageRenderer
from metarimage.display.sections import ReportSectionsBuilder
from metarimage.metar.api import MetarAPI
from metarimage.metar.models import RawReport
from metarimage.settings import ApplicationSettings, UserSettings
from metarimage.utils.time import Clock

logger: Final = logging.getLogger(__name__)


@dataclass
class ReportOutcome:
    """What the command shows the user: an image or a message."""

    image: bytes | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        """Whether an image was produced."""
        return self.image is not None


class MetarReporter:
    """Main controller class for the METAR report command.

    This class orchestrates the whole workflow for one request:
    - Fetching the METAR from the weather API
    - Decoding it into report sections
    - Rendering the report HTML
    - Capturing the HTML as a JPEG image

    ``handle`` is the only place failures are caught. Whatever goes wrong,
    the user gets one generic message and the log gets the details.
    """

    def __init__(
        self,
        settings: UserSettings | None = None,
        metar_api: MetarAPI | None = None,
        sections_builder: ReportSectionsBuilder | None = None,
        template_renderer: TemplateRenderer | None = None,
        image_renderer: HtmlRenderer | None = None,
        clock: Clock | None = None,
        debug: bool = False,
    ):
        """Initialize the report controller.

        Args:
            settings: User settings (default: loaded from config.yaml)
            metar_api: Optional custom METAR API client
            sections_builder: Optional custom report sections builder
            template_renderer: Optional custom template renderer
            image_renderer: Optional custom HTML to image renderer
            clock: Optional clock for "now" (default: system clock)
            debug: Enable debug logging and stack traces in the log
        """
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(message)s",
        )

        self.config: UserSettings = settings or UserSettings.load()
        self.settings = ApplicationSettings(self.config)
        self.messages = self.settings.messages
        self.debug = debug

        self.metar_api = metar_api or MetarAPI(
            self.config.api_url,
            timeout=self.config.request_timeout,
            messages=self.messages,
        )
        self.sections_builder = sections_builder or ReportSectionsBuilder.from_settings(
            self.settings, clock
        )
        self.template_renderer = template_renderer or TemplateRenderer(app_settings=self.settings)
        self.image_renderer = image_renderer or WkhtmlToImageRenderer.from_settings(self.config)

    def _verbose(self, message: str, *args: Any) -> None:
        """Log at info level only when console_info is enabled."""
        if self.config.console_info:
            logger.info(message, *args)

    def render_html(self, report: RawReport) -> str:
        """Render the report document for an upstream report.

        Raises:
            MetarTimeFormatError: If the raw METAR has no observation time
        """
        sections = self.sections_builder.build(report)
        return self.template_renderer.render_report(sections)

    def render_report(self, icao: str) -> bytes:
        """Fetch, decode, render and capture the report of an airport.

        Args:
            icao: ICAO airport code

        Returns:
            JPEG image bytes

        Raises:
            MetarAPIError: When the weather API request fails
            MetarTimeFormatError: If the raw METAR has no observation time
            RenderError: When the image capture fails
        """
        icao = icao.strip().upper()
        report = self.metar_api.fetch_report(icao)
        self._verbose("METAR data: %s", report.model_dump(by_alias=True))

        html = self.render_html(report)

        self._verbose("Screenshot quality: %s", self.config.screenshot_quality)
        if self.config.is_manual:
            self._verbose("Viewport: %sx%s", self.config.image_width, self.config.image_height)

        with tempfile.TemporaryDirectory() as td:
            image_path = Path(td) / f"{icao}.jpg"
            self.image_renderer.render_to_image(html, image_path)
            return image_path.read_bytes()

    def handle(self, icao: str | None, user_id: str | None = None) -> ReportOutcome:
        """Run one report request and map failures to a user message.

        Args:
            icao: ICAO airport code as typed by the user
            user_id: Requesting user, for the verbose log

        Returns:
            ReportOutcome with the image, or with the message to show
        """
        if not icao or not icao.strip():
            return ReportOutcome(message=self.messages.invalid_icao)

        self._verbose("User %s requested ICAO: %s", user_id or "-", icao)

        try:
            image = self.render_report(icao)
        except Exception as exc:
            logger.error(
                "Failed to fetch, generate or send METAR: %s",
                exc,
                exc_info=self.debug or self.config.console_info,
            )
            return ReportOutcome(message=self.messages.fetch_failed)

        return ReportOutcome(image=image)
