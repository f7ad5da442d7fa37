"""Report rendering: sections → HTML → JPEG."""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Final, Literal, Optional, cast

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape
from PIL import Image

from metarimage.constants import CAPTURE_SELECTOR, CAPTURE_TOLERANCE, PAGE_BACKGROUND
from metarimage.display.errors import RenderError
from metarimage.display.protocols import HtmlRenderer
from metarimage.display.sections import ReportSections
from metarimage.display.utils.image import crop_to_content, encode_jpeg
from metarimage.settings import ApplicationSettings, UserSettings

logger: Final = logging.getLogger(__name__)


class TemplateRenderer:
    """Handles Jinja2 template environment and rendering.

    The report template receives a single ``report`` variable holding
    ReportSections; every value in it is already formatted text, so the
    template does no decoding of its own. Output is autoescaped.
    """

    report_template: Template

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        app_settings: Optional[ApplicationSettings] = None,
    ) -> None:
        """Initialize the template renderer.

        Args:
            templates_dir: Directory containing templates (default: from settings)
            app_settings: Application settings (default: built from defaults)
        """
        self.app_settings = app_settings or ApplicationSettings(UserSettings())
        self.templates_dir = templates_dir or self.app_settings.paths.templates_dir

        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=select_autoescape(["html", "html.j2"]),
        )
        self.report_template = self.env.get_template(self.app_settings.paths.report_template)

    def render_report(self, sections: ReportSections) -> str:
        """Render the report template.

        Args:
            sections: Formatted report sections

        Returns:
            Rendered HTML
        """
        return cast(str, self.report_template.render(report=sections))


class WkhtmlToImageRenderer(HtmlRenderer):
    """HTML to JPEG renderer using wkhtmltoimage.

    Two capture modes are supported:

    - ``manual``: a fixed viewport of ``width`` x ``height`` is captured.
    - ``auto``: the whole page is captured, then cropped to the report card
      (everything that differs from the page background).

    Each render gets its own scratch directory holding the HTML and the raw
    capture. It is removed afterwards unless ``auto_close`` is off, in which
    case its path is logged so the page can be opened in a browser.

    Note: Requires wkhtmltopdf (https://wkhtmltopdf.org/) installed on the
    system, and on Linux also requires xvfb.
    """

    def __init__(
        self,
        mode: Literal["auto", "manual"] = "auto",
        width: Optional[int] = None,
        height: Optional[int] = None,
        quality: int = 80,
        auto_close: bool = True,
        background: tuple[int, int, int] = PAGE_BACKGROUND,
        tolerance: int = CAPTURE_TOLERANCE,
    ) -> None:
        """Initialize renderer.

        Args:
            mode: Capture mode
            width: Viewport width in pixels (required in manual mode)
            height: Viewport height in pixels (required in manual mode)
            quality: JPEG quality, 30-100
            auto_close: Remove the scratch directory after capture
            background: Page background colour used to find the card
            tolerance: Difference from the background ignored when cropping
        """
        if mode == "manual" and (width is None or height is None):
            raise ValueError("width and height are required in manual mode")
        self.mode = mode
        self.width = width
        self.height = height
        self.quality = quality
        self.auto_close = auto_close
        self.background = background
        self.tolerance = tolerance

    @classmethod
    def from_settings(cls, user_settings: UserSettings) -> WkhtmlToImageRenderer:
        """Create a renderer from the render section of the user settings."""
        return cls(
            mode=user_settings.image_mode,
            width=user_settings.image_width,
            height=user_settings.image_height,
            quality=user_settings.screenshot_quality,
            auto_close=user_settings.page_auto_close,
        )

    def render_to_image(self, html: str, output_path: Path) -> None:
        """Render HTML to JPEG.

        Args:
            html: HTML content to render
            output_path: Path where the image will be saved

        Raises:
            RenderError: If wkhtmltoimage fails or the card is not found
        """
        workdir = Path(tempfile.mkdtemp(prefix="metarimage-"))
        try:
            html_path = workdir / "report.html"
            html_path.write_text(html, "utf-8")

            if self.mode == "manual":
                logger.debug("Capturing %sx%s viewport", self.width, self.height)
                self._run(
                    html_path,
                    output_path,
                    [
                        "--width",
                        str(self.width),
                        "--height",
                        str(self.height),
                        "--format",
                        "jpg",
                        "--quality",
                        str(self.quality),
                    ],
                )
                return

            capture_path = workdir / "page.png"
            self._run(html_path, capture_path, ["--format", "png"])
            with Image.open(capture_path) as page:
                card = crop_to_content(page, self.background, self.tolerance)
            if card is None:
                raise RenderError(f"Could not find the {CAPTURE_SELECTOR} element.")
            output_path.write_bytes(encode_jpeg(card, self.quality))
        finally:
            if self.auto_close:
                shutil.rmtree(workdir, ignore_errors=True)
            else:
                logger.info("Render files kept in %s", workdir)

    def _run(self, html_path: Path, output_path: Path, options: list[str]) -> None:
        cmd = [
            "wkhtmltoimage",
            "--quiet",
            "--encoding",
            "utf-8",
            *options,
            html_path.as_posix(),
            output_path.as_posix(),
        ]

        if platform.system() == "Linux":
            cmd = ["xvfb-run", "-a"] + cmd

        try:
            subprocess.run(cmd, check=True)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise RenderError(f"wkhtmltoimage failed: {exc}") from exc
