# src/metarimage/display/protocols.py
from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

# Smallest byte sequence with JPEG start/end markers
PLACEHOLDER_JPEG = b"\xff\xd8\xff\xd9"


@runtime_checkable
class HtmlRenderer(Protocol):
    """Protocol defining the interface for HTML renderers.

    Implementations of this protocol must provide a method to render
    HTML content to an image file at a specified path.
    """

    def render_to_image(self, html: str, output_path: Path) -> None:
        """Render HTML to an image.

        Args:
            html: HTML content to render
            output_path: Path where the image will be saved
        """
        ...


class MockHtmlRenderer:
    """Mock implementation of HtmlRenderer for testing."""

    def __init__(self, image_bytes: bytes = PLACEHOLDER_JPEG):
        self.image_bytes = image_bytes
        self.render_calls: list[dict[str, object]] = []

    def render_to_image(self, html: str, output_path: Path) -> None:
        """Record the render call and write the canned image bytes."""
        self.render_calls.append({"html": html, "output_path": output_path})
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(self.image_bytes)


class ErrorSimulatingRenderer(MockHtmlRenderer):
    """Renderer mock that fails like a broken render engine."""

    def __init__(self, error: Exception | None = None):
        super().__init__()
        self.error = error or RuntimeError("Simulated render engine failure")

    def render_to_image(self, html: str, output_path: Path) -> None:
        self.render_calls.append({"html": html, "output_path": output_path})
        raise self.error
