"""Exceptions raised while turning a report document into an image."""

from __future__ import annotations


class RenderError(RuntimeError):
    """Raised when the render engine fails or the capture target is missing."""
