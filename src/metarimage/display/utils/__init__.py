"""Helpers for post-processing captured images."""

from metarimage.display.utils.image import crop_to_content, encode_jpeg

__all__ = ["crop_to_content", "encode_jpeg"]
