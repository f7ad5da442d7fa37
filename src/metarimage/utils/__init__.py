"""Common utility functions and helpers for the metarimage package."""

from metarimage.utils.time import Clock, FixedClock, SystemClock, TimeUtils

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "TimeUtils",
]
