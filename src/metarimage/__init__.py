"""Render airport METAR reports as images."""

__version__ = "0.1.0"
