"""Application settings management.

This package provides:
- UserSettings: User-configurable settings loaded from config.yaml
- ApplicationSettings: Lookup tables, messages and paths derived from them
"""

from metarimage.settings.application import ApplicationSettings, AppPaths
from metarimage.settings.user import UserSettings

__all__ = ["AppPaths", "ApplicationSettings", "UserSettings"]
