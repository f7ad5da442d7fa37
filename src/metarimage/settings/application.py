"""Internal application settings derived from user settings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path

from metarimage.i18n import Messages, get_messages
from metarimage.metar.codemap import CodeMap
from metarimage.settings.user import UserSettings
from metarimage.utils.time import TimeUtils


@dataclass
class AppPaths:
    """Application file and directory paths."""

    templates_dir: Path
    report_template: str = "report.html.j2"

    @classmethod
    def from_base_dir(cls, base_dir: Path) -> AppPaths:
        """Create paths from base directory."""
        return cls(templates_dir=base_dir / "templates")


class ApplicationSettings:
    """Application settings container.

    Combines user configuration with values derived from it once at
    startup: the two lookup tables, the active message table and the
    display timezone. The derived objects are read-only and can be shared
    by every report render.

    Examples:
        user_settings = UserSettings.load()
        app_settings = ApplicationSettings(user_settings)
        app_settings.weather_map["RA"]
    """

    def __init__(
        self,
        user_settings: UserSettings,
        paths: AppPaths | None = None,
        messages: Messages | None = None,
    ):
        """Initialize application settings with configuration sources."""
        self.user = user_settings
        self.paths = paths or AppPaths.from_base_dir(Path(__file__).parents[1])
        self.messages = messages or get_messages(user_settings.locale)
        self.weather_map = CodeMap(user_settings.weather_map)
        self.cloud_coverage_map = CodeMap(user_settings.cloud_coverage_map)

    @property
    def timezone(self) -> tzinfo:
        """Timezone used for wall-clock rendering."""
        return TimeUtils.get_timezone(self.user.timezone)
