"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import ClassVar, Final, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from metarimage.constants import (
    DEFAULT_API_URL,
    DEFAULT_CLOUD_COVERAGE_MAP,
    DEFAULT_WEATHER_MAP,
)
from metarimage.i18n import LocaleName
from metarimage.metar.codemap import CodeMapEntry

# Load environment variables from .env file(s)
load_dotenv()

logger: Final = logging.getLogger(__name__)


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


def _entries(pairs: list[tuple[str, str]]) -> list[CodeMapEntry]:
    return [CodeMapEntry(code=code, description=desc) for code, desc in pairs]


class UserSettings(BaseModel):
    """User settings for the METAR command and its rendering.

    Every value has a default, so a missing config.yaml still yields a
    working setup in ``auto`` capture mode.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/metarimage/config.yaml").expanduser(),
        Path("/etc/metarimage/config.yaml"),
    ]

    # Command settings
    command_name: str = Field("metar", min_length=1, description="Registered command name")
    command_alias: str = Field("气象", min_length=1, description="Registered command alias")

    # Render settings
    image_mode: Literal["auto", "manual"] = Field(
        "auto",
        description="auto: capture the report card; manual: capture a fixed viewport",
    )
    image_width: int | None = Field(None, gt=0, description="Viewport width (manual mode)")
    image_height: int | None = Field(None, gt=0, description="Viewport height (manual mode)")
    screenshot_quality: int = Field(80, ge=30, le=100, description="JPEG quality (%)")

    # Lookup tables
    weather_map: list[CodeMapEntry] = Field(
        default_factory=lambda: _entries(DEFAULT_WEATHER_MAP),
        description="Weather phenomenon code table",
    )
    cloud_coverage_map: list[CodeMapEntry] = Field(
        default_factory=lambda: _entries(DEFAULT_CLOUD_COVERAGE_MAP),
        description="Cloud coverage code table",
    )

    # Locale and data source
    locale: LocaleName = "zh-CN"
    timezone: str = Field("Asia/Shanghai", description="Timezone for wall-clock rendering")
    api_url: str = Field(DEFAULT_API_URL, description="METAR endpoint with an {icao} placeholder")
    request_timeout: float = Field(10, gt=0, description="HTTP timeout in seconds")

    # Developer options
    console_info: bool = Field(False, description="Verbose logging")
    page_auto_close: bool = Field(
        True, description="Remove the render scratch directory after capture"
    )

    # ---- validators ----
    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        if "{icao}" not in v:
            raise ValueError("api_url must contain an {icao} placeholder")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {v}") from exc
        return v

    @model_validator(mode="after")
    def check_manual_dimensions(self) -> UserSettings:
        if self.image_mode == "manual" and (
            self.image_width is None or self.image_height is None
        ):
            raise ValueError("image_width and image_height are required in manual mode")
        return self

    # ---- convenience methods ----
    @property
    def is_manual(self) -> bool:
        """Whether a fixed viewport is captured instead of the report card."""
        return self.image_mode == "manual"

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated UserSettings object; defaults when no file is found

        Raises:
            FileNotFoundError: If the given or METARIMAGE_CONFIG file is missing
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        if path is None:
            env_path = os.environ.get("METARIMAGE_CONFIG")
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(
                        f"Config file from METARIMAGE_CONFIG not found: {path}"
                    )
            else:
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    logger.debug("No config.yaml found, using defaults")
                    return cls()
        elif not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text(encoding="utf-8"))
            data = yaml.safe_load(raw) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
