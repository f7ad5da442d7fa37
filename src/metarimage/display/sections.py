"""Report assembly: decoded METAR fields → typed report sections.

The sections are plain data; turning them into HTML is the template
renderer's job, so both halves can be tested on their own.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime, tzinfo

from pydantic import BaseModel

from metarimage.i18n import ZH_CN, Messages
from metarimage.metar.decoder import extract_rmk, format_metar_time, parse_clouds, parse_weather
from metarimage.metar.models import DecodedFields, RawReport, VisibilityUnit
from metarimage.settings.application import ApplicationSettings
from metarimage.utils.time import Clock, SystemClock


class ReportItem(BaseModel):
    """A labelled value shown on the report card."""

    label: str
    value: str


class ReportSections(BaseModel):
    """Everything the report card shows, already formatted."""

    lang: str
    title: str
    header: str
    generated_at: str
    overview: list[ReportItem]
    details: list[ReportItem]
    raw_label: str
    raw_metar: str
    label_separator: str


def visibility_unit_label(unit: VisibilityUnit, messages: Messages = ZH_CN) -> str:
    """Word for a visibility unit. Not configurable, unlike the code tables."""
    if unit is VisibilityUnit.METER:
        return messages.unit_meter
    if unit is VisibilityUnit.MILE:
        return messages.unit_mile
    return messages.unknown


def _with_unit(value: str | None, unit: str | None, fallback: str) -> str:
    if value is None:
        return fallback
    return f"{value}{unit}" if unit else value


def _is_calm(wind_dir: str | None) -> bool:
    """Missing or all-zero direction, as in a 00000KT group."""
    return wind_dir is None or not wind_dir.strip("0")


class ReportSectionsBuilder:
    """Builds report sections from a RawReport.

    The two lookup tables and the message table are fixed at construction
    and never modified. Current time comes from the injected clock.
    """

    def __init__(
        self,
        weather_map: Mapping[str, str],
        cloud_coverage_map: Mapping[str, str],
        messages: Messages = ZH_CN,
        clock: Clock | None = None,
        tz: tzinfo = UTC,
    ) -> None:
        """Initialize the builder.

        Args:
            weather_map: Weather phenomenon lookup
            cloud_coverage_map: Cloud coverage lookup
            messages: Locale table
            clock: Source of "now" (default: system clock)
            tz: Timezone for wall-clock readings
        """
        self.weather_map = weather_map
        self.cloud_coverage_map = cloud_coverage_map
        self.messages = messages
        self.clock = clock or SystemClock()
        self.tz = tz

    @classmethod
    def from_settings(
        cls, settings: ApplicationSettings, clock: Clock | None = None
    ) -> ReportSectionsBuilder:
        """Create a builder wired to the configured tables and locale."""
        return cls(
            weather_map=settings.weather_map,
            cloud_coverage_map=settings.cloud_coverage_map,
            messages=settings.messages,
            clock=clock,
            tz=settings.timezone,
        )

    def build(self, report: RawReport) -> ReportSections:
        """Build the report sections.

        Args:
            report: Upstream report for one airport

        Returns:
            Fully formatted sections

        Raises:
            MetarTimeFormatError: If the raw METAR has no observation time
        """
        m = self.messages
        now = self.clock.now()
        decoded = report.decoded()

        generated = m.generated_at_format.format(now.astimezone(self.tz))

        return ReportSections(
            lang=m.html_lang,
            title=m.title,
            header=m.header.format(icao=report.icao or m.unknown),
            generated_at=m.generated_at.format(timestamp=generated),
            overview=self._overview(decoded),
            details=self._details(report, decoded, now),
            raw_label=m.label_raw,
            raw_metar=report.metar or m.unknown,
            label_separator=m.label_separator,
        )

    def _overview(self, d: DecodedFields) -> list[ReportItem]:
        m = self.messages
        unit = visibility_unit_label(d.visibility_unit, m)
        return [
            ReportItem(
                label=m.label_wind_dir,
                value=m.calm_wind if _is_calm(d.wind_dir) else f"{d.wind_dir}°",
            ),
            ReportItem(
                label=m.label_wind_speed,
                value=_with_unit(d.wind_speed, f" {d.wind_unit or 'm/s'}", m.not_available),
            ),
            ReportItem(
                label=m.label_temperature,
                value=_with_unit(d.temperature, "°C", m.not_available),
            ),
            ReportItem(
                label=m.label_visibility,
                value=_with_unit(d.visibility, f" {unit}", m.not_available),
            ),
            ReportItem(
                label=m.label_pressure,
                value=_with_unit(d.qnh, f" {d.qnh_unit or 'hPa'}", m.not_available),
            ),
        ]

    def _details(
        self, report: RawReport, d: DecodedFields, now: datetime
    ) -> list[ReportItem]:
        m = self.messages
        unit = visibility_unit_label(d.visibility_unit, m)

        if report.metar:
            observed = format_metar_time(report.metar, now, self.tz, m)
        else:
            observed = m.unknown

        return [
            ReportItem(label=m.label_time, value=observed),
            ReportItem(label=m.label_wind_dir, value=_with_unit(d.wind_dir, "°", m.unknown)),
            ReportItem(
                label=m.label_wind_speed,
                value=_with_unit(d.wind_speed, f" {d.wind_unit}" if d.wind_unit else None, m.unknown),
            ),
            ReportItem(label=m.label_visibility, value=_with_unit(d.visibility, f" {unit}", m.unknown)),
            ReportItem(
                label=m.label_weather,
                value=parse_weather(d.weather, self.weather_map, m),
            ),
            ReportItem(label=m.label_temperature, value=_with_unit(d.temperature, "°C", m.unknown)),
            ReportItem(label=m.label_dewpoint, value=_with_unit(d.dewpoint, "°C", m.unknown)),
            ReportItem(
                label=m.label_pressure,
                value=_with_unit(d.qnh, f" {d.qnh_unit}" if d.qnh_unit else None, m.unknown),
            ),
            ReportItem(
                label=m.label_clouds,
                value=parse_clouds(d.cloud, self.cloud_coverage_map, m),
            ),
            ReportItem(label=m.label_forecast, value=d.forecast or m.no_significant_change),
            ReportItem(label=m.label_remark, value=extract_rmk(report.metar, m)),
        ]
