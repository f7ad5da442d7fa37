"""METAR field decoding into display text.

All functions are pure. Only ``format_metar_time`` can fail, when the raw
text carries no observation time.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime, timedelta, tzinfo
from typing import Final

from metarimage.constants import METAR_LOCAL_OFFSET_HOURS
from metarimage.i18n import ZH_CN, Messages
from metarimage.metar.errors import MetarTimeFormatError
from metarimage.metar.models import CloudLayer
from metarimage.utils.time import TimeUtils

METAR_TIME_PATTERN: Final = re.compile(r"\d{6}Z")
RMK_MARKER: Final = "RMK"


def parse_weather(
    codes: str | Sequence[str] | None,
    weather_map: Mapping[str, str],
    messages: Messages = ZH_CN,
) -> str:
    """Describe one or more weather-phenomenon codes.

    Args:
        codes: A single code, codes in report order, or None
        weather_map: Code → description lookup
        messages: Locale table for the fallback literals

    Returns:
        Descriptions joined in input order; unmapped codes read as unknown
    """
    if not codes:
        return messages.clear_sky
    if isinstance(codes, str):
        return weather_map.get(codes, messages.unknown_weather)
    return messages.weather_separator.join(
        weather_map.get(code, messages.unknown_weather) for code in codes
    )


def parse_cloud_coverage(code: str, cloud_map: Mapping[str, str]) -> str:
    """Describe a coverage code, or return it as is when unmapped."""
    return cloud_map.get(code, code)


def parse_clouds(
    layers: Sequence[CloudLayer] | None,
    cloud_map: Mapping[str, str],
    messages: Messages = ZH_CN,
) -> str:
    """Describe the reported cloud layers, one clause per layer."""
    if not layers:
        return messages.no_cloud_layer
    return messages.cloud_separator.join(
        messages.cloud_layer.format(
            coverage=parse_cloud_coverage(layer.type, cloud_map),
            height=layer.height if layer.height is not None else messages.unknown,
        )
        for layer in layers
    )


def extract_rmk(metar: str | None, messages: Messages = ZH_CN) -> str:
    """Return the remarks that follow the first ``RMK`` marker."""
    if not metar:
        return messages.no_remark
    index = metar.find(RMK_MARKER)
    if index == -1:
        return messages.no_remark
    return metar[index + len(RMK_MARKER) :].strip()


def resolve_metar_time(metar: str, now: datetime) -> datetime:
    """Reconstruct the full UTC observation time of a METAR.

    The report only carries day, hour and minute. Year and month are taken
    from ``now``; a day later than today's UTC day is assumed to belong to the
    previous month. This guess can be wrong around a year boundary when the
    day number is ambiguous.

    Args:
        metar: Raw METAR text
        now: Current moment (naive values are taken as UTC)

    Returns:
        Timezone-aware UTC datetime of the observation

    Raises:
        MetarTimeFormatError: If no ``DDHHMMZ`` token is present
    """
    match = METAR_TIME_PATTERN.search(metar)
    if match is None:
        raise MetarTimeFormatError(metar)

    token = match.group(0)
    day = int(token[0:2])
    hour = int(token[2:4])
    minute = int(token[4:6])

    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    now_utc = now.astimezone(UTC)

    year, month = now_utc.year, now_utc.month
    if day > now_utc.day:
        year, month = TimeUtils.previous_month(year, month)

    return TimeUtils.utc_from_components(year, month, day, hour, minute)


def format_metar_time(
    metar: str,
    now: datetime,
    tz: tzinfo = UTC,
    messages: Messages = ZH_CN,
) -> str:
    """Render the observation time as ``UTC hh:mm / CST  hh:mm``.

    The instant shifted back by eight hours is printed under the UTC label
    and the observation instant under the CST label. Both are shown as wall
    clock readings in ``tz``. The labelling is kept exactly as the report
    has always shown it; it is only truthful when ``tz`` is UTC+8.

    Raises:
        MetarTimeFormatError: If no ``DDHHMMZ`` token is present
    """
    observed = resolve_metar_time(metar, now)
    shifted = observed - timedelta(hours=METAR_LOCAL_OFFSET_HOURS)
    return messages.metar_time.format(
        shifted=TimeUtils.format_clock(shifted, tz),
        utc=TimeUtils.format_clock(observed, tz),
    )
