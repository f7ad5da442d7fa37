"""METAR package - holds API client, decoder, models, and custom errors."""

from .api import MetarAPI
from .codemap import CodeMap, CodeMapEntry
from .decoder import (
    extract_rmk,
    format_metar_time,
    parse_cloud_coverage,
    parse_clouds,
    parse_weather,
    resolve_metar_time,
)
from .errors import (
    HTTPStatusError,
    MetarAPIError,
    MetarTimeFormatError,
    NetworkError,
    ParseError,
    UpstreamError,
)
from .models import CloudLayer, DecodedFields, RawReport, VisibilityUnit, parse_decoded_fields

__all__ = [
    "CloudLayer",
    "CodeMap",
    "CodeMapEntry",
    "DecodedFields",
    "HTTPStatusError",
    "MetarAPI",
    "MetarAPIError",
    "MetarTimeFormatError",
    "NetworkError",
    "ParseError",
    "RawReport",
    "UpstreamError",
    "VisibilityUnit",
    "extract_rmk",
    "format_metar_time",
    "parse_cloud_coverage",
    "parse_clouds",
    "parse_decoded_fields",
    "parse_weather",
    "resolve_metar_time",
]
