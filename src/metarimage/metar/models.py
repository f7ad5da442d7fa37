"""Typed models for the upstream METAR payload.

The decoded-fields payload is loosely shaped upstream, so every field is
optional and the validators turn wrong-shaped values into "missing"
instead of raising.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger: Final = logging.getLogger(__name__)


def _as_text(value: Any) -> str | None:
    """Coerce a scalar to display text; anything else counts as missing."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


class VisibilityUnit(str, Enum):
    """Units the upstream decoder reports visibility in."""

    METER = "meter"
    MILE = "mile"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> VisibilityUnit:
        """Map an upstream unit name, falling back to UNKNOWN."""
        if isinstance(value, str):
            for unit in cls:
                if unit.value == value.strip().lower():
                    return unit
        return cls.UNKNOWN


class CloudLayer(BaseModel):
    """One reported cloud layer; height is in hundreds of feet."""

    type: str
    height: str | None = None


class DecodedFields(BaseModel):
    """Pre-decoded METAR fields. Any field may be missing."""

    model_config = ConfigDict(extra="ignore")

    wind_dir: str | None = None
    wind_speed: str | None = None
    wind_unit: str | None = None
    visibility: str | None = None
    visibility_unit: VisibilityUnit = VisibilityUnit.UNKNOWN
    temperature: str | None = None
    dewpoint: str | None = None
    qnh: str | None = None
    qnh_unit: str | None = None
    weather: str | list[str] | None = None
    cloud: list[CloudLayer] = Field(default_factory=list)
    forecast: str | None = None

    @field_validator(
        "wind_dir",
        "wind_speed",
        "wind_unit",
        "visibility",
        "temperature",
        "dewpoint",
        "qnh",
        "qnh_unit",
        "forecast",
        mode="before",
    )
    @classmethod
    def _scalar(cls, v: Any) -> str | None:
        return _as_text(v)

    @field_validator("visibility_unit", mode="before")
    @classmethod
    def _unit(cls, v: Any) -> VisibilityUnit:
        return VisibilityUnit.parse(v)

    @field_validator("weather", mode="before")
    @classmethod
    def _weather(cls, v: Any) -> str | list[str] | None:
        if isinstance(v, str):
            return v.strip() or None
        if isinstance(v, list):
            codes = [c.strip() for c in v if isinstance(c, str) and c.strip()]
            return codes or None
        return None

    @field_validator("cloud", mode="before")
    @classmethod
    def _cloud(cls, v: Any) -> list[dict[str, str | None]]:
        if not isinstance(v, list):
            return []
        layers: list[dict[str, str | None]] = []
        for item in v:
            if not isinstance(item, Mapping):
                continue
            cover = _as_text(item.get("type"))
            if cover is None:
                continue
            layers.append({"type": cover, "height": _as_text(item.get("height"))})
        return layers


def parse_decoded_fields(payload: str | Mapping[str, Any] | None) -> DecodedFields:
    """Parse the ``metarDecode`` payload without ever failing.

    Args:
        payload: JSON text, an already-decoded object, or None

    Returns:
        DecodedFields, empty when the payload is missing or malformed
    """
    raw: Any = payload
    if isinstance(payload, str):
        if not payload.strip():
            return DecodedFields()
        try:
            raw = json.loads(payload)
        except json.JSONDecodeError as exc:
            logger.warning("Failed to parse metarDecode: %s", exc)
            return DecodedFields()

    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.warning("Ignoring metarDecode of type %s", type(raw).__name__)
        return DecodedFields()

    return DecodedFields.model_validate(dict(raw))


class RawReport(BaseModel):
    """Upstream ``data`` object for one airport and observation."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    icao: str | None = None
    metar: str | None = None
    metar_decode: str | dict[str, Any] | None = Field(None, alias="metarDecode")

    @field_validator("icao", "metar", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None

    @field_validator("metar_decode", mode="before")
    @classmethod
    def _payload(cls, v: Any) -> str | dict[str, Any] | None:
        return v if isinstance(v, (str, dict)) else None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> RawReport:
        """Build a report from the envelope's ``data`` object.

        A missing or empty ``metarDecode`` falls back to a JSON dump of the
        whole object, so top-level decoded keys are still picked up.
        """
        payload = dict(data)
        if not payload.get("metarDecode"):
            payload["metarDecode"] = json.dumps(dict(data), ensure_ascii=False, default=str)
        return cls.model_validate(payload)

    def decoded(self) -> DecodedFields:
        """Decoded fields of this report."""
        return parse_decoded_fields(self.metar_decode)
