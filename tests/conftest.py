import json
from datetime import UTC, datetime
from typing import Any

import pytest

from metarimage.constants import DEFAULT_CLOUD_COVERAGE_MAP, DEFAULT_WEATHER_MAP
from metarimage.metar.codemap import CodeMap
from metarimage.metar.models import RawReport
from metarimage.utils.time import FixedClock

SAMPLE_METAR = "METAR ZSPD 221651Z 24005MPS 9999 -RA BR FEW020 BKN045 18/09 Q1015 NOSIG RMK AO2 SLP123"

SAMPLE_DECODED: dict[str, Any] = {
    "wind_dir": 240,
    "wind_speed": 5,
    "wind_unit": "MPS",
    "visibility": 9999,
    "visibility_unit": "meter",
    "temperature": 18,
    "dewpoint": 9,
    "qnh": 1015,
    "qnh_unit": "hPa",
    "weather": ["-RA", "BR"],
    "cloud": [{"type": "FEW", "height": "020"}, {"type": "BKN", "height": "045"}],
    "forecast": "NOSIG",
}


@pytest.fixture
def weather_map() -> CodeMap:
    return CodeMap.from_pairs(DEFAULT_WEATHER_MAP)


@pytest.fixture
def cloud_map() -> CodeMap:
    return CodeMap.from_pairs(DEFAULT_CLOUD_COVERAGE_MAP)


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(datetime(2024, 3, 25, 10, 0, 0, tzinfo=UTC))


@pytest.fixture
def envelope() -> dict[str, Any]:
    return {
        "code": 20000,
        "message": "success",
        "data": {
            "icao": "ZSPD",
            "metar": SAMPLE_METAR,
            "metarDecode": json.dumps(SAMPLE_DECODED),
        },
    }


@pytest.fixture
def raw_report(envelope: dict[str, Any]) -> RawReport:
    return RawReport.from_payload(envelope["data"])


@pytest.fixture
def sample_decoded() -> dict[str, Any]:
    return dict(SAMPLE_DECODED)
