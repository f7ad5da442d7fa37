import logging
from unittest.mock import Mock

import pytest

from metarimage.controller import MetarReporter, ReportOutcome
from metarimage.display.errors import RenderError
from metarimage.display.protocols import PLACEHOLDER_JPEG, ErrorSimulatingRenderer, MockHtmlRenderer
from metarimage.metar.api import MetarAPI
from metarimage.metar.errors import NetworkError, UpstreamError
from metarimage.metar.models import RawReport
from metarimage.settings import UserSettings
from metarimage.utils.time import FixedClock

from conftest import SAMPLE_METAR


@pytest.fixture
def metar_api(raw_report: RawReport) -> Mock:
    api = Mock(spec=MetarAPI)
    api.fetch_report.return_value = raw_report
    return api


@pytest.fixture
def renderer() -> MockHtmlRenderer:
    return MockHtmlRenderer()


@pytest.fixture
def reporter(metar_api: Mock, renderer: MockHtmlRenderer, fixed_clock: FixedClock) -> MetarReporter:
    return MetarReporter(
        settings=UserSettings(timezone="UTC"),
        metar_api=metar_api,
        image_renderer=renderer,
        clock=fixed_clock,
    )


def test_handle_returns_image(reporter: MetarReporter, metar_api: Mock, renderer: MockHtmlRenderer) -> None:
    outcome = reporter.handle(" zspd ", user_id="42")

    assert outcome.ok
    assert outcome == ReportOutcome(image=PLACEHOLDER_JPEG)
    assert outcome.message is None
    metar_api.fetch_report.assert_called_once_with("ZSPD")

    assert len(renderer.render_calls) == 1
    call = renderer.render_calls[0]
    assert call["output_path"].name == "ZSPD.jpg"
    html = call["html"]
    assert "METAR 信息 - ZSPD" in html
    assert "UTC 08:51 / CST  16:51" in html
    assert SAMPLE_METAR in html


def test_image_temp_file_is_removed(reporter: MetarReporter, renderer: MockHtmlRenderer) -> None:
    reporter.render_report("ZSPD")
    assert not renderer.render_calls[0]["output_path"].exists()


@pytest.mark.parametrize("icao", [None, "", "   "])
def test_handle_missing_icao(reporter: MetarReporter, metar_api: Mock, icao) -> None:
    outcome = reporter.handle(icao)

    assert not outcome.ok
    assert outcome.message == "请提供一个有效的 ICAO 代码。"
    metar_api.fetch_report.assert_not_called()


@pytest.mark.parametrize(
    "error",
    [
        NetworkError("Network error: offline"),
        UpstreamError(50001, "airport not found"),
    ],
)
def test_handle_fetch_failure_is_generic(
    reporter: MetarReporter, metar_api: Mock, error: Exception, caplog: pytest.LogCaptureFixture
) -> None:
    metar_api.fetch_report.side_effect = error

    with caplog.at_level(logging.ERROR, logger="metarimage.controller"):
        outcome = reporter.handle("ZSPD")

    assert outcome == ReportOutcome(message="获取或生成 METAR 信息失败，请稍后再试。")
    assert "Failed to fetch, generate or send METAR" in caplog.text
    assert str(error) in caplog.text


def test_handle_bad_metar_time_is_generic(reporter: MetarReporter, metar_api: Mock) -> None:
    metar_api.fetch_report.return_value = RawReport(icao="ZSPD", metar="METAR ZSPD 9999")

    outcome = reporter.handle("ZSPD")

    assert outcome.message == "获取或生成 METAR 信息失败，请稍后再试。"


def test_handle_render_failure_is_generic(metar_api: Mock, fixed_clock: FixedClock) -> None:
    reporter = MetarReporter(
        settings=UserSettings(),
        metar_api=metar_api,
        image_renderer=ErrorSimulatingRenderer(RenderError("Could not find the .container element.")),
        clock=fixed_clock,
    )

    outcome = reporter.handle("ZSPD")

    assert not outcome.ok
    assert outcome.message == "获取或生成 METAR 信息失败，请稍后再试。"


def test_handle_uses_configured_locale(metar_api: Mock, fixed_clock: FixedClock) -> None:
    reporter = MetarReporter(
        settings=UserSettings(locale="en-US"),
        metar_api=metar_api,
        image_renderer=MockHtmlRenderer(),
        clock=fixed_clock,
    )
    metar_api.fetch_report.side_effect = NetworkError("offline")

    assert reporter.handle("").message == "Please provide a valid ICAO code."
    assert reporter.handle("ZSPD").message == (
        "Failed to fetch or render the METAR report, please try again later."
    )


def test_verbose_logging_only_with_console_info(
    metar_api: Mock, fixed_clock: FixedClock, caplog: pytest.LogCaptureFixture
) -> None:
    quiet = MetarReporter(
        settings=UserSettings(),
        metar_api=metar_api,
        image_renderer=MockHtmlRenderer(),
        clock=fixed_clock,
    )
    chatty = MetarReporter(
        settings=UserSettings(console_info=True),
        metar_api=metar_api,
        image_renderer=MockHtmlRenderer(),
        clock=fixed_clock,
    )

    with caplog.at_level(logging.INFO, logger="metarimage.controller"):
        quiet.handle("ZSPD")
        assert "requested ICAO" not in caplog.text
        chatty.handle("ZSPD", user_id="42")
    assert "User 42 requested ICAO: ZSPD" in caplog.text
    assert "Screenshot quality: 80" in caplog.text
