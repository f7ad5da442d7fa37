from collections.abc import Generator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from metarimage.cli import create_app
from metarimage.controller import ReportOutcome
from metarimage.settings import UserSettings

runner = CliRunner()

CONFIG_YAML = """\
command_name: wx
command_alias: wx
image_mode: manual
image_width: 1600
image_height: 700
screenshot_quality: 65
api_url: "${METAR_API_URL}"
"""


@pytest.fixture
def mock_reporter() -> Generator[MagicMock, None, None]:
    with patch("metarimage.cli.MetarReporter") as reporter_cls:
        reporter_cls.return_value.handle.return_value = ReportOutcome(image=b"jpeg-bytes")
        yield reporter_cls


def test_report_writes_image(mock_reporter: MagicMock, tmp_path: Path) -> None:
    settings = UserSettings()
    out = tmp_path / "out.jpg"

    result = runner.invoke(create_app(settings), ["metar", "zspd", "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert out.read_bytes() == b"jpeg-bytes"
    assert "METAR 图片已保存至" in result.output
    mock_reporter.assert_called_once_with(settings, debug=False)
    mock_reporter.return_value.handle.assert_called_once_with("zspd")


def test_report_default_output_path(
    mock_reporter: MagicMock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(create_app(UserSettings()), ["metar", "zspd", "--debug"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "ZSPD.jpg").read_bytes() == b"jpeg-bytes"
    assert mock_reporter.call_args.kwargs["debug"] is True


def test_report_alias(mock_reporter: MagicMock, tmp_path: Path) -> None:
    result = runner.invoke(
        create_app(UserSettings()), ["气象", "ZSPD", "-o", str(tmp_path / "a.jpg")]
    )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "a.jpg").exists()


def test_report_missing_icao_prints_prompt(mock_reporter: MagicMock) -> None:
    result = runner.invoke(create_app(UserSettings()), ["metar"])

    assert result.exit_code == 1
    assert "请提供一个有效的 ICAO 代码。" in result.output
    mock_reporter.assert_not_called()


def test_report_failure_shows_generic_message(mock_reporter: MagicMock, tmp_path: Path) -> None:
    mock_reporter.return_value.handle.return_value = ReportOutcome(
        message="获取或生成 METAR 信息失败，请稍后再试。"
    )
    out = tmp_path / "out.jpg"

    result = runner.invoke(create_app(UserSettings()), ["metar", "ZSPD", "-o", str(out)])

    assert result.exit_code == 1
    assert "获取或生成 METAR 信息失败" in result.output
    assert not out.exists()


def test_report_with_config_file(
    mock_reporter: MagicMock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("METAR_API_URL", "https://example.test/{icao}")
    cfg = tmp_path / "config.yaml"
    cfg.write_text(CONFIG_YAML, encoding="utf-8")

    result = runner.invoke(
        create_app(UserSettings()),
        ["metar", "ZSPD", "-c", str(cfg), "-o", str(tmp_path / "o.jpg")],
    )

    assert result.exit_code == 0, result.output
    used: UserSettings = mock_reporter.call_args.args[0]
    assert used.is_manual
    assert used.api_url == "https://example.test/{icao}"


def test_custom_command_name(mock_reporter: MagicMock, tmp_path: Path) -> None:
    app = create_app(UserSettings(command_name="wx", command_alias="wx"))

    result = runner.invoke(app, ["wx", "ZSPD", "-o", str(tmp_path / "o.jpg")])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["metar", "ZSPD"])
    assert result.exit_code != 0


def test_config_validate_ok(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("METAR_API_URL", "https://example.test/{icao}")
    cfg = tmp_path / "config.yaml"
    cfg.write_text(CONFIG_YAML, encoding="utf-8")

    result = runner.invoke(create_app(), ["config", "validate", str(cfg)])

    assert result.exit_code == 0, result.output
    assert "Config valid" in result.output


def test_config_validate_invalid(tmp_path: Path) -> None:
    cfg = tmp_path / "config.yaml"
    cfg.write_text("image_mode: manual\nimage_width: 800\n", encoding="utf-8")

    result = runner.invoke(create_app(), ["config", "validate", str(cfg)])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_config_defaults() -> None:
    result = runner.invoke(create_app(), ["config", "defaults"])

    assert result.exit_code == 0, result.output
    assert "command_alias: 气象" in result.output
    assert "code: BR" in result.output
    assert "description: 雾" in result.output
