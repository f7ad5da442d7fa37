import pytest
from pathlib import Path
from metarimage.display.protocols import (
    PLACEHOLDER_JPEG,
    ErrorSimulatingRenderer,
    HtmlRenderer,
    MockHtmlRenderer,
)
from metarimage.display.render import WkhtmlToImageRenderer


class TestMockHtmlRenderer:
    def test_render_to_image_tracking(self, tmp_path: Path):
        """Test that render calls are tracked and the image is written."""
        renderer = MockHtmlRenderer()
        out = tmp_path / "nested" / "ZSPD.jpg"

        renderer.render_to_image("<html></html>", out)

        assert len(renderer.render_calls) == 1
        assert renderer.render_calls[0]["html"] == "<html></html>"
        assert renderer.render_calls[0]["output_path"] == out
        assert out.read_bytes() == PLACEHOLDER_JPEG


class TestErrorSimulatingRenderer:
    def test_raises_configured_error(self, tmp_path: Path):
        renderer = ErrorSimulatingRenderer(OSError("engine missing"))
        with pytest.raises(OSError, match="engine missing"):
            renderer.render_to_image("x", tmp_path / "a.jpg")
        assert len(renderer.render_calls) == 1
        assert not (tmp_path / "a.jpg").exists()

    def test_default_error(self, tmp_path: Path):
        with pytest.raises(RuntimeError):
            ErrorSimulatingRenderer().render_to_image("x", tmp_path / "a.jpg")


def test_renderers_satisfy_protocol():
    assert isinstance(MockHtmlRenderer(), HtmlRenderer)
    assert isinstance(ErrorSimulatingRenderer(), HtmlRenderer)
    assert isinstance(WkhtmlToImageRenderer(), HtmlRenderer)
