"""Display package - report assembly, HTML templating and image capture."""

from metarimage.display.errors import RenderError
from metarimage.display.protocols import HtmlRenderer
from metarimage.display.render import TemplateRenderer, WkhtmlToImageRenderer
from metarimage.display.sections import ReportItem, ReportSections, ReportSectionsBuilder

__all__ = [
    "HtmlRenderer",
    "RenderError",
    "ReportItem",
    "ReportSections",
    "ReportSectionsBuilder",
    "TemplateRenderer",
    "WkhtmlToImageRenderer",
]
