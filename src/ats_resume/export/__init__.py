"""PDF export module for ats-resume."""
from ats_resume.export.pdf_renderer import (
    ChromiumPdfRenderer,
    PageOptions,
    WeasyPrintPdfRenderer,
    get_pdf_renderer,
)
from ats_resume.export.rendering import (
    build_filename,
    build_rendering_context,
    content_disposition,
)

__all__ = [
    "ChromiumPdfRenderer",
    "PageOptions",
    "WeasyPrintPdfRenderer",
    "build_filename",
    "build_rendering_context",
    "content_disposition",
    "get_pdf_renderer",
]
