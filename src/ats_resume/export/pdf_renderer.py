"""HTML-to-PDF backends.

Each render acquires its own backend instance and releases it before
returning, on success and on failure. Nothing is shared between renders.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from ats_resume.config import RenderConfig
from ats_resume.errors import RenderingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageOptions:
    format: str = "A4"
    margin_top: str = "15mm"
    margin_bottom: str = "15mm"
    margin_left: str = "0mm"
    margin_right: str = "0mm"
    print_background: bool = True

    @classmethod
    def from_config(cls, config: RenderConfig) -> PageOptions:
        return cls(
            format=config.page_format,
            margin_top=config.margin_top,
            margin_bottom=config.margin_bottom,
            margin_left=config.margin_left,
            margin_right=config.margin_right,
            print_background=config.print_background,
        )

    @property
    def margin(self) -> dict[str, str]:
        return {
            "top": self.margin_top,
            "bottom": self.margin_bottom,
            "left": self.margin_left,
            "right": self.margin_right,
        }


class ChromiumPdfRenderer:
    """Headless Chromium via Playwright; one browser per render."""

    def __init__(self, headless: bool = True):
        self.headless = headless

    async def render(self, html: str, options: PageOptions | None = None) -> bytes:
        from playwright.async_api import Error as PlaywrightError
        from playwright.async_api import async_playwright

        options = options or PageOptions()
        logger.info("Rendering PDF with Chromium (%s)", options.format)
        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=self.headless)
                try:
                    page = await browser.new_page()
                    await page.set_content(html, wait_until="networkidle")
                    pdf = await page.pdf(
                        format=options.format,
                        print_background=options.print_background,
                        margin=options.margin,
                    )
                finally:
                    await browser.close()
        except PlaywrightError as exc:
            raise RenderingError(f"Chromium PDF rendering failed: {exc}") from exc
        logger.info("PDF generated successfully (%d bytes)", len(pdf))
        return pdf


class WeasyPrintPdfRenderer:
    """WeasyPrint backend; page size and margins go through an @page rule."""

    async def render(self, html: str, options: PageOptions | None = None) -> bytes:
        from weasyprint import CSS, HTML

        options = options or PageOptions()
        page_css = CSS(string=(
            f"@page {{ size: {options.format}; "
            f"margin: {options.margin_top} {options.margin_right} "
            f"{options.margin_bottom} {options.margin_left}; }}"
        ))
        logger.info("Rendering PDF with WeasyPrint (%s)", options.format)
        try:
            pdf = await asyncio.to_thread(
                HTML(string=html).write_pdf, stylesheets=[page_css]
            )
        except (OSError, ValueError) as exc:
            raise RenderingError(f"WeasyPrint PDF rendering failed: {exc}") from exc
        logger.info("PDF generated successfully (%d bytes)", len(pdf))
        return pdf


def get_pdf_renderer(backend: str = "chromium") -> ChromiumPdfRenderer | WeasyPrintPdfRenderer:
    """Return the PDF backend named in config."""
    if backend == "weasyprint":
        return WeasyPrintPdfRenderer()
    if backend == "chromium":
        return ChromiumPdfRenderer()
    raise ValueError(f"Unknown PDF backend: {backend}")
