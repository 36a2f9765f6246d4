from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, TemplateNotFound, select_autoescape

from ats_resume.errors import NotFoundError, RenderingError
from ats_resume.models.resume import RenderingContext

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".html"


def join_list(values, separator: str = ", ") -> str:
    """Join a list for display; anything that isn't a list renders empty."""
    if isinstance(values, (list, tuple)):
        return separator.join(str(v) for v in values)
    return ""


class TemplateStore:
    """HTML resume templates (Jinja2) stored as ``<directory>/<key>.html``."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self.env = Environment(
            loader=FileSystemLoader(str(self.directory)),
            autoescape=select_autoescape(["html"]),
        )
        self.env.globals["join"] = join_list

    def exists(self, key: str) -> bool:
        return (self.directory / f"{key}{TEMPLATE_SUFFIX}").is_file()

    def render(self, key: str, context: RenderingContext) -> str:
        """Render the template for ``key`` with the given context."""
        try:
            template = self.env.get_template(f"{key}{TEMPLATE_SUFFIX}")
        except TemplateNotFound as exc:
            logger.error("Template not found: %s%s", key, TEMPLATE_SUFFIX)
            raise NotFoundError("template", key) from exc
        except TemplateError as exc:
            raise RenderingError(f"Template {key!r} failed to load: {exc}") from exc
        logger.info("Using template: %s%s", key, TEMPLATE_SUFFIX)
        try:
            return template.render(**context.model_dump())
        except TemplateError as exc:
            raise RenderingError(f"Template {key!r} failed to render: {exc}") from exc

    def list_templates(self) -> list[str]:
        """List available template names."""
        return sorted(p.stem for p in self.directory.glob(f"*{TEMPLATE_SUFFIX}"))
