"""Error taxonomy for the resume generation pipeline.

Every error carries a stable ``category`` and an HTTP-like ``status`` so the
request surface can map failures without inspecting messages. ``user_message``
is safe to show to an end user; ``str(error)`` is meant for logs.
"""

from __future__ import annotations


class ResumePipelineError(Exception):
    """Base class for all pipeline failures."""

    category: str = "internal"
    status: int = 500
    user_message: str = "Resume generation failed due to an internal error."


class InputError(ResumePipelineError):
    """A required request field is missing or empty."""

    category = "missing_input"
    status = 400

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required input: {field}")

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return f"{self.field.replace('_', ' ').capitalize()} required"


class NotFoundError(ResumePipelineError):
    """Unknown profile key or template key."""

    status = 404

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind.capitalize()} {key!r} not found")

    @property
    def category(self) -> str:  # type: ignore[override]
        return f"{self.kind}_not_found"

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return f'{self.kind.capitalize()} "{self.key}" not found'


class GenerationError(ResumePipelineError):
    """The text-generation backend could not produce output."""

    category = "generation_failed"
    status = 502
    user_message = "Resume generation failed. Please try again."


class GenerationTimeoutError(GenerationError):
    """A generation attempt did not finish within its timeout."""


class GenerationBackendError(GenerationError):
    """The generation backend raised a transport or API error."""


class GenerationRefusalError(GenerationError):
    """The model declined to produce resume content."""

    category = "generation_refused"
    user_message = (
        "AI refused to generate resume. The prompt may be too complex. "
        "Please try again with a shorter job description or simpler requirements."
    )


class ResponseFormatError(ResumePipelineError):
    """Model output did not contain a parseable JSON object.

    Diagnostic attributes are kept for operators; none of them end up in
    ``user_message``.
    """

    category = "parse_failed"
    status = 502
    user_message = "AI did not return valid JSON format. Please try again."

    def __init__(
        self,
        message: str,
        *,
        content: str = "",
        position: int | None = None,
    ):
        self.content_length = len(content)
        self.head = content[:200]
        self.tail = content[-200:] if len(content) > 200 else ""
        self.position = position
        detail = f"{message} (content length {self.content_length}"
        if position is not None:
            detail += f", position {position}"
        detail += ")"
        super().__init__(detail)


class SchemaValidationError(ResumePipelineError):
    """Model returned JSON with the wrong shape."""

    category = "schema_invalid"
    status = 502
    user_message = (
        "AI response missing required fields (title, summary, skills, or experience)"
    )

    def __init__(self, message: str, missing: list[str] | None = None):
        self.missing = missing or []
        super().__init__(message)


class RenderingError(ResumePipelineError):
    """HTML or PDF rendering failed."""

    category = "render_failed"
    status = 500
    user_message = "PDF generation failed."
