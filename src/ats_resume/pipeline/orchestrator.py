"""Main pipeline orchestrator - profile + job description in, PDF out."""

from __future__ import annotations

import logging
import time
from typing import Any

from ats_resume.clients.llm_client import LLMClient
from ats_resume.config import AppConfig
from ats_resume.errors import InputError, NotFoundError, RenderingError, ResumePipelineError
from ats_resume.export.pdf_renderer import PageOptions, get_pdf_renderer
from ats_resume.export.rendering import build_filename, build_rendering_context
from ats_resume.models.generation import GenerationRequest, GenerationResult
from ats_resume.models.profile import ProfileRecord
from ats_resume.models.resume import RenderedResume, ResumeContent, TailorRequest
from ats_resume.pipeline.experience_metrics import compute_years_of_experience
from ats_resume.pipeline.prompt_composer import compose_prompt, reduce_bullet_floor
from ats_resume.pipeline.reconciler import reconcile
from ats_resume.profiles.store import ProfileStore
from ats_resume.templates.loader import TemplateStore
from ats_resume.utils.json_parser import extract_json

logger = logging.getLogger(__name__)


def summarize_usage(results: list[GenerationResult]) -> dict[str, Any]:
    """Token totals for the generation calls made by one request."""
    return {
        "input": sum(r.input_tokens for r in results),
        "output": sum(r.output_tokens for r in results),
        "calls": [(r.model, r.input_tokens, r.output_tokens) for r in results],
    }


class ResumePipeline:
    """Runs one tailoring request end to end.

    Holds only collaborators and configuration; all per-request state lives
    in local variables, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        llm: LLMClient,
        profiles: ProfileStore,
        templates: TemplateStore,
        *,
        config: AppConfig | None = None,
        pdf_renderer: Any | None = None,
    ):
        self.config = config or AppConfig()
        self.llm = llm
        self.profiles = profiles
        self.templates = templates
        self.pdf_renderer = pdf_renderer or get_pdf_renderer(self.config.render.backend)
        self.page_options = PageOptions.from_config(self.config.render)

    def _request(self, prompt: str, max_tokens: int) -> GenerationRequest:
        llm = self.config.llm
        return GenerationRequest(
            payload=prompt,
            model=llm.model,
            max_tokens=max_tokens,
            retries=llm.retries,
            timeout=llm.timeout,
        )

    async def _generate(self, request: GenerationRequest) -> GenerationResult:
        return await self.llm.generate(
            request.payload,
            model=request.model,
            max_tokens=request.max_tokens,
            retries=request.retries,
            timeout=request.timeout,
        )

    async def generate_content(self, prompt: str) -> list[GenerationResult]:
        """Generate model output, falling back once if it was truncated.

        Returns every result produced; only the last one may be parsed. A
        truncated first response is discarded: the prompt's bullet floor is
        lowered and a single new attempt is made with the fallback token
        budget and a fresh retry budget.
        """
        first = await self._generate(self._request(prompt, self.config.llm.max_tokens))
        if not first.truncated:
            return [first]

        logger.warning(
            "Model hit max_tokens limit (%d output tokens), response was truncated. "
            "Retrying with reduced bullet requirements.",
            first.output_tokens,
        )
        retry = await self._generate(
            self._request(reduce_bullet_floor(prompt), self.config.llm.fallback_max_tokens)
        )
        logger.info(
            "Fallback response: finish=%s output=%d",
            retry.finish_reason.value,
            retry.output_tokens,
        )
        return [first, retry]

    async def tailor(
        self, profile: ProfileRecord, job_description: str
    ) -> tuple[ResumeContent, list[GenerationResult]]:
        """Generate, parse and reconcile resume content for one profile."""
        years = compute_years_of_experience(profile.experience)
        logger.info("Years of experience: %d", years)
        prompt = compose_prompt(profile, job_description)
        results = await self.generate_content(prompt)
        data = extract_json(results[-1].text)
        return reconcile(data, profile, years), results

    async def run(self, request: TailorRequest) -> RenderedResume:
        """Handle one request: validate, generate, render, name the file."""
        start = time.monotonic()
        if not request.profile:
            raise InputError("profile")
        if not request.job_description or not request.job_description.strip():
            raise InputError("job_description")

        template_key = request.template or self.config.paths.default_template
        profile = self.profiles.load(request.profile)
        if not self.templates.exists(template_key):
            raise NotFoundError("template", template_key)

        content, results = await self.tailor(profile, request.job_description)

        context = build_rendering_context(profile, content)
        html = self.templates.render(template_key, context)
        logger.info("HTML rendered from template")
        try:
            pdf = await self.pdf_renderer.render(html, self.page_options)
        except ResumePipelineError:
            raise
        except Exception as exc:
            raise RenderingError(f"PDF rendering failed: {exc}") from exc

        filename = build_filename(profile.name, request.company_name, request.job_title)
        logger.info("Resume ready: %s (%.1fs)", filename, time.monotonic() - start)
        return RenderedResume(
            pdf=pdf,
            filename=filename,
            title=content.title,
            html=html,
            usage=summarize_usage(results),
        )
