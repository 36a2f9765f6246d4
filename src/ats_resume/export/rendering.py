"""Maps reconciled content into the template context and the output filename."""

from __future__ import annotations

import re
from datetime import datetime

from ats_resume.models.profile import ProfileRecord
from ats_resume.models.resume import GeneratedExperienceEntry, RenderingContext, ResumeContent
from ats_resume.pipeline.experience_metrics import parse_date

DISPLAY_TITLE = "Senior Software Engineer"
DEFAULT_BASENAME = "resume"

_WHITESPACE = re.compile(r"\s+")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def build_rendering_context(
    profile: ProfileRecord,
    content: ResumeContent,
) -> RenderingContext:
    """Merge profile contact/education data with generated prose.

    The on-document title is always the generic display title; the
    job-specific ``content.title`` is returned to the caller separately.
    """
    return RenderingContext(
        name=profile.name,
        title=DISPLAY_TITLE,
        email=profile.email,
        phone=profile.phone,
        location=profile.location,
        linkedin=profile.linkedin,
        website=profile.website,
        summary=content.summary,
        skills=content.skills,
        experience=order_experience(content.experience),
        education=list(profile.education),
    )


def order_experience(
    entries: list[GeneratedExperienceEntry],
    now: datetime | None = None,
) -> list[GeneratedExperienceEntry]:
    """Most recent start date first; ties keep their generated order."""
    now = now or datetime.now()
    return sorted(entries, key=lambda e: parse_date(e.start_date, now), reverse=True)


def sanitize_filename_part(value: str | None) -> str:
    if not value:
        return ""
    return _NON_ALNUM.sub("", _WHITESPACE.sub("", value))


def build_filename(
    name: str | None,
    company_name: str | None = None,
    job_title: str | None = None,
    extension: str = "pdf",
) -> str:
    """Name_Company_JobTitle.pdf, skipping parts that sanitize to nothing."""
    parts = [
        sanitize_filename_part(name or DEFAULT_BASENAME),
        sanitize_filename_part(company_name),
        sanitize_filename_part(job_title),
    ]
    base = "_".join(p for p in parts if p) or DEFAULT_BASENAME
    return f"{base}.{extension}"


def content_disposition(filename: str) -> str:
    return f'attachment; filename="{filename}"'
