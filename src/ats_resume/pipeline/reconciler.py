"""Post-generation rules applied to parsed model output.

The model is asked to follow these rules in the prompt, but its output is
not trusted: every machine-checkable rule is enforced here, and the
experience section is reconciled against the authoritative profile.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import ValidationError

from ats_resume.errors import SchemaValidationError
from ats_resume.models.profile import ProfileRecord
from ats_resume.models.resume import GeneratedExperienceEntry, ResumeContent
from ats_resume.pipeline.prompt_composer import OPENING_PHRASE

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "summary", "skills", "experience")
TENURE_THRESHOLD = 10
TENURE_PHRASE = "more than 10 years"
DEFAULT_TITLE = "Engineer"

_TITLE_AT_PATTERN = re.compile(r"\s+at\s+.*$", re.IGNORECASE)
# An optional "more than"/"over" prefix is part of the match, so the
# rewrite maps its own output to itself.
_YEARS_PATTERN = re.compile(
    r"\b(?:more than |over )?\d{2,}\s*(?:\+\s*)?years?\b", re.IGNORECASE
)
_BOLD_PATTERN = re.compile(r"\*\*([^*]+)\*\*")


def validate_fields(data: dict[str, Any]) -> ResumeContent:
    """Check required fields and build the typed content object."""
    missing = [f for f in REQUIRED_FIELDS if not data.get(f)]
    if missing:
        logger.error("Missing required fields in AI response: %s", list(data.keys()))
        raise SchemaValidationError(
            f"AI response missing required fields: {', '.join(missing)}",
            missing=missing,
        )
    try:
        return ResumeContent.model_validate(
            {f: data[f] for f in REQUIRED_FIELDS}
        )
    except ValidationError as exc:
        raise SchemaValidationError(f"AI response has invalid shape: {exc}") from exc


def normalize_title(title: str) -> str:
    """'Backend Engineer at Acme' -> 'Backend Engineer'."""
    return _TITLE_AT_PATTERN.sub("", title).strip()


def apply_tenure_disclosure(summary: str, years_of_experience: int) -> str:
    """Replace exact two-digit-plus year counts once tenure exceeds ten years."""
    if years_of_experience <= TENURE_THRESHOLD:
        return summary
    return _YEARS_PATTERN.sub(TENURE_PHRASE, summary)


def ensure_opening_phrase(summary: str, phrase: str = OPENING_PHRASE) -> str:
    s = summary.strip()
    if s.lower().startswith(phrase.lower()):
        return s
    rest = s[:1].lower() + s[1:]
    return f"{phrase} {rest}"


def bold_to_html(text: str) -> str:
    return _BOLD_PATTERN.sub(r"<strong>\1</strong>", text)


def clean_skill_labels(skills: dict[str, list[str]]) -> dict[str, list[str]]:
    """Drop asterisks from category labels; skill values stay as given."""
    cleaned: dict[str, list[str]] = {}
    for label, values in skills.items():
        cleaned[label.replace("*", "").strip() or label] = values
    return cleaned


def merge_experience(
    generated: list[GeneratedExperienceEntry],
    profile: ProfileRecord,
) -> list[GeneratedExperienceEntry]:
    """Reconcile generated experience with the profile's experience list.

    A fully self-describing generated list is kept as is, which preserves a
    synthesized fallback role. Otherwise entries are rebuilt by position from
    the profile: facts from the profile, bullets from the model.
    """
    if generated and all(e.is_self_describing for e in generated):
        return [
            GeneratedExperienceEntry(
                title=e.title or DEFAULT_TITLE,
                company=e.company,
                location=e.location or "",
                start_date=e.start_date,
                end_date=e.end_date,
                details=list(e.details),
            )
            for e in generated
        ]

    logger.info(
        "Generated experience is incomplete, merging %d profile entries by position",
        len(profile.experience),
    )
    merged = []
    for idx, job in enumerate(profile.experience):
        ai = generated[idx] if idx < len(generated) else None
        merged.append(
            GeneratedExperienceEntry(
                title=job.title or (ai.title if ai else None) or DEFAULT_TITLE,
                company=job.company,
                location=job.location or "",
                start_date=job.start_date,
                end_date=job.end_date,
                details=list(ai.details) if ai else [],
            )
        )
    return merged


def reconcile(
    data: dict[str, Any],
    profile: ProfileRecord,
    years_of_experience: int,
) -> ResumeContent:
    """Validate parsed output and apply every post-generation rule."""
    content = validate_fields(data)

    content.title = normalize_title(content.title)
    content.summary = apply_tenure_disclosure(content.summary, years_of_experience)
    content.summary = ensure_opening_phrase(content.summary)
    content.summary = bold_to_html(content.summary)
    for entry in content.experience:
        entry.details = [bold_to_html(d) for d in entry.details]
    content.skills = clean_skill_labels(content.skills)
    content.experience = merge_experience(content.experience, profile)

    logger.info(
        "Reconciled content: %d skill categories, %d experience entries",
        len(content.skills),
        len(content.experience),
    )
    for idx, entry in enumerate(content.experience, start=1):
        if not entry.details:
            logger.warning(
                "Experience entry %d (%s) has no details", idx, entry.company
            )
    return content
