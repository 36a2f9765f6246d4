"""Data models for the resume generation pipeline."""

from ats_resume.models.generation import (
    FinishReason,
    GenerationRequest,
    GenerationResult,
    Message,
)
from ats_resume.models.profile import EducationEntry, ExperienceEntry, ProfileRecord
from ats_resume.models.resume import (
    GeneratedExperienceEntry,
    RenderedResume,
    RenderingContext,
    ResumeContent,
    TailorRequest,
)

__all__ = [
    "EducationEntry",
    "ExperienceEntry",
    "FinishReason",
    "GeneratedExperienceEntry",
    "GenerationRequest",
    "GenerationResult",
    "Message",
    "ProfileRecord",
    "RenderedResume",
    "RenderingContext",
    "ResumeContent",
    "TailorRequest",
]
