"""Pydantic models for generated resume content and its rendering context."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from ats_resume.models.profile import EducationEntry


class GeneratedExperienceEntry(BaseModel):
    title: str | None = None
    company: str | None = None
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    details: list[str] = Field(default_factory=list)

    @field_validator("details", mode="before")
    @classmethod
    def _details_as_list(cls, value):
        return value if isinstance(value, list) else []

    @property
    def is_self_describing(self) -> bool:
        return (
            self.company is not None
            and self.start_date is not None
            and self.end_date is not None
        )


class ResumeContent(BaseModel):
    title: str
    summary: str
    skills: dict[str, list[str]]  # insertion order = presentation order
    experience: list[GeneratedExperienceEntry]


class RenderingContext(BaseModel):
    name: str
    title: str
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin: str | None = None
    website: str | None = None
    summary: str
    skills: dict[str, list[str]]
    experience: list[GeneratedExperienceEntry]
    education: list[EducationEntry]


class TailorRequest(BaseModel):
    profile: str = ""
    job_description: str = ""
    template: str | None = None
    job_title: str | None = None
    company_name: str | None = None


class RenderedResume(BaseModel):
    pdf: bytes
    filename: str
    title: str
    html: str
    usage: dict[str, Any] = Field(default_factory=dict)
