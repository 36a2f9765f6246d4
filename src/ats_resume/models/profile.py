"""Pydantic models for the authoritative candidate profile."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str | None = None
    company: str
    location: str | None = None
    start_date: str
    end_date: str


class EducationEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    degree: str
    school: str
    start_year: str | None = None
    end_year: str | None = None
    grade: str | None = None

    @field_validator("start_year", "end_year", mode="before")
    @classmethod
    def _year_as_str(cls, value):
        return str(value) if isinstance(value, int) else value


class ProfileRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin: str | None = None
    website: str | None = None
    experience: list[ExperienceEntry] = []
    education: list[EducationEntry] = []
