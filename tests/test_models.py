"""Tests for Pydantic data models."""

import pytest
from pydantic import ValidationError

from ats_resume.models import (
    EducationEntry,
    ExperienceEntry,
    FinishReason,
    GeneratedExperienceEntry,
    GenerationResult,
    Message,
    ProfileRecord,
    RenderedResume,
    TailorRequest,
)


class TestProfileRecord:
    def test_create_minimal(self):
        profile = ProfileRecord(name="Jane Doe")
        assert profile.email is None
        assert profile.experience == []
        assert profile.education == []

    def test_extra_fields_ignored(self):
        profile = ProfileRecord.model_validate({"name": "Jane", "github": "jdoe"})
        assert not hasattr(profile, "github")

    def test_frozen(self, sample_profile):
        with pytest.raises(ValidationError):
            sample_profile.name = "Someone Else"

    def test_experience_requires_company_and_dates(self):
        with pytest.raises(ValidationError):
            ExperienceEntry(title="Engineer", start_date="2020")

    def test_education_year_coercion(self):
        edu = EducationEntry(degree="BS", school="MIT", start_year=2010, end_year="2014")
        assert edu.start_year == "2010"
        assert edu.end_year == "2014"


class TestGeneratedExperienceEntry:
    def test_self_describing(self):
        entry = GeneratedExperienceEntry(company="Acme", start_date="2020", end_date="present")
        assert entry.is_self_describing

    @pytest.mark.parametrize("missing", ["company", "start_date", "end_date"])
    def test_not_self_describing(self, missing):
        fields = {"company": "Acme", "start_date": "2020", "end_date": "present"}
        fields[missing] = None
        assert not GeneratedExperienceEntry(**fields).is_self_describing

    def test_details_default_empty(self):
        assert GeneratedExperienceEntry().details == []

    @pytest.mark.parametrize("value", [None, "one bullet", 3])
    def test_non_list_details_become_empty(self, value):
        assert GeneratedExperienceEntry(details=value).details == []


class TestGenerationModels:
    def test_truncated(self):
        result = GenerationResult(text="x", finish_reason=FinishReason.LENGTH, input_tokens=1, output_tokens=2)
        assert result.truncated
        result.finish_reason = FinishReason.NORMAL
        assert not result.truncated

    def test_message_role_validated(self):
        assert Message(role="assistant", content="hi").role == "assistant"
        with pytest.raises(ValidationError):
            Message(role="tool", content="hi")


class TestRequestModels:
    def test_tailor_request_defaults(self):
        request = TailorRequest()
        assert request.profile == ""
        assert request.template is None

    def test_rendered_resume(self):
        rendered = RenderedResume(pdf=b"%PDF", filename="JaneDoe.pdf", title="Engineer", html="<html/>")
        assert rendered.usage == {}
