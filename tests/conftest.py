"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from ats_resume.clients.llm_client import LLMClient
from ats_resume.models.generation import FinishReason, GenerationResult
from ats_resume.models.profile import EducationEntry, ExperienceEntry, ProfileRecord

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def make_result(
    text: str,
    finish_reason: FinishReason = FinishReason.NORMAL,
    input_tokens: int = 100,
    output_tokens: int = 50,
) -> GenerationResult:
    return GenerationResult(
        text=text,
        finish_reason=finish_reason,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        model="claude-sonnet-4-5-20250929",
    )


@pytest.fixture
def sample_profile() -> ProfileRecord:
    return ProfileRecord(
        name="Jane Doe",
        email="jane.doe@example.com",
        phone="555-0100",
        location="Seattle, WA",
        linkedin="linkedin.com/in/janedoe",
        experience=[
            ExperienceEntry(
                title="Senior Engineer",
                company="Acme LLC",
                location="Seattle, WA",
                start_date="2019-03-01",
                end_date="present",
            ),
            ExperienceEntry(
                title="Software Engineer",
                company="Globex Inc.",
                location="",
                start_date="2015-01-01",
                end_date="2019-02-28",
            ),
        ],
        education=[
            EducationEntry(
                degree="B.S. Computer Science",
                school="University of Washington",
                start_year="2011",
                end_year="2015",
            ),
        ],
    )


@pytest.fixture
def sample_jd_text() -> str:
    return """Backend Engineer - Payments Platform

We are a fintech company building real-time payment rails.

Requirements:
- 5+ years building services in Python or Go
- PostgreSQL, Redis, Kafka
- AWS (ECS, Lambda), Terraform
- Experience with PCI-DSS compliance a plus
"""


@pytest.fixture
def generated_json() -> dict:
    return {
        "title": "Backend Engineer at Payfast",
        "summary": "Backend engineer with 12 years of experience in **Python** and **Kafka**.",
        "skills": {
            "**Languages**": ["Python", "Go", "SQL"],
            "Cloud:": ["AWS", "Terraform"],
        },
        "experience": [
            {
                "title": "Senior Engineer",
                "company": "Acme LLC",
                "location": "Seattle, WA",
                "start_date": "2019-03-01",
                "end_date": "present",
                "details": ["Built **Kafka** pipelines processing 2M events per day"],
            },
            {
                "title": "Software Engineer",
                "company": "Globex Inc.",
                "location": "",
                "start_date": "2015-01-01",
                "end_date": "2019-02-28",
                "details": ["Migrated billing to **PostgreSQL**, cutting latency 37%"],
            },
        ],
    }


@pytest.fixture
def generated_text(generated_json) -> str:
    return json.dumps(generated_json)


@pytest.fixture
def mock_llm_client(generated_text) -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(return_value=make_result(generated_text))
    return client


@pytest.fixture
def profiles_dir(tmp_path, sample_profile) -> Path:
    directory = tmp_path / "resumes"
    directory.mkdir()
    (directory / "jane_doe.json").write_text(sample_profile.model_dump_json(), encoding="utf-8")
    return directory


@pytest.fixture
def templates_dir() -> Path:
    return PROJECT_ROOT / "templates"
