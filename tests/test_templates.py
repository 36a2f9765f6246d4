"""Tests for template loading and rendering."""

import pytest

from ats_resume.errors import NotFoundError, RenderingError
from ats_resume.export.rendering import build_rendering_context
from ats_resume.models.resume import GeneratedExperienceEntry, ResumeContent
from ats_resume.templates.loader import TemplateStore, join_list


@pytest.fixture
def content() -> ResumeContent:
    return ResumeContent(
        title="Backend Engineer",
        summary="Senior Software Engineer with <strong>Python</strong> & Go",
        skills={"Languages": ["Python", "Go"], "Data": ["PostgreSQL", "Redis"]},
        experience=[
            GeneratedExperienceEntry(
                title="Senior Engineer",
                company="Acme LLC",
                location="Seattle, WA",
                start_date="2019-03-01",
                end_date="present",
                details=["Built <strong>Kafka</strong> pipelines"],
            )
        ],
    )


class TestJoinList:
    def test_joins_with_separator(self):
        assert join_list(["a", "b", "c"]) == "a, b, c"
        assert join_list(("a", "b"), " | ") == "a | b"

    @pytest.mark.parametrize("value", [None, "abc", 5, {"a": 1}])
    def test_non_list_renders_empty(self, value):
        assert join_list(value) == ""


class TestTemplateStore:
    def test_list_templates(self, templates_dir):
        store = TemplateStore(templates_dir)
        assert "Resume" in store.list_templates()
        assert store.exists("Resume")
        assert not store.exists("Nope")

    def test_render_default_template(self, templates_dir, sample_profile, content):
        html = TemplateStore(templates_dir).render(
            "Resume", build_rendering_context(sample_profile, content)
        )
        assert "<h1>Jane Doe</h1>" in html
        assert "Senior Software Engineer" in html
        assert "jane.doe@example.com | 555-0100 | Seattle, WA" in html
        assert "<strong>Languages:</strong> Python, Go" in html
        assert "<li>Built <strong>Kafka</strong> pipelines</li>" in html
        assert "University of Washington" in html

    def test_summary_markup_kept_but_profile_fields_escaped(self, tmp_path, sample_profile, content):
        (tmp_path / "Plain.html").write_text("{{ name }}|{{ summary | safe }}")
        profile = sample_profile.model_copy(update={"name": "Jane <Doe>"})
        html = TemplateStore(tmp_path).render("Plain", build_rendering_context(profile, content))
        assert html.startswith("Jane &lt;Doe&gt;|")
        assert "<strong>Python</strong>" in html

    def test_render_missing_template(self, templates_dir, sample_profile, content):
        with pytest.raises(NotFoundError) as exc_info:
            TemplateStore(templates_dir).render(
                "Nonexistent", build_rendering_context(sample_profile, content)
            )
        assert exc_info.value.category == "template_not_found"

    def test_broken_template_raises_rendering_error(self, tmp_path, sample_profile, content):
        (tmp_path / "Broken.html").write_text("{% for x in %}")
        with pytest.raises(RenderingError):
            TemplateStore(tmp_path).render("Broken", build_rendering_context(sample_profile, content))
