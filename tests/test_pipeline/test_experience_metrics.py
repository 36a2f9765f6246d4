"""Tests for tenure computation."""

from datetime import datetime

import pytest

from ats_resume.models.profile import ExperienceEntry
from ats_resume.pipeline.experience_metrics import compute_years_of_experience, parse_date

NOW = datetime(2026, 1, 1)


def _entry(start: str, end: str = "present") -> ExperienceEntry:
    return ExperienceEntry(company="Acme", start_date=start, end_date=end)


class TestParseDate:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2015-01-01", datetime(2015, 1, 1)),
            ("2019-03", datetime(2019, 3, 1)),
            ("Jan 2015", datetime(2015, 1, 1)),
            ("March 2018", datetime(2018, 3, 1)),
            ("03/2019", datetime(2019, 3, 1)),
            ("2012", datetime(2012, 1, 1)),
            ("Summer 2014", datetime(2014, 1, 1)),
        ],
    )
    def test_formats(self, value, expected):
        assert parse_date(value, NOW) == expected

    @pytest.mark.parametrize("value", ["present", "Present", "", None, "someday"])
    def test_present_and_unparseable_resolve_to_now(self, value):
        assert parse_date(value, NOW) == NOW

    def test_timezone_aware_is_made_naive(self):
        parsed = parse_date("2015-01-01T00:00:00+00:00", NOW)
        assert parsed.tzinfo is None
        assert parsed.year in (2014, 2015)


class TestComputeYearsOfExperience:
    def test_no_entries(self):
        assert compute_years_of_experience([], now=NOW) == 0

    def test_earliest_start_wins(self, sample_profile):
        # Globex starts 2015-01-01; Acme 2019-03-01
        assert compute_years_of_experience(sample_profile.experience, now=NOW) == 11

    def test_rounds_to_nearest_year(self):
        assert compute_years_of_experience([_entry("2020-10-01")], now=NOW) == 5
        assert compute_years_of_experience([_entry("2020-04-01")], now=NOW) == 6

    def test_unparseable_start_never_dominates(self):
        entries = [_entry("not a date"), _entry("2016-01-01")]
        assert compute_years_of_experience(entries, now=NOW) == 10

    def test_only_unparseable_start_gives_zero(self):
        assert compute_years_of_experience([_entry("???")], now=NOW) == 0

    def test_defaults_to_current_time(self):
        years = compute_years_of_experience([_entry("2000-01-01")])
        expected = (datetime.now() - datetime(2000, 1, 1)).days / 365.0
        assert years == round(expected)
