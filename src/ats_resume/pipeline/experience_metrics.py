"""Tenure statistics derived from a profile's experience entries."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import datetime

from ats_resume.models.profile import ExperienceEntry

logger = logging.getLogger(__name__)

PRESENT_TOKEN = "present"
DAYS_PER_YEAR = 365.0

_DATE_FORMATS = ("%Y-%m", "%b %Y", "%B %Y", "%m/%Y", "%m/%d/%Y", "%Y")
_YEAR_PATTERN = re.compile(r"(19|20)\d{2}")


def parse_date(value: str | None, now: datetime) -> datetime:
    """Best-effort parse of a resume date string.

    ``"present"`` and anything unparseable resolve to ``now`` so a bad value
    can never become the earliest start date.
    """
    if not value:
        return now
    s = value.strip()
    if s.lower() == PRESENT_TOKEN:
        return now

    try:
        parsed = datetime.fromisoformat(s)
    except ValueError:
        parsed = None
    if parsed is None:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(s, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        m = _YEAR_PATTERN.search(s)
        if m:
            parsed = datetime(int(m.group(0)), 1, 1)

    if parsed is None:
        logger.warning("Unparseable date %r, treating as present", value)
        return now
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def compute_years_of_experience(
    entries: Iterable[ExperienceEntry],
    now: datetime | None = None,
) -> int:
    """Whole years between the earliest start date and now."""
    now = now or datetime.now()
    starts = [parse_date(e.start_date, now) for e in entries]
    if not starts:
        return 0
    earliest = min(starts)
    return round((now - earliest).days / DAYS_PER_YEAR)
