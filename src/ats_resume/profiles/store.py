"""Loads candidate profiles from JSON files in a directory."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from ats_resume.errors import NotFoundError, ResumePipelineError
from ats_resume.models.profile import ProfileRecord

logger = logging.getLogger(__name__)


class ProfileStore:
    """File-backed profile lookup: ``<directory>/<key>.json``."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path | None:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            return None
        return self.directory / f"{key}.json"

    def load(self, key: str) -> ProfileRecord:
        """Load a profile by key."""
        path = self._path(key)
        if path is None or not path.exists():
            raise NotFoundError("profile", key)
        logger.info("Loading profile: %s", key)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return ProfileRecord.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as exc:
            raise ResumePipelineError(f"Profile {key!r} is malformed: {exc}") from exc

    def list_profiles(self) -> list[str]:
        """List available profile keys."""
        return sorted(p.stem for p in self.directory.glob("*.json"))
