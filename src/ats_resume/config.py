"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

RENDER_BACKENDS = ("chromium", "weasyprint")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-sonnet-4-5-20250929"
    max_tokens: int = 8000
    fallback_max_tokens: int = 6000
    retries: int = 2
    timeout: int = 180

    def __post_init__(self) -> None:
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if self.fallback_max_tokens < 1:
            raise ValueError(
                f"fallback_max_tokens must be positive, got {self.fallback_max_tokens}"
            )
        if self.fallback_max_tokens >= self.max_tokens:
            raise ValueError(
                f"fallback_max_tokens must be less than max_tokens "
                f"({self.max_tokens}), got {self.fallback_max_tokens}"
            )
        if not 1 <= self.retries <= 10:
            raise ValueError(f"retries must be between 1 and 10, got {self.retries}")
        if not 1 <= self.timeout <= 900:
            raise ValueError(f"timeout must be between 1 and 900, got {self.timeout}")


@dataclass(frozen=True)
class RenderConfig:
    backend: str = "chromium"
    page_format: str = "A4"
    margin_top: str = "15mm"
    margin_bottom: str = "15mm"
    margin_left: str = "0mm"
    margin_right: str = "0mm"
    print_background: bool = True

    def __post_init__(self) -> None:
        if self.backend not in RENDER_BACKENDS:
            raise ValueError(
                f"backend must be one of {', '.join(RENDER_BACKENDS)}, got {self.backend!r}"
            )


@dataclass(frozen=True)
class PathsConfig:
    profiles_dir: str = "resumes"
    templates_dir: str = "templates"
    output_dir: str = "output"
    default_template: str = "Resume"

    @property
    def resolved_profiles_dir(self) -> Path:
        return Path(self.profiles_dir).expanduser()

    @property
    def resolved_templates_dir(self) -> Path:
        return Path(self.templates_dir).expanduser()

    @property
    def resolved_output_dir(self) -> Path:
        return Path(self.output_dir).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        render=RenderConfig(**raw.get("render", {})),
        paths=PathsConfig(**raw.get("paths", {})),
    )
