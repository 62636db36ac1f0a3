"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

API_KEY_ENV = "ANTHROPIC_API_KEY"

AVAILABLE_THEMES = ("professional", "modern", "minimal")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-sonnet-4-5-20250929"
    temperature: float = 0.7
    max_tokens: int = 8192
    timeout: int | None = None  # None waits for the API indefinitely

    def __post_init__(self) -> None:
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be between 0 and 1, got {self.temperature}")
        if not 1 <= self.max_tokens <= 64000:
            raise ValueError(f"max_tokens must be between 1 and 64000, got {self.max_tokens}")
        if self.timeout is not None and self.timeout < 1:
            raise ValueError(f"timeout must be at least 1 second, got {self.timeout}")


@dataclass(frozen=True)
class ExportConfig:
    theme: str = "professional"

    def __post_init__(self) -> None:
        if self.theme not in AVAILABLE_THEMES:
            raise ValueError(
                f"theme must be one of {', '.join(AVAILABLE_THEMES)}, got {self.theme!r}"
            )


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


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
        llm=LLMConfig(**(raw.get("llm") or {})),
        export=ExportConfig(**(raw.get("export") or {})),
    )


def get_api_key() -> str | None:
    """Return the API credential from the environment, or None when unset."""
    return os.environ.get(API_KEY_ENV) or None
