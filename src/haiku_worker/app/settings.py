from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..services.generator import DEFAULT_MAX_ATTEMPTS, DEFAULT_PATTERN
from ..services.grammar import DEFAULT_JITTER
from ..services.lexicon import DEFAULT_LEXICON_PATH


def _default_lexicon_path() -> Path:
    return DEFAULT_LEXICON_PATH


class Settings(BaseSettings):
    """Runtime configuration for the haiku worker process."""

    model_config = SettingsConfigDict(
        env_prefix="HAIKU_",
        extra="ignore",
    )

    lexicon_path: Path = Field(default_factory=_default_lexicon_path)
    max_attempts: int = Field(
        default=DEFAULT_MAX_ATTEMPTS,
        ge=1,
        le=1_000_000,
        description="Ceiling on full three-line attempts before giving up.",
    )
    edge_jitter: float = Field(
        default=DEFAULT_JITTER,
        ge=0.0,
        le=1.0,
        description="Half-width of the random perturbation added to edge weights.",
    )
    seed: int | None = Field(
        default=None,
        ge=0,
        description="Default seed for the random source (unseeded when unset).",
    )
    syllable_pattern: list[int] = Field(
        default_factory=lambda: list(DEFAULT_PATTERN),
        description="Syllable target for each line.",
    )

    @model_validator(mode="after")
    def _check_pattern(self) -> "Settings":
        if not self.syllable_pattern:
            raise ValueError("syllable_pattern must not be empty")
        if any(target < 1 for target in self.syllable_pattern):
            raise ValueError("syllable_pattern targets must be positive")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
