import logging
import math
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from dayscore.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Resolve .env from project root so it loads regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DAYSCORE_",
        env_file=(str(_ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Scoring policy defaults (product may retune)
    attendance_weight: float = 0.7
    overlap_weight: float = 0.3
    top_n: int = 3

    # Input ceiling per scoring call
    max_members: int = 500
    max_dates: int = 366

    # Env
    env: str = "development"


settings = Settings()


class ScoreWeights(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    attendance: float = Field(default_factory=lambda: settings.attendance_weight)
    overlap: float = Field(default_factory=lambda: settings.overlap_weight)

    @property
    def total(self) -> float:
        return self.attendance + self.overlap


class ScoringConfig(BaseModel):
    """Recognized options: scoreWeights {attendance, overlap} and topN, camelCase or snake_case."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    score_weights: ScoreWeights = Field(default_factory=ScoreWeights, alias="scoreWeights")
    top_n: int = Field(default_factory=lambda: settings.top_n, alias="topN")


def _check(config: ScoringConfig) -> None:
    weights = config.score_weights
    if not math.isfinite(weights.total):
        raise ConfigurationError(
            f"Score weights must be finite, got attendance={weights.attendance} overlap={weights.overlap}"
        )
    if weights.attendance < 0 or weights.overlap < 0:
        raise ConfigurationError(
            f"Score weights must be non-negative, got attendance={weights.attendance} overlap={weights.overlap}"
        )
    if weights.total <= 0:
        raise ConfigurationError("Score weights must sum to a positive number")
    if config.top_n < 0:
        raise ConfigurationError(f"topN must be non-negative, got {config.top_n}")


def resolve_config(
    config: ScoringConfig | dict[str, Any] | None = None, fallback_to_defaults: bool = False
) -> ScoringConfig:
    """Validate caller-supplied options. Invalid options raise ConfigurationError unless
    fallback_to_defaults is set, in which case the defaults are used instead."""
    try:
        if config is None:
            resolved = ScoringConfig()
        elif isinstance(config, ScoringConfig):
            resolved = config
        else:
            resolved = ScoringConfig.model_validate(config)
        _check(resolved)
    except (ConfigurationError, PydanticValidationError) as e:
        if not fallback_to_defaults:
            if isinstance(e, ConfigurationError):
                raise
            raise ConfigurationError(f"Unreadable scoring config: {e}") from e
        logger.warning("Invalid scoring config (%s); falling back to defaults", e)
        resolved = ScoringConfig()
        _check(resolved)
    return resolved
