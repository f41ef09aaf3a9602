"""Pydantic validation models for ranking configuration.

Every weight, decay window, diversity limit and keyword list used by the
engine lives here and is passed explicitly into the scorers and the
diversifier.
"""
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from feedrank.exceptions import ConfigurationError

MAX_WEIGHT_SUM = 1.5


class _WeightGroup(BaseModel):
    """Weights of one score.

    Groups are not forced to sum to exactly 1: the default job feed weights
    add up to 1.05, and totals are clamped to 100 anyway.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def validate_sum(self):
        """Reject groups whose weights are all zero or add up past 1.5."""
        total = sum(self.as_dict().values())
        if total <= 0:
            raise ValueError(f"{type(self).__name__} needs at least one non-zero weight")
        if total > MAX_WEIGHT_SUM:
            raise ValueError(f"{type(self).__name__} weights add up to {total:.2f} (max {MAX_WEIGHT_SUM})")
        return self

    def as_dict(self) -> dict[str, float]:
        return self.model_dump()


class JobMatchWeights(_WeightGroup):
    """Candidate-to-job compatibility weights."""
    skills: float = Field(ge=0, le=1, default=0.4)
    location: float = Field(ge=0, le=1, default=0.2)
    level: float = Field(ge=0, le=1, default=0.2)
    sector: float = Field(ge=0, le=1, default=0.2)


class JobFeedWeights(_WeightGroup):
    """Feed relevance weights for job postings."""
    match: float = Field(ge=0, le=1, default=0.3)
    interaction_history: float = Field(ge=0, le=1, default=0.2)
    job_proximity: float = Field(ge=0, le=1, default=0.2)
    location: float = Field(ge=0, le=1, default=0.15)
    popularity: float = Field(ge=0, le=1, default=0.1)
    recency: float = Field(ge=0, le=1, default=0.1)


class PostFeedWeights(_WeightGroup):
    """Feed relevance weights for social posts."""
    followed_author: float = Field(ge=0, le=1, default=0.25)
    relevance: float = Field(ge=0, le=1, default=0.10)
    engagement: float = Field(ge=0, le=1, default=0.25)
    previous_interactions: float = Field(ge=0, le=1, default=0.20)
    recency: float = Field(ge=0, le=1, default=0.10)
    popularity: float = Field(ge=0, le=1, default=0.10)


class DecayWindows(BaseModel):
    """Elapsed time after which recency reaches zero."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    job_days: float = Field(gt=0, default=30)
    post_hours: float = Field(gt=0, default=168)


class DiversityLimits(BaseModel):
    """Tiering and run-length limits for the diversifier."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    max_consecutive_same_type: int = Field(ge=1, default=3)
    max_consecutive_same_author: int = Field(ge=1, default=2)
    high_threshold: float = Field(ge=0, le=100, default=70)
    medium_threshold: float = Field(ge=0, le=100, default=40)
    high_share: float = Field(ge=0, le=1, default=0.5)
    medium_share: float = Field(ge=0, le=1, default=0.3)

    @model_validator(mode="after")
    def validate_tiers(self):
        """Thresholds must be ordered and shares must leave room for the low tier."""
        if self.medium_threshold > self.high_threshold:
            raise ValueError("medium_threshold must be less than or equal to high_threshold")
        if self.high_share + self.medium_share > 1.0:
            raise ValueError("high_share + medium_share cannot exceed 1.0")
        return self


class KeywordLists(BaseModel):
    """Predefined vocabularies used by the heuristics."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    remote_markers: tuple[str, ...] = ("remoto", "remote")
    tech_sector: tuple[str, ...] = (
        "tecnologia", "tech", "software", "ti", "it", "desenvolvimento", "development",
    )
    important_roles: tuple[str, ...] = (
        "desenvolvedor", "developer", "engenheiro", "engineer", "analista",
        "analyst", "gerente", "manager", "especialista", "specialist",
    )


class RankingConfig(BaseModel):
    """Complete ranking configuration."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    job_match: JobMatchWeights = Field(default_factory=JobMatchWeights)
    job_feed: JobFeedWeights = Field(default_factory=JobFeedWeights)
    post_feed: PostFeedWeights = Field(default_factory=PostFeedWeights)
    decay: DecayWindows = Field(default_factory=DecayWindows)
    diversity: DiversityLimits = Field(default_factory=DiversityLimits)
    keywords: KeywordLists = Field(default_factory=KeywordLists)


def load_ranking_config(path: Optional[str | Path] = None) -> RankingConfig:
    """Load ranking configuration from a YAML file.

    Args:
        path: Path to a YAML file. ``None`` returns the defaults. Keys that
            are left out keep their default values.

    Returns:
        Validated RankingConfig instance

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid
    """
    if path is None:
        return RankingConfig()

    source = str(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(source, str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(source, f"YAML parse error: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(source, "top level must be a mapping")

    try:
        return RankingConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(source, str(e)) from e
