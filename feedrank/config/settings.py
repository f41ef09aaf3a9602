"""Application settings using Pydantic."""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from feedrank.config.ranking import RankingConfig, load_ranking_config


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FEEDRANK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for a rotating log file",
    )
    log_trace_positions: bool = Field(
        default=False,
        description="Keep per-position diversifier traces when logging at DEBUG",
    )

    # Ranking
    ranking_config_file: Optional[Path] = Field(
        default=None,
        description="YAML file overriding weights, decay windows and diversity limits",
    )

    def ranking_config(self) -> RankingConfig:
        """Load the ranking configuration this process should use."""
        return load_ranking_config(self.ranking_config_file)


# Global settings instance
settings = Settings()
