"""Tests for ranking configuration models and loading."""
from pathlib import Path

import pytest
from pydantic import ValidationError

from feedrank.config.ranking import (
    DiversityLimits,
    JobFeedWeights,
    JobMatchWeights,
    RankingConfig,
    load_ranking_config,
)
from feedrank.config.settings import Settings
from feedrank.exceptions import ConfigurationError

EXAMPLE_CONFIG = Path(__file__).parent.parent.parent / "config" / "ranking.example.yaml"


class TestDefaults:
    """Tests for default configuration values."""

    def test_job_match_weights(self):
        assert JobMatchWeights().as_dict() == {"skills": 0.4, "location": 0.2, "level": 0.2, "sector": 0.2}

    def test_job_feed_weights_sum(self):
        """The job feed weights add up to 1.05, not 1."""
        assert sum(JobFeedWeights().as_dict().values()) == pytest.approx(1.05)

    def test_post_feed_weights_sum(self):
        assert sum(RankingConfig().post_feed.as_dict().values()) == pytest.approx(1.0)

    def test_decay_and_diversity(self):
        config = RankingConfig()
        assert config.decay.job_days == 30
        assert config.decay.post_hours == 168
        assert config.diversity.high_threshold == 70
        assert config.diversity.medium_threshold == 40

    def test_keywords(self):
        keywords = RankingConfig().keywords
        assert "remoto" in keywords.remote_markers
        assert "development" in keywords.tech_sector
        assert "engenheiro" in keywords.important_roles

    def test_frozen(self):
        config = RankingConfig()
        with pytest.raises(ValidationError):
            config.decay.job_days = 10


class TestValidation:
    """Tests for rejected configurations."""

    def test_weight_out_of_range(self):
        with pytest.raises(ValidationError):
            JobMatchWeights(skills=1.5)

    def test_all_zero_weights(self):
        with pytest.raises(ValidationError, match="non-zero"):
            JobMatchWeights(skills=0, location=0, level=0, sector=0)

    def test_weights_sum_too_large(self):
        with pytest.raises(ValidationError, match="add up to"):
            JobMatchWeights(skills=1, location=1)

    def test_unknown_weight(self):
        with pytest.raises(ValidationError):
            JobMatchWeights(salary=0.1)

    def test_thresholds_out_of_order(self):
        with pytest.raises(ValidationError):
            DiversityLimits(high_threshold=30, medium_threshold=40)

    def test_shares_exceed_one(self):
        with pytest.raises(ValidationError):
            DiversityLimits(high_share=0.7, medium_share=0.5)

    def test_run_limit_at_least_one(self):
        with pytest.raises(ValidationError):
            DiversityLimits(max_consecutive_same_type=0)


class TestLoadRankingConfig:
    """Tests for YAML loading."""

    def test_none_returns_defaults(self):
        assert load_ranking_config(None) == RankingConfig()

    def test_example_file_matches_defaults(self):
        assert load_ranking_config(EXAMPLE_CONFIG) == RankingConfig()

    def test_partial_override(self, tmp_path):
        path = tmp_path / "ranking.yaml"
        path.write_text("decay:\n  post_hours: 48\ndiversity:\n  max_consecutive_same_type: 2\n")

        config = load_ranking_config(path)

        assert config.decay.post_hours == 48
        assert config.decay.job_days == 30
        assert config.diversity.max_consecutive_same_type == 2
        assert config.job_feed == JobFeedWeights()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_ranking_config(path) == RankingConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_ranking_config(tmp_path / "missing.yaml")
        assert "missing.yaml" in exc_info.value.source

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("decay: [unclosed\n")
        with pytest.raises(ConfigurationError, match="YAML parse error"):
            load_ranking_config(path)

    def test_top_level_not_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_ranking_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("job_match:\n  skills: 2\n")
        with pytest.raises(ConfigurationError):
            load_ranking_config(path)

    def test_unknown_section(self, tmp_path):
        path = tmp_path / "extra.yaml"
        path.write_text("ml_model:\n  enabled: true\n")
        with pytest.raises(ConfigurationError):
            load_ranking_config(path)


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("FEEDRANK_LOG_LEVEL", raising=False)
        monkeypatch.delenv("FEEDRANK_LOG_FILE", raising=False)
        monkeypatch.delenv("FEEDRANK_RANKING_CONFIG_FILE", raising=False)
        settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.log_file is None
        assert settings.ranking_config() == RankingConfig()

    def test_environment_overrides(self, monkeypatch, tmp_path):
        path = tmp_path / "ranking.yaml"
        path.write_text("decay:\n  job_days: 14\n")
        monkeypatch.setenv("FEEDRANK_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("FEEDRANK_RANKING_CONFIG_FILE", str(path))

        settings = Settings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.ranking_config().decay.job_days == 14
