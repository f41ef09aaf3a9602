"""Ranking configuration and runtime settings."""
from .ranking import (
    DecayWindows,
    DiversityLimits,
    JobFeedWeights,
    JobMatchWeights,
    KeywordLists,
    PostFeedWeights,
    RankingConfig,
    load_ranking_config,
)

__all__ = [
    "DecayWindows",
    "DiversityLimits",
    "JobFeedWeights",
    "JobMatchWeights",
    "KeywordLists",
    "PostFeedWeights",
    "RankingConfig",
    "load_ranking_config",
]
