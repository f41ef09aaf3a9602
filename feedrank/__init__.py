"""feedrank - relevance ranking for job and social feeds."""
from .config.ranking import RankingConfig, load_ranking_config
from .interactions import summarize_interactions
from .models import (
    CandidateItem,
    Experience,
    InteractionEvent,
    InteractionHistory,
    ItemType,
    Job,
    Post,
    Profile,
    ScoreBreakdown,
    ScoredItem,
    SocialGraph,
)
from .ranking import Diversifier, FeedRanker
from .scoring import FeedScorer, ItemScorer, JobMatchScorer

__version__ = "0.1.0"

__all__ = [
    "CandidateItem",
    "Diversifier",
    "Experience",
    "FeedRanker",
    "FeedScorer",
    "InteractionEvent",
    "InteractionHistory",
    "ItemScorer",
    "ItemType",
    "Job",
    "JobMatchScorer",
    "Post",
    "Profile",
    "RankingConfig",
    "ScoreBreakdown",
    "ScoredItem",
    "SocialGraph",
    "load_ranking_config",
    "summarize_interactions",
]
