"""Relevance scoring."""
from .feed_scorer import FeedScorer
from .job_match import JobMatchScorer
from .scorer_protocol import ItemScorer

__all__ = ["FeedScorer", "ItemScorer", "JobMatchScorer"]
