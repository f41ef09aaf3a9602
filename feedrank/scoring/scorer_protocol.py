"""Scorer protocol for pluggable feed scoring.

FeedScorer is the heuristic implementation. Anything that can turn a batch
of candidates into ScoredItems can be handed to FeedRanker instead.
"""
from datetime import datetime
from typing import Iterable, Mapping, Optional, Protocol, runtime_checkable

from feedrank.models import CandidateItem, InteractionHistory, Profile, ScoredItem, SocialGraph


@runtime_checkable
class ItemScorer(Protocol):
    """Protocol for feed scoring engines."""

    def score_batch(
        self,
        profile: Profile,
        items: Iterable[CandidateItem],
        interactions: Optional[Mapping[str, InteractionHistory]] = None,
        graph: Optional[SocialGraph] = None,
        now: Optional[datetime] = None,
    ) -> list[ScoredItem]:
        """Score candidates and return one ScoredItem per valid input."""
        ...
