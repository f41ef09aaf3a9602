"""Feed assembly: score, merge, sort, diversify."""
import logging
from datetime import datetime
from typing import Mapping, Optional, Sequence

from feedrank.config.ranking import RankingConfig
from feedrank.models import (
    InteractionHistory,
    Job,
    Post,
    Profile,
    ScoredItem,
    SocialGraph,
    utc_now,
)
from feedrank.ranking.diversifier import Diversifier
from feedrank.scoring.feed_scorer import FeedScorer
from feedrank.scoring.scorer_protocol import ItemScorer

logger = logging.getLogger(__name__)


class FeedRanker:
    """Produce the ordered feed for one viewer.

    Scoring of each candidate is independent; diversification runs once over
    the merged, score-sorted list. The caller owns pagination.
    """

    def __init__(
        self,
        config: Optional[RankingConfig] = None,
        scorer: Optional[ItemScorer] = None,
        diversifier: Optional[Diversifier] = None,
    ):
        """
        Initialize feed ranker.

        Args:
            config: Ranking configuration (defaults when omitted)
            scorer: Scoring engine; FeedScorer built from config by default
            diversifier: Diversifier; built from config by default
        """
        self.config = config or RankingConfig()
        self.scorer = scorer or FeedScorer(self.config)
        self.diversifier = diversifier or Diversifier.from_config(self.config)

    def rank(
        self,
        profile: Profile,
        jobs: Sequence[Job] = (),
        posts: Sequence[Post] = (),
        interactions: Optional[Mapping[str, InteractionHistory]] = None,
        graph: Optional[SocialGraph] = None,
        now: Optional[datetime] = None,
    ) -> list[ScoredItem]:
        """
        Rank jobs and posts into a single diversified feed.

        Args:
            profile: Viewer profile
            jobs: Candidate job postings
            posts: Candidate posts
            interactions: Interaction history per item id
            graph: Viewer follow relationships
            now: Reference time shared by every score

        Returns:
            Diversified list of ScoredItem, best first
        """
        now = now or utc_now()
        graph = graph or SocialGraph()

        scored = self.scorer.score_batch(profile, [*jobs, *posts], interactions, graph, now)
        # sort is stable: equal scores keep jobs before posts, input order within each
        scored.sort(key=lambda item: item.score, reverse=True)
        feed = self.diversifier.diversify(scored)

        logger.info(
            "Ranked feed: %d items (%d jobs, %d posts offered)",
            len(feed), len(jobs), len(posts),
        )
        return feed
