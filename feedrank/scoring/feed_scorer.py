"""Feed relevance scoring for jobs and posts."""
import logging
from datetime import datetime, timedelta
from typing import Iterable, Mapping, Optional

from feedrank.config.ranking import RankingConfig
from feedrank.exceptions import InvalidCandidateError, RankingError
from feedrank.models import (
    CandidateItem,
    InteractionHistory,
    Job,
    Post,
    Profile,
    ScoreBreakdown,
    ScoredItem,
    SocialGraph,
    utc_now,
)
from feedrank.scoring.job_match import JobMatchScorer
from feedrank.scoring.normalizers import (
    bounded_linear,
    clamp_score,
    contains_any,
    keyword_tokens,
    round_half_up,
    split_location,
    time_decay,
)

logger = logging.getLogger(__name__)

NO_INTERACTIONS = InteractionHistory()

# Ceiling of the interaction history sub-score
INTERACTION_CAP = 20.0


class FeedScorer:
    """Blend profile fit, behaviour, popularity and recency into one score.

    Jobs and posts use different signal sets; both produce a ScoreBreakdown
    whose weighted components add up to the rounded total.
    """

    def __init__(self, config: Optional[RankingConfig] = None, matcher: Optional[JobMatchScorer] = None):
        self.config = config or RankingConfig()
        self.matcher = matcher or JobMatchScorer(self.config)
        self.job_weights = self.config.job_feed.as_dict()
        self.post_weights = self.config.post_feed.as_dict()
        self.keywords = self.config.keywords
        self.job_window = timedelta(days=self.config.decay.job_days)
        self.post_window = timedelta(hours=self.config.decay.post_hours)

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    def score_job(
        self,
        profile: Profile,
        job: Job,
        history: InteractionHistory = NO_INTERACTIONS,
        now: Optional[datetime] = None,
    ) -> ScoreBreakdown:
        """
        Score a job posting for the feed.

        Args:
            profile: Viewer profile
            job: Job posting
            history: Viewer's aggregated interactions with this job
            now: Reference time for recency

        Returns:
            ScoreBreakdown with match, interaction_history, job_proximity,
            location, popularity and recency components
        """
        now = now or utc_now()
        match = self.matcher.score(profile, job, now)

        components = {
            "match": match.total,
            "interaction_history": self._job_interaction_score(history),
            "job_proximity": self._job_proximity_score(profile, job),
            "location": self._job_location_score(profile, job, match.components["location"]),
            "popularity": clamp_score(
                bounded_linear(job.views_count, 0.5, 50)
                + bounded_linear(job.applications_count, 1, 50)
            ),
            "recency": self._recency(job.created_at, now, self.job_window),
        }
        details = {
            "skills": match.components["skills"],
            "level": match.components["level"],
            "sector": match.components["sector"],
            "match_location": match.components["location"],
        }
        return self._combine(components, self.job_weights, details)

    def _job_interaction_score(self, history: InteractionHistory) -> float:
        score = bounded_linear(history.views, 5, 15)
        if history.saves > 0:
            score += 15
        if history.applies > 0:
            score += 20
        if history.company_views > 0:
            score += 10
        # One point per ten seconds spent on the job, at most 10
        score += min(history.total_duration_seconds // 10, 10)
        return min(float(score), INTERACTION_CAP)

    def _job_proximity_score(self, profile: Profile, job: Job) -> float:
        """How close the job is to what the viewer does or is looking for."""
        if not job.title:
            return 0.0

        title = job.title.lower()
        description = job.description.lower()
        category = job.category.lower()
        score = 0.0

        words = keyword_tokens(profile.headline)
        if words:
            text_matches = [w for w in words if w in title or w in description]
            category_matches = [w for w in words if category and w in category]

            if text_matches or category_matches:
                ratio = (len(text_matches) + len(category_matches)) / len(words)
                score = min(ratio * 100, 100.0)

                has_important_match = any(
                    any(kw in w or w in kw for kw in self.keywords.important_roles)
                    and (w in title or w in description)
                    for w in words
                )
                if has_important_match:
                    score = min(score + 20, 100.0)

        # Weak headline signal: fall back to the current job title
        if score < 50:
            current = profile.current_experience()
            if current and current.title:
                current_title = current.title.lower()
                if current_title == title:
                    score = max(score, 100.0)
                elif current_title in title or title in current_title:
                    score = max(score, 80.0)
                elif category and (category in current_title or current_title in category):
                    score = max(score, 60.0)

        return score

    def _job_location_score(self, profile: Profile, job: Job, match_location: float) -> float:
        score = match_location

        if profile.location and job.location:
            profile_location = profile.location.lower()
            job_location = job.location.lower()
            if profile_location == job_location:
                score = 100.0
            else:
                job_parts = set(split_location(job_location))
                if any(part in job_parts for part in split_location(profile_location)):
                    score = max(score, 80.0)

        if job.remote and contains_any(profile.preferred_location, self.keywords.remote_markers):
            score = max(score, 90.0)

        return score

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    def score_post(
        self,
        profile: Profile,
        post: Post,
        history: InteractionHistory = NO_INTERACTIONS,
        is_following: bool = False,
        now: Optional[datetime] = None,
    ) -> ScoreBreakdown:
        """
        Score a social post for the feed.

        Args:
            profile: Viewer profile
            post: Post to score
            history: Viewer's aggregated interactions with this post
            is_following: Whether the viewer follows the author or its company
            now: Reference time for recency

        Returns:
            ScoreBreakdown with followed_author, relevance, engagement,
            previous_interactions, recency and popularity components
        """
        now = now or utc_now()

        previous = 0.0
        if history.liked:
            previous += 50
        if history.commented:
            previous += 30
        if history.shared:
            previous += 20

        components = {
            "followed_author": 100.0 if is_following else 0.0,
            "relevance": self._post_relevance_score(profile, post),
            "engagement": clamp_score(
                bounded_linear(post.reactions_count, 0.5, 50)
                + bounded_linear(post.comments_count, 0.6, 30)
                + bounded_linear(post.shares_count, 1, 20)
            ),
            "previous_interactions": clamp_score(previous),
            "recency": self._recency(post.created_at, now, self.post_window),
            "popularity": bounded_linear(post.total_engagement, 0.5, 100),
        }
        return self._combine(components, self.post_weights)

    def _post_relevance_score(self, profile: Profile, post: Post) -> float:
        """Location mentions (50) plus headline overlap with the content (up to 50)."""
        content = post.content.lower()
        author_location = post.author_location.lower()
        score = 0.0

        location_parts = split_location(profile.location)
        if any(part in content or part in author_location for part in location_parts):
            score += 50

        words = keyword_tokens(profile.headline)
        if words and content:
            matches = [w for w in words if w in content]
            if matches:
                score += min(len(matches) / len(words) * 50, 50.0)

        return clamp_score(score)

    # ------------------------------------------------------------------
    # Shared
    # ------------------------------------------------------------------

    @staticmethod
    def _recency(created_at: Optional[datetime], now: datetime, window: timedelta) -> float:
        if created_at is None:
            return 0.0
        return time_decay(now - created_at, window)

    @staticmethod
    def _combine(
        components: dict[str, float],
        weights: dict[str, float],
        details: Optional[dict[str, float]] = None,
    ) -> ScoreBreakdown:
        components = {name: clamp_score(value) for name, value in components.items()}
        total = sum(components[name] * weight for name, weight in weights.items())
        return ScoreBreakdown(
            total=clamp_score(round_half_up(total)),
            components=components,
            weights=dict(weights),
            details=details or {},
        )

    def score_item(
        self,
        profile: Profile,
        item: CandidateItem,
        history: InteractionHistory = NO_INTERACTIONS,
        graph: Optional[SocialGraph] = None,
        now: Optional[datetime] = None,
    ) -> ScoredItem:
        """Score any candidate item and wrap it for diversification."""
        if isinstance(item, Job):
            breakdown = self.score_job(profile, item, history, now)
            author_id = None
        elif isinstance(item, Post):
            following = graph.follows(item) if graph else False
            breakdown = self.score_post(profile, item, history, following, now)
            author_id = item.author_id
        else:
            raise InvalidCandidateError(
                f"unsupported candidate type {type(item).__name__}",
                item_id=getattr(item, "id", None),
            )

        return ScoredItem(
            id=item.id,
            type=item.type,
            score=breakdown.total,
            author_id=author_id,
            payload=item,
            breakdown=breakdown,
        )

    def score_batch(
        self,
        profile: Profile,
        items: Iterable[CandidateItem],
        interactions: Optional[Mapping[str, InteractionHistory]] = None,
        graph: Optional[SocialGraph] = None,
        now: Optional[datetime] = None,
    ) -> list[ScoredItem]:
        """
        Score many candidates, skipping the ones that break the input contract.

        Args:
            profile: Viewer profile
            items: Jobs and/or posts
            interactions: Interaction history per item id
            graph: Viewer follow relationships
            now: Reference time shared by the whole batch

        Returns:
            ScoredItem list in input order (invalid items omitted)
        """
        now = now or utc_now()
        interactions = interactions or {}
        scored: list[ScoredItem] = []

        for item in items:
            item_id = getattr(item, "id", None)
            try:
                history = interactions.get(item_id, NO_INTERACTIONS)
                scored.append(self.score_item(profile, item, history, graph, now))
            except RankingError as e:
                logger.warning("Skipping item %s: %s", item_id, e)

        return scored
