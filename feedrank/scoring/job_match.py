"""Candidate-to-job compatibility scoring."""
import logging
from datetime import datetime
from typing import Optional, Sequence

from feedrank.config.ranking import RankingConfig
from feedrank.models import ItemType, Job, Profile, ScoreBreakdown, ScoredItem, utc_now
from feedrank.scoring.normalizers import (
    clamp_score,
    contains_any,
    round_half_up,
    split_location,
)

logger = logging.getLogger(__name__)

LEVEL_HIERARCHY = {
    "junior": 1,
    "mid": 2,
    "senior": 3,
    "lead": 4,
    "executive": 5,
}

# Jobs with an unrecognised level are compared as if they were senior roles
DEFAULT_JOB_LEVEL = 3

LEVEL_DISTANCE_SCORES = {0: 100.0, 1: 70.0, 2: 40.0}
FAR_LEVEL_SCORE = 10.0


def candidate_level(years: float) -> str:
    """Map total years of experience to a seniority label."""
    if years >= 5:
        return "senior"
    if years >= 2:
        return "mid"
    return "junior"


class JobMatchScorer:
    """Score how well a profile fits a job posting.

    Four sub-scores (skills, location, level, sector), each 0-100, combined
    with the configured job-match weights. Incomplete profiles or jobs never
    raise: the affected sub-score is simply 0.
    """

    def __init__(self, config: Optional[RankingConfig] = None):
        self.config = config or RankingConfig()
        self.weights = self.config.job_match.as_dict()
        self.keywords = self.config.keywords

    def score(self, profile: Profile, job: Job, now: Optional[datetime] = None) -> ScoreBreakdown:
        """
        Compute the match score for one job.

        Args:
            profile: Viewer profile
            job: Job posting
            now: Reference time for experience still in progress

        Returns:
            ScoreBreakdown with skills/location/level/sector components
        """
        now = now or utc_now()
        components = {
            "skills": self.skills_score(profile, job),
            "location": self.location_score(profile, job),
            "level": self.level_score(profile, job, now),
            "sector": self.sector_score(profile, job),
        }
        total = sum(components[name] * weight for name, weight in self.weights.items())
        return ScoreBreakdown(
            total=clamp_score(round_half_up(total)),
            components=components,
            weights=dict(self.weights),
        )

    def skills_score(self, profile: Profile, job: Job) -> float:
        """Share of profile skills overlapping a job skill (substring either way)."""
        if not profile.skills or not job.skills:
            return 0.0

        profile_skills = [s.lower() for s in profile.skills]
        job_skills = [s.lower() for s in job.skills]

        matched = [
            skill for skill in profile_skills
            if any(js in skill or skill in js for js in job_skills)
        ]
        denominator = max(len(profile_skills), len(job_skills))
        return clamp_score(len(matched) / denominator * 100)

    def location_score(self, profile: Profile, job: Job) -> float:
        """Compare preferred (or current) location against the job location."""
        if not job.location:
            return 0.0

        job_location = job.location.lower()
        job_parts = split_location(job_location)

        if profile.preferred_location:
            if contains_any(profile.preferred_location, self.keywords.remote_markers):
                return 100.0 if job.remote else 0.0

            preferred_parts = split_location(profile.preferred_location)
            overlap = any(
                part in job_part or job_part in part
                for part in preferred_parts
                for job_part in job_parts
            )
            return 80.0 if overlap else 0.0

        if profile.location:
            profile_location = profile.location.lower()
            if profile_location == job_location:
                return 100.0
            profile_parts = split_location(profile_location)
            if any(job_part in part for part in profile_parts for job_part in job_parts):
                return 60.0

        return 0.0

    def level_score(self, profile: Profile, job: Job, now: datetime) -> float:
        """Seniority distance between the candidate and the job."""
        if not profile.experience or not job.level:
            return 0.0

        user_level = LEVEL_HIERARCHY[candidate_level(profile.years_of_experience(now))]
        job_level = LEVEL_HIERARCHY.get(job.level, DEFAULT_JOB_LEVEL)
        return LEVEL_DISTANCE_SCORES.get(abs(user_level - job_level), FAR_LEVEL_SCORE)

    def sector_score(self, profile: Profile, job: Job) -> float:
        """Compare the profile sector with the job category."""
        if not profile.sector or not job.category:
            return 0.0

        sector = profile.sector.lower()
        category = job.category.lower()

        if sector == category:
            return 100.0
        if sector in category or category in sector:
            return 70.0
        if any(kw in sector and kw in category for kw in self.keywords.tech_sector):
            return 50.0
        return 0.0

    def rank(
        self,
        profile: Profile,
        jobs: Sequence[Job],
        limit: int = 50,
        min_score: float = 0,
        now: Optional[datetime] = None,
    ) -> list[ScoredItem]:
        """
        Rank jobs by match score alone (the "recommended jobs" listing).

        Args:
            profile: Viewer profile
            jobs: Jobs to rank
            limit: Maximum number of jobs returned
            min_score: Drop jobs scoring below this (0-100)
            now: Reference time

        Returns:
            ScoredItem list sorted by score descending
        """
        now = now or utc_now()
        scored = []
        for job in jobs:
            breakdown = self.score(profile, job, now)
            if breakdown.total < min_score:
                continue
            scored.append(
                ScoredItem(
                    id=job.id,
                    type=ItemType.JOB,
                    score=breakdown.total,
                    payload=job,
                    breakdown=breakdown,
                )
            )

        scored.sort(key=lambda item: item.score, reverse=True)
        logger.debug("Ranked %d of %d jobs by match score", len(scored), len(jobs))
        return scored[:limit]
