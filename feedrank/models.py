"""Domain models consumed and produced by the ranking engine.

All inputs are transient snapshots handed over by the surrounding application.
Optional fields are normalized to zero values here so the scoring code never
has to probe for missing data.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Optional, Union

from dateutil import parser as dateutil_parser

from feedrank.exceptions import (
    InvalidCandidateError,
    InvalidInteractionError,
    InvalidProfileError,
)


class ItemType(str, Enum):
    """Kind of feed item."""

    JOB = "job"
    POST = "post"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value) -> Optional[datetime]:
    """Coerce date strings and plain dates to datetimes; naive values are UTC."""
    if value is None:
        return None
    if isinstance(value, str):
        value = dateutil_parser.parse(value)
    elif not isinstance(value, datetime) and isinstance(value, date):
        value = datetime.combine(value, time())
    elif not isinstance(value, datetime):
        raise TypeError(f"expected a date string, date or datetime, got {type(value).__name__}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _text(value: Optional[str]) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"expected text, got {type(value).__name__} {value!r}")
    return " ".join(value.split())


def _count(value: Optional[int], name: str, item_id: str) -> int:
    count = int(value or 0)
    if count < 0:
        raise InvalidCandidateError(f"{name} cannot be negative ({count})", item_id=item_id)
    return count


def _timestamp(value, item_id: str) -> Optional[datetime]:
    try:
        return ensure_utc(value)
    except (TypeError, ValueError) as e:
        raise InvalidCandidateError(f"bad timestamp {value!r}", item_id=item_id) from e


@dataclass
class Experience:
    """One entry of a profile's work history."""

    title: str
    company: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    current: bool = False

    def __post_init__(self):
        self.title = _text(self.title)
        self.company = _text(self.company)
        try:
            self.start_date = ensure_utc(self.start_date)
            self.end_date = ensure_utc(self.end_date)
        except (TypeError, ValueError) as e:
            raise InvalidProfileError(f"bad date in experience '{self.title}': {e}") from e
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise InvalidProfileError(
                f"experience '{self.title}' ends before it starts"
            )

    def years(self, now: datetime) -> float:
        """Duration in years, using ``now`` for current or open-ended entries."""
        if self.start_date is None:
            return 0.0
        end = now if self.current or self.end_date is None else self.end_date
        days = (end - self.start_date).total_seconds() / 86400
        return max(0.0, days / 365)


@dataclass
class Profile:
    """Read-only snapshot of the viewing user's profile."""

    skills: list[str] = field(default_factory=list)
    location: str = ""
    preferred_location: str = ""
    sector: str = ""
    headline: str = ""
    experience: list[Experience] = field(default_factory=list)

    def __post_init__(self):
        self.skills = [_text(s) for s in self.skills or [] if _text(s)]
        self.location = _text(self.location)
        self.preferred_location = _text(self.preferred_location)
        self.sector = _text(self.sector)
        self.headline = _text(self.headline)
        self.experience = [
            e if isinstance(e, Experience) else Experience(**e)
            for e in self.experience or []
        ]

    def current_experience(self) -> Optional[Experience]:
        """First experience entry flagged as current, if any."""
        return next((e for e in self.experience if e.current), None)

    def years_of_experience(self, now: datetime) -> float:
        return sum(e.years(now) for e in self.experience)


@dataclass
class Job:
    """Job posting candidate."""

    id: str
    title: str = ""
    description: str = ""
    skills: list[str] = field(default_factory=list)
    location: str = ""
    remote: bool = False
    level: str = ""
    category: str = ""
    created_at: Optional[datetime] = None
    views_count: int = 0
    applications_count: int = 0
    company_id: Optional[str] = None

    type = ItemType.JOB

    def __post_init__(self):
        self.id = str(self.id)
        self.title = _text(self.title)
        self.description = _text(self.description)
        self.skills = [_text(s) for s in self.skills or [] if _text(s)]
        self.location = _text(self.location)
        self.remote = bool(self.remote)
        self.level = _text(self.level).lower()
        self.category = _text(self.category)
        self.created_at = _timestamp(self.created_at, self.id)
        self.views_count = _count(self.views_count, "views_count", self.id)
        self.applications_count = _count(self.applications_count, "applications_count", self.id)


@dataclass
class Post:
    """Social post candidate."""

    id: str
    content: str = ""
    author_id: Optional[str] = None
    created_at: Optional[datetime] = None
    reactions_count: int = 0
    comments_count: int = 0
    shares_count: int = 0
    company_id: Optional[str] = None
    author_location: str = ""

    type = ItemType.POST

    def __post_init__(self):
        self.id = str(self.id)
        self.content = _text(self.content)
        self.author_id = str(self.author_id) if self.author_id is not None else None
        self.created_at = _timestamp(self.created_at, self.id)
        self.reactions_count = _count(self.reactions_count, "reactions_count", self.id)
        self.comments_count = _count(self.comments_count, "comments_count", self.id)
        self.shares_count = _count(self.shares_count, "shares_count", self.id)
        self.author_location = _text(self.author_location)

    @property
    def total_engagement(self) -> int:
        return self.reactions_count + self.comments_count + self.shares_count


CandidateItem = Union[Job, Post]


@dataclass(frozen=True)
class InteractionHistory:
    """Aggregated behaviour of the viewer towards one item."""

    views: int = 0
    saves: int = 0
    applies: int = 0
    company_views: int = 0
    total_duration_seconds: int = 0
    liked: bool = False
    commented: bool = False
    shared: bool = False

    def __post_init__(self):
        for name in ("views", "saves", "applies", "company_views", "total_duration_seconds"):
            value = getattr(self, name)
            if value is None or value < 0:
                raise InvalidInteractionError(name, value)


@dataclass(frozen=True)
class InteractionEvent:
    """Raw interaction log entry, as recorded by the application."""

    item_id: str
    item_type: ItemType
    kind: str  # view | like | comment | share | save | apply
    timestamp: datetime
    duration_seconds: int = 0


@dataclass(frozen=True)
class SocialGraph:
    """Follow relationships of the viewing user."""

    followed_user_ids: frozenset[str] = frozenset()
    followed_company_ids: frozenset[str] = frozenset()

    def follows(self, post: Post) -> bool:
        """True if the post's author or its company is followed."""
        if post.author_id and post.author_id in self.followed_user_ids:
            return True
        return bool(post.company_id and post.company_id in self.followed_company_ids)


@dataclass
class ScoreBreakdown:
    """Total score plus the normalized signals it was computed from."""

    total: float
    components: dict[str, float] = field(default_factory=dict)
    weights: dict[str, float] = field(default_factory=dict)
    # Extra sub-scores shown for transparency, not part of the weighted sum
    details: dict[str, float] = field(default_factory=dict)

    def weighted_sum(self) -> float:
        return sum(value * self.weights.get(name, 0.0) for name, value in self.components.items())


@dataclass
class ScoredItem:
    """A candidate with its ranking score, ready for diversification."""

    id: str
    type: ItemType
    score: float
    author_id: Optional[str] = None
    payload: Any = None
    breakdown: Optional[ScoreBreakdown] = None

    def __post_init__(self):
        if self.type is None:
            raise InvalidCandidateError("missing item type", item_id=self.id)
        try:
            self.type = ItemType(self.type)
        except ValueError:
            raise InvalidCandidateError(f"unknown item type {self.type!r}", item_id=self.id)
        if not 0 <= self.score <= 100:
            raise InvalidCandidateError(f"score {self.score} outside [0, 100]", item_id=self.id)
