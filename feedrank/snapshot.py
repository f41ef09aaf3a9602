"""Load a ranking snapshot (profile, candidates, history) from YAML.

Example document::

    now: 2026-03-01T12:00:00Z
    profile:
      skills: [python, django]
      location: Sao Paulo, SP
      headline: Senior Python Developer
    jobs:
      - id: job-1
        title: Python Developer
        created_at: 2026-02-20T09:00:00Z
    posts:
      - id: post-1
        author_id: user-7
        content: Hiring Python developers in Sao Paulo
    interactions:
      job-1: {views: 2, total_duration_seconds: 45}
    following:
      users: [user-7]
      companies: []
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import yaml

from feedrank.exceptions import InvalidProfileError, RankingError, SnapshotError
from feedrank.models import (
    InteractionHistory,
    Job,
    Post,
    Profile,
    SocialGraph,
    ensure_utc,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Snapshot:
    """Everything needed to rank one viewer's feed."""

    profile: Profile
    jobs: list[Job] = field(default_factory=list)
    posts: list[Post] = field(default_factory=list)
    interactions: dict[str, InteractionHistory] = field(default_factory=dict)
    graph: SocialGraph = field(default_factory=SocialGraph)
    now: Optional[datetime] = None


def _build_all(kind: str, entries: Any, factory: Callable[..., T]) -> list[T]:
    """Build one object per entry, logging and skipping invalid ones."""
    built: list[T] = []
    for position, entry in enumerate(entries or []):
        if not isinstance(entry, dict):
            logger.warning("Skipping %s #%d: expected a mapping", kind, position)
            continue
        try:
            built.append(factory(**entry))
        except (RankingError, TypeError, ValueError) as e:
            logger.warning("Skipping %s #%d (%s): %s", kind, position, entry.get("id"), e)
    return built


def _build_interactions(raw: Any) -> dict[str, InteractionHistory]:
    histories: dict[str, InteractionHistory] = {}
    for item_id, values in (raw or {}).items():
        try:
            histories[str(item_id)] = InteractionHistory(**(values or {}))
        except (RankingError, TypeError) as e:
            logger.warning("Skipping interactions for %s: %s", item_id, e)
    return histories


def parse_snapshot(data: dict) -> Snapshot:
    """
    Build a Snapshot from an already parsed document.

    Raises:
        InvalidProfileError: If the profile section is missing or invalid
    """
    raw_profile = data.get("profile")
    if not isinstance(raw_profile, dict):
        raise InvalidProfileError("snapshot has no profile mapping")
    try:
        profile = Profile(**raw_profile)
    except TypeError as e:
        raise InvalidProfileError(str(e)) from e

    following = data.get("following") or {}
    graph = SocialGraph(
        followed_user_ids=frozenset(str(u) for u in following.get("users") or []),
        followed_company_ids=frozenset(str(c) for c in following.get("companies") or []),
    )

    return Snapshot(
        profile=profile,
        jobs=_build_all("job", data.get("jobs"), Job),
        posts=_build_all("post", data.get("posts"), Post),
        interactions=_build_interactions(data.get("interactions")),
        graph=graph,
        now=ensure_utc(data.get("now")),
    )


def load_snapshot(path: str | Path) -> Snapshot:
    """
    Load a snapshot YAML file.

    Args:
        path: Path to the snapshot file

    Returns:
        Parsed Snapshot

    Raises:
        SnapshotError: If the file cannot be read or parsed
        InvalidProfileError: If the profile section is missing or invalid
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise SnapshotError(str(path), str(e)) from e
    except yaml.YAMLError as e:
        raise SnapshotError(str(path), f"YAML parse error: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotError(str(path), "top level must be a mapping")

    snapshot = parse_snapshot(data)
    logger.info(
        "Loaded snapshot %s: %d jobs, %d posts",
        path, len(snapshot.jobs), len(snapshot.posts),
    )
    return snapshot
