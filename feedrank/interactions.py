"""Aggregate a raw interaction log into per-item histories."""
import logging
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Iterable, Mapping, Optional

from feedrank.models import (
    InteractionEvent,
    InteractionHistory,
    ItemType,
    ensure_utc,
    utc_now,
)

logger = logging.getLogger(__name__)

VIEW = "view"
LIKE = "like"
COMMENT = "comment"
SHARE = "share"
SAVE = "save"
APPLY = "apply"

KNOWN_KINDS = {VIEW, LIKE, COMMENT, SHARE, SAVE, APPLY}


def summarize_interactions(
    events: Iterable[InteractionEvent],
    saved_job_ids: Iterable[str] = (),
    applied_job_ids: Iterable[str] = (),
    company_of_job: Optional[Mapping[str, str]] = None,
    now: Optional[datetime] = None,
    lookback_days: int = 30,
) -> dict[str, InteractionHistory]:
    """
    Build InteractionHistory values from the viewer's event log.

    Only events inside the lookback window count. A job is flagged as
    "company viewed" when the viewer viewed any job of the same company.

    Args:
        events: Raw interaction events of one viewer
        saved_job_ids: Jobs the viewer saved
        applied_job_ids: Jobs the viewer applied to
        company_of_job: Company id per job id
        now: Reference time
        lookback_days: Age limit for events

    Returns:
        Mapping of item id to InteractionHistory
    """
    now = now or utc_now()
    cutoff = now - timedelta(days=lookback_days)
    company_of_job = company_of_job or {}

    views: dict[str, int] = defaultdict(int)
    durations: dict[str, int] = defaultdict(int)
    kinds: dict[str, set[str]] = defaultdict(set)
    item_types: dict[str, ItemType] = {}

    for event in events:
        try:
            timestamp = ensure_utc(event.timestamp)
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring event with bad timestamp on %s: %s", event.item_id, e)
            continue
        if timestamp is None or timestamp < cutoff:
            continue
        if event.kind not in KNOWN_KINDS:
            logger.warning("Ignoring unknown interaction kind %r on %s", event.kind, event.item_id)
            continue
        try:
            item_type = ItemType(event.item_type)
        except ValueError:
            logger.warning("Ignoring unknown item type %r on %s", event.item_type, event.item_id)
            continue
        duration = event.duration_seconds or 0
        if duration < 0:
            logger.warning("Ignoring event with negative duration on %s", event.item_id)
            continue

        item_id = str(event.item_id)
        item_types[item_id] = item_type
        kinds[item_id].add(event.kind)
        if event.kind == VIEW:
            views[item_id] += 1
            durations[item_id] += duration

    saved = {str(i) for i in saved_job_ids}
    applied = {str(i) for i in applied_job_ids}

    viewed_companies = {
        company_of_job[item_id]
        for item_id, count in views.items()
        if count and item_types.get(item_id) == ItemType.JOB and item_id in company_of_job
    }

    item_ids = set(kinds) | saved | applied
    item_ids |= {job_id for job_id, company in company_of_job.items() if company in viewed_companies}

    histories: dict[str, InteractionHistory] = {}
    for item_id in item_ids:
        item_kinds = kinds.get(item_id, set())
        is_post = item_types.get(item_id) == ItemType.POST
        histories[item_id] = InteractionHistory(
            views=views.get(item_id, 0),
            saves=int(not is_post and (item_id in saved or SAVE in item_kinds)),
            applies=int(not is_post and (item_id in applied or APPLY in item_kinds)),
            company_views=int(not is_post and company_of_job.get(item_id) in viewed_companies),
            total_duration_seconds=durations.get(item_id, 0),
            liked=is_post and LIKE in item_kinds,
            commented=is_post and COMMENT in item_kinds,
            shared=is_post and SHARE in item_kinds,
        )

    return histories
