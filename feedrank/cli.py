"""Command line entry point: rank a snapshot and print the feed.

Usage:
    feedrank rank snapshot.yaml
    feedrank rank snapshot.yaml --config ranking.yaml --limit 20
    feedrank rank snapshot.yaml --jobs-only

Environment variables:
    FEEDRANK_LOG_LEVEL: Log level (default INFO)
    FEEDRANK_LOG_FILE: Optional rotating log file
    FEEDRANK_LOG_TRACE_POSITIONS: Log every diversifier swap at DEBUG
    FEEDRANK_RANKING_CONFIG_FILE: Default ranking configuration YAML
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from feedrank.config.ranking import load_ranking_config
from feedrank.config.settings import settings
from feedrank.exceptions import RankingError
from feedrank.logging_config import setup_logging
from feedrank.models import ScoredItem
from feedrank.ranking.feed import FeedRanker
from feedrank.scoring.job_match import JobMatchScorer
from feedrank.snapshot import load_snapshot

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="feedrank", description="Relevance ranking for job and post feeds")
    subparsers = parser.add_subparsers(dest="command", required=True)

    rank = subparsers.add_parser("rank", help="Rank the candidates of a snapshot file")
    rank.add_argument("snapshot", help="Snapshot YAML (profile, jobs, posts, interactions, following)")
    rank.add_argument("--config", help="Ranking configuration YAML (overrides FEEDRANK_RANKING_CONFIG_FILE)")
    rank.add_argument("--limit", type=int, default=None, help="Print only the first N items")
    rank.add_argument(
        "--jobs-only",
        action="store_true",
        help="Rank jobs by match score only (recommended jobs listing)",
    )
    return parser


def format_item(position: int, item: ScoredItem) -> str:
    author = f" by {item.author_id}" if item.author_id else ""
    return f"{position:>3}. [{item.type.value:<4}] {item.id}{author}  score={item.score:.0f}"


def run_rank(args: argparse.Namespace) -> list[ScoredItem]:
    config = load_ranking_config(args.config) if args.config else settings.ranking_config()
    snapshot = load_snapshot(args.snapshot)

    if args.jobs_only:
        limit = args.limit if args.limit is not None else 50
        return JobMatchScorer(config).rank(snapshot.profile, snapshot.jobs, limit=limit, now=snapshot.now)

    feed = FeedRanker(config).rank(
        snapshot.profile,
        jobs=snapshot.jobs,
        posts=snapshot.posts,
        interactions=snapshot.interactions,
        graph=snapshot.graph,
        now=snapshot.now,
    )
    return feed if args.limit is None else feed[:args.limit]


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(settings.log_level, settings.log_file, settings.log_trace_positions)

    try:
        items = run_rank(args)
    except RankingError as e:
        logger.error("Error: %s", e)
        return 1

    for position, item in enumerate(items, start=1):
        print(format_item(position, item))
    return 0


if __name__ == "__main__":
    sys.exit(main())
