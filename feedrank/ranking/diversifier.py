"""Feed diversification.

Takes a score-sorted list and interleaves score tiers while breaking up long
runs of the same item type or author. The algorithm is greedy and single
pass: when the next pick would break a run limit it swaps in the first item
(high -> medium -> low) that breaks none, otherwise it emits the pick anyway.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

from feedrank.config.ranking import DiversityLimits, RankingConfig
from feedrank.models import ItemType, ScoredItem

logger = logging.getLogger(__name__)

HIGH = "high"
MEDIUM = "medium"
LOW = "low"
TIER_ORDER = (HIGH, MEDIUM, LOW)


@dataclass
class _RunState:
    """Type and author runs ending at the last emitted item."""

    last_type: Optional[ItemType] = None
    last_author: Optional[str] = None
    type_run: int = 0
    author_run: int = 0

    def type_run_with(self, item: ScoredItem) -> int:
        return self.type_run + 1 if item.type == self.last_type else 1

    def author_run_with(self, item: ScoredItem) -> int:
        # Items without an author never form author runs
        if item.author_id is None:
            return 0
        return self.author_run + 1 if item.author_id == self.last_author else 1

    def push(self, item: ScoredItem) -> None:
        self.type_run = self.type_run_with(item)
        self.author_run = self.author_run_with(item)
        self.last_type = item.type
        self.last_author = item.author_id


@dataclass
class _TierArena:
    """Three tier index lists over the input plus a consumed-index set."""

    tiers: dict[str, list[int]]
    cursors: dict[str, int] = field(default_factory=lambda: dict.fromkeys(TIER_ORDER, 0))
    consumed: set[int] = field(default_factory=set)

    def peek(self, tier: str) -> Optional[int]:
        """First unconsumed index in a tier."""
        indices = self.tiers[tier]
        cursor = self.cursors[tier]
        while cursor < len(indices) and indices[cursor] in self.consumed:
            cursor += 1
        self.cursors[tier] = cursor
        return indices[cursor] if cursor < len(indices) else None

    def remaining(self) -> Iterator[tuple[str, int]]:
        """Unconsumed (tier, index) pairs in high -> medium -> low order."""
        for tier in TIER_ORDER:
            for idx in self.tiers[tier][self.cursors[tier]:]:
                if idx not in self.consumed:
                    yield tier, idx

    def take(self, idx: int) -> None:
        self.consumed.add(idx)


class Diversifier:
    """Reorder a ranked feed so tiers interleave and runs stay short."""

    def __init__(self, limits: Optional[DiversityLimits] = None):
        self.limits = limits or RankingConfig().diversity

    @classmethod
    def from_config(cls, config: RankingConfig) -> "Diversifier":
        return cls(config.diversity)

    def tier_of(self, item: ScoredItem) -> str:
        if item.score >= self.limits.high_threshold:
            return HIGH
        if item.score >= self.limits.medium_threshold:
            return MEDIUM
        return LOW

    def tier_quotas(self, n: int) -> dict[str, int]:
        """Items per tier across the output; low absorbs the remainder."""
        # round() first so 10 * 0.3 counts as 3, not 3.0000000000000004
        high = math.ceil(round(n * self.limits.high_share, 9))
        medium = math.ceil(round(n * self.limits.medium_share, 9))
        return {HIGH: high, MEDIUM: medium, LOW: n - high - medium}

    def diversify(self, items: Sequence[ScoredItem]) -> list[ScoredItem]:
        """
        Reorder items already sorted by score descending.

        Args:
            items: Scored feed items, highest score first

        Returns:
            The same items, each exactly once, in diversified order
        """
        n = len(items)
        if n == 0:
            return []

        tiers: dict[str, list[int]] = {tier: [] for tier in TIER_ORDER}
        for idx, item in enumerate(items):
            tiers[self.tier_of(item)].append(idx)

        arena = _TierArena(tiers=tiers)
        quotas = self.tier_quotas(n)
        taken = dict.fromkeys(TIER_ORDER, 0)
        runs = _RunState()
        swaps = 0
        result: list[ScoredItem] = []

        for position in range(n):
            choice = self._select(arena, position / n, quotas, taken)
            if choice is None:
                break
            tier, idx = choice

            if self._violates(runs, items[idx]):
                alternative = next(
                    ((t, i) for t, i in arena.remaining() if not self._violates(runs, items[i])),
                    None,
                )
                if alternative is not None:
                    logger.debug(
                        "Position %d: swapped %s for %s to break a run",
                        position, items[idx].id, items[alternative[1]].id,
                    )
                    tier, idx = alternative
                    swaps += 1

            arena.take(idx)
            # quota is charged to the tier of the emitted item, swaps included
            taken[tier] += 1
            runs.push(items[idx])
            result.append(items[idx])

        logger.debug("Diversified %d items with %d swaps", len(result), swaps)
        return result

    def _select(
        self,
        arena: _TierArena,
        progress: float,
        quotas: dict[str, int],
        taken: dict[str, int],
    ) -> Optional[tuple[str, int]]:
        """Pick from the tier this position calls for, else any non-empty tier."""
        preferred = []
        if progress < self.limits.high_share:
            preferred.append(HIGH)
        if progress < self.limits.high_share + self.limits.medium_share:
            preferred.append(MEDIUM)
        preferred.append(LOW)

        for tier in preferred:
            if taken[tier] < quotas[tier]:
                idx = arena.peek(tier)
                if idx is not None:
                    return tier, idx

        for tier in TIER_ORDER:
            idx = arena.peek(tier)
            if idx is not None:
                return tier, idx
        return None

    def _violates(self, runs: _RunState, item: ScoredItem) -> bool:
        if runs.type_run_with(item) > self.limits.max_consecutive_same_type:
            return True
        return runs.author_run_with(item) > self.limits.max_consecutive_same_author
