"""Feed ordering."""
from .diversifier import Diversifier
from .feed import FeedRanker

__all__ = ["Diversifier", "FeedRanker"]
