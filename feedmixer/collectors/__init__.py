"""
Feed collection: fetching, decoding and the per-request fork-join loader.
"""

from .decoder import FeedKind, decode_feed
from .error_aggregator import ErrorAggregator
from .feed_fetcher import DEFAULT_FETCH_TIMEOUT_SECONDS, fetch_feed
from .loader import FeedLoader, LoadResult

__all__ = [
    "DEFAULT_FETCH_TIMEOUT_SECONDS",
    "ErrorAggregator",
    "FeedKind",
    "FeedLoader",
    "LoadResult",
    "decode_feed",
    "fetch_feed",
]
