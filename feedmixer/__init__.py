"""
FeedMixer: merges a content feed with an advertisement feed on every request.

Each request fetches both feeds concurrently, decodes them into typed
collections, inserts one advertisement after every N content items and
answers with either the combined content or the list of errors that
prevented it.
"""

from config.version import __version__
from .collectors import ErrorAggregator, FeedKind, FeedLoader, decode_feed, fetch_feed
from .config_manager import ConfigError, load_config
from .config_schema import Config
from .errors import DecodeError, FeedMixerError, FetchError, InvalidJSONError, MergeError
from .mixing import interleave
from .serving import create_app

__all__ = [
    "__version__",
    "Config",
    "ConfigError",
    "DecodeError",
    "ErrorAggregator",
    "FeedKind",
    "FeedLoader",
    "FeedMixerError",
    "FetchError",
    "InvalidJSONError",
    "MergeError",
    "create_app",
    "decode_feed",
    "fetch_feed",
    "interleave",
    "load_config",
]
