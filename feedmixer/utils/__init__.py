"""
Utilities shared across the FeedMixer service.
"""

from .logger import FeedMixerLogger, get_logger, get_module_logger, setup_logging

__all__ = [
    "FeedMixerLogger",
    "get_logger",
    "get_module_logger",
    "setup_logging",
]
