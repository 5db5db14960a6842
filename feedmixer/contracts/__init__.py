"""Typed contracts for feed payloads and response envelopes."""

from .envelopes import (
    DefaultAdvertisement,
    ErrorEnvelope,
    ErrorRecord,
    ResponseItem,
    SuccessEnvelope,
)
from .feeds import (
    AdvertisementFeed,
    AdvertisementItem,
    AdvertisementItems,
    ContentFeed,
    ContentItem,
    ContentItems,
)

__all__ = [
    "AdvertisementFeed",
    "AdvertisementItem",
    "AdvertisementItems",
    "ContentFeed",
    "ContentItem",
    "ContentItems",
    "DefaultAdvertisement",
    "ErrorEnvelope",
    "ErrorRecord",
    "ResponseItem",
    "SuccessEnvelope",
]
