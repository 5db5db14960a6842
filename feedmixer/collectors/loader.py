# feedmixer/collectors/loader.py
"""Concurrent fetch-and-decode of the content and advertisement feeds."""

import asyncio
import time
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from feedmixer.contracts import AdvertisementFeed, AdvertisementItem, ContentFeed, ContentItem
from feedmixer.errors import FetchError, FeedMixerError
from feedmixer.utils.logger import get_module_logger

from .decoder import Feed, FeedKind, decode_feed
from .error_aggregator import ErrorAggregator
from .feed_fetcher import DEFAULT_FETCH_TIMEOUT_SECONDS, fetch_feed

log = get_module_logger("collectors.loader")


@dataclass
class LoadResult:
    """Outcome of one request's fork-join load.

    A feed whose pipeline failed is ``None`` and has at least one entry in
    ``errors``.
    """

    content: Optional[ContentFeed]
    advertisements: Optional[AdvertisementFeed]
    errors: ErrorAggregator = field(default_factory=ErrorAggregator)

    @property
    def ok(self) -> bool:
        return self.errors.is_empty()

    @property
    def content_items(self) -> List[ContentItem]:
        return list(self.content.items) if self.content else []

    @property
    def advertisement_items(self) -> List[AdvertisementItem]:
        return list(self.advertisements.items) if self.advertisements else []


class FeedLoader:
    """Runs both feed pipelines in parallel and waits for both to finish."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
    ) -> None:
        self.client = client
        self.timeout = timeout

    async def _run_pipeline(
        self, url: str, kind: FeedKind, errors: ErrorAggregator
    ) -> Optional[Feed]:
        try:
            raw = await fetch_feed(self.client, url, self.timeout)
        except FetchError as exc:
            errors.add_error(exc, f"Error of getting content for {kind.label} structure")
            log.bind(event="loader.fetch_failed", feed=kind.label, url=url).error(str(exc))
            return None

        try:
            feed = decode_feed(raw, kind)
        except FeedMixerError as exc:
            errors.add_error(exc, f"Error of preparing structure {kind.label}")
            log.bind(
                event="loader.decode_failed",
                feed=kind.label,
                url=url,
                error_type=type(exc).__name__,
            ).error(str(exc))
            return None

        log.bind(
            event="loader.feed_loaded",
            feed=kind.label,
            items=len(feed.items),
            http_status=feed.http_status,
        ).debug(f"Loaded {kind.label} feed")
        return feed

    async def load(self, content_url: str, advertisements_url: str) -> LoadResult:
        """Fetch and decode both feeds concurrently.

        Failures never cancel the sibling pipeline; every failure lands in the
        returned result's error aggregator.
        """
        errors = ErrorAggregator()
        start = time.perf_counter()
        content, advertisements = await asyncio.gather(
            self._run_pipeline(content_url, FeedKind.CONTENT, errors),
            self._run_pipeline(advertisements_url, FeedKind.ADVERTISEMENT, errors),
        )
        log.bind(
            event="loader.completed",
            errors=len(errors),
            latency=round(time.perf_counter() - start, 4),
        ).debug("Feed load finished")
        return LoadResult(content=content, advertisements=advertisements, errors=errors)


__all__ = ["FeedLoader", "LoadResult"]
