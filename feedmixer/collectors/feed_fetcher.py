# feedmixer/collectors/feed_fetcher.py
"""Bounded-timeout retrieval of a remote JSON feed."""

import asyncio
import time
from typing import Tuple

import httpx

from feedmixer.errors import FetchError
from feedmixer.utils.logger import get_module_logger

DEFAULT_FETCH_TIMEOUT_SECONDS = 3.0

log = get_module_logger("collectors.feed_fetcher")


async def _drain(client: httpx.AsyncClient, url: str, timeout: float) -> Tuple[int, bytes]:
    async with client.stream("GET", url, timeout=timeout) as response:
        body = await response.aread()
        return response.status_code, body


async def fetch_feed(
    client: httpx.AsyncClient,
    url: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
) -> bytes:
    """GET ``url`` and return the fully drained response body.

    ``timeout`` bounds the whole exchange, body included. The status code is
    not checked: any response that arrives and can be read is returned as-is.
    The stream is closed on every exit path.

    Raises:
        FetchError: on connection failures, timeouts, invalid URLs or when the
            body cannot be read.
    """
    start = time.perf_counter()
    try:
        status_code, body = await asyncio.wait_for(_drain(client, url, timeout), timeout)
    except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
        log.bind(event="fetch.timeout", url=url, timeout=timeout).warning(
            f"Timed out fetching {url}"
        )
        raise FetchError(f"request to {url} timed out after {timeout:g}s") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        log.bind(event="fetch.failed", url=url, error=str(exc)).warning(
            f"Failed fetching {url}"
        )
        raise FetchError(f"request to {url} failed: {exc}") from exc

    latency = time.perf_counter() - start
    if not 200 <= status_code < 300:
        log.bind(event="fetch.unexpected_status", url=url, status_code=status_code).warning(
            f"Feed {url} answered with status {status_code}"
        )
    log.bind(
        event="fetch.completed",
        url=url,
        status_code=status_code,
        bytes=len(body),
        latency=round(latency, 4),
    ).debug(f"Fetched {url}")
    return body


__all__ = ["DEFAULT_FETCH_TIMEOUT_SECONDS", "fetch_feed"]
