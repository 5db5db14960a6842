"""HTTP surface: the single aggregation endpoint."""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
from fastapi import FastAPI, Request, Response

from config.version import __version__
from feedmixer.collectors import FeedLoader
from feedmixer.config_schema import Config
from feedmixer.utils.logger import get_module_logger

from .responses import compose_response

ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

log = get_module_logger("serving.api")


def create_app(config: Config, client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """Create a configured FastAPI application.

    When ``client`` is omitted an ``httpx.AsyncClient`` is opened on startup
    and closed on shutdown. An injected client is owned by the caller.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if client is not None:
            yield
            return
        async with httpx.AsyncClient(follow_redirects=True) as owned_client:
            app.state.http_client = owned_client
            yield

    app = FastAPI(title="FeedMixer", version=__version__, lifespan=lifespan)
    app.state.config = config
    app.state.http_client = client

    @app.api_route(config.server.request_path, methods=ALLOWED_METHODS)
    async def mixed_content(request: Request) -> Response:
        start = time.perf_counter()
        settings: Config = request.app.state.config
        loader = FeedLoader(request.app.state.http_client, settings.feeds.timeout_seconds)
        result = await loader.load(
            settings.feeds.content_url,
            settings.feeds.advertisements_url,
        )
        body = compose_response(
            result,
            settings.mixing.ads_frequency,
            settings.mixing.default_ad_label,
        )

        outcome = log.bind(
            event="request.completed",
            method=request.method,
            path=request.url.path,
            errors=len(result.errors),
            latency=round(time.perf_counter() - start, 4),
        )
        if result.errors.is_empty():
            outcome.info("Served mixed content")
        else:
            outcome.warning("Served error envelope")
        return Response(content=body, status_code=200, media_type="application/json")

    return app


__all__ = ["ALLOWED_METHODS", "create_app"]
