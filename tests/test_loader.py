import asyncio

import httpx
import pytest

from feed_helpers import ADS_URL, CONTENT_URL, ad_item, build_transport, content_item, feed_payload
from feedmixer.collectors import FeedLoader, LoadResult


async def _load(routes) -> LoadResult:
    async with httpx.AsyncClient(transport=build_transport(routes)) as client:
        return await FeedLoader(client, timeout=1.0).load(CONTENT_URL, ADS_URL)


@pytest.mark.anyio
async def test_both_feeds_load(articles_bytes: bytes, ads_bytes: bytes) -> None:
    result = await _load({CONTENT_URL: articles_bytes, ADS_URL: ads_bytes})

    assert result.ok
    assert result.errors.is_empty()
    assert len(result.content_items) == 136
    assert len(result.advertisement_items) == 3


@pytest.mark.anyio
async def test_unreachable_feed_yields_single_503_naming_the_structure(
    articles_bytes: bytes,
) -> None:
    result = await _load({CONTENT_URL: articles_bytes})

    records = result.errors.records()
    assert len(records) == 1
    assert records[0].code == 503
    assert records[0].message.startswith(
        "Error of getting content for advertisement structure"
    )
    assert result.advertisements is None
    # The healthy pipeline still ran to completion.
    assert result.content is not None
    assert not result.ok


@pytest.mark.anyio
async def test_both_feeds_failing_report_two_errors() -> None:
    result = await _load({CONTENT_URL: b"<html>oops</html>"})

    messages = sorted(record.message for record in result.errors.records())
    assert len(messages) == 2
    assert messages[0].startswith("Error of getting content for advertisement structure")
    assert messages[1].startswith("Error of preparing structure content")
    assert "not a valid json" in messages[1]
    assert {record.code for record in result.errors.records()} == {503}


@pytest.mark.anyio
async def test_shape_mismatch_is_reported_as_preparing_error(articles_bytes: bytes) -> None:
    bad_ads = feed_payload([dict(ad_item(1), logoURL=["not", "a", "string"])])

    result = await _load({CONTENT_URL: articles_bytes, ADS_URL: bad_ads})

    (record,) = result.errors.records()
    assert record.code == 503
    assert record.message.startswith("Error of preparing structure advertisement")
    assert "does not match the expected shape" in record.message


@pytest.mark.anyio
async def test_feeds_are_fetched_concurrently() -> None:
    content_started = asyncio.Event()
    ads_started = asyncio.Event()

    async def content(request: httpx.Request) -> httpx.Response:
        content_started.set()
        await asyncio.wait_for(ads_started.wait(), timeout=1.0)
        return httpx.Response(200, content=feed_payload([content_item(1)]))

    async def ads(request: httpx.Request) -> httpx.Response:
        ads_started.set()
        await asyncio.wait_for(content_started.wait(), timeout=1.0)
        return httpx.Response(200, content=feed_payload([ad_item(1)]))

    result = await _load({CONTENT_URL: content, ADS_URL: ads})

    assert result.ok
    assert len(result.content_items) == 1
    assert len(result.advertisement_items) == 1


@pytest.mark.anyio
async def test_overflowing_score_fails_the_content_pipeline(ads_bytes: bytes) -> None:
    raw = feed_payload([content_item(1)]).replace(b"1.0", b"1e400", 1)

    result = await _load({CONTENT_URL: raw, ADS_URL: ads_bytes})

    (record,) = result.errors.records()
    assert record.code == 503
    assert record.message.startswith("Error of preparing structure content")
