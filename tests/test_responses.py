import json

import pytest

from feed_helpers import ad_item, content_item
from feedmixer.collectors import ErrorAggregator, LoadResult
from feedmixer.contracts import (
    AdvertisementFeed,
    AdvertisementItem,
    ContentFeed,
    ContentItem,
    DefaultAdvertisement,
    ErrorEnvelope,
    SuccessEnvelope,
)
from feedmixer.serving import build_envelope, compose_response, render_envelope
from feedmixer.serving import responses


def _result(content_count: int, ads_count: int) -> LoadResult:
    content = ContentFeed.model_validate(
        {"httpStatus": 200, "response": {"items": [content_item(i) for i in range(content_count)]}}
    )
    ads = AdvertisementFeed.model_validate(
        {"httpStatus": 200, "response": {"items": [ad_item(i) for i in range(ads_count)]}}
    )
    return LoadResult(content=content, advertisements=ads)


def test_errors_take_precedence_over_content() -> None:
    errors = ErrorAggregator()
    errors.add(503, "Error of getting content for content structure: refused")
    items = [ContentItem.model_validate(content_item(1))]

    envelope = build_envelope(errors, items)

    assert isinstance(envelope, ErrorEnvelope)
    assert envelope.to_wire() == {
        "error": [{"code": 503, "message": "Error of getting content for content structure: refused"}]
    }


def test_success_envelope_keeps_each_variant_field_set() -> None:
    items = [
        ContentItem.model_validate(content_item(1)),
        AdvertisementItem.model_validate(ad_item(1)),
        DefaultAdvertisement(type="Ads"),
    ]

    envelope = build_envelope(ErrorAggregator(), items)

    assert isinstance(envelope, SuccessEnvelope)
    wire = envelope.to_wire()
    assert wire["httpStatus"] == 200
    assert wire["content"] == [content_item(1), ad_item(1), {"type": "Ads"}]


def test_render_is_compact_json() -> None:
    body = render_envelope(build_envelope(ErrorAggregator(), [DefaultAdvertisement(type="Ads")]))

    assert body == b'{"httpStatus":200,"content":[{"type":"Ads"}]}'


def test_compose_response_interleaves_clean_loads() -> None:
    payload = json.loads(compose_response(_result(4, 1), 2, "Ads"))

    assert set(payload) == {"httpStatus", "content"}
    assert [item["type"] for item in payload["content"]] == [
        "Article",
        "Article",
        "Ads",
        "Article",
        "Article",
        "Ads",
    ]
    assert payload["content"][2]["harvesterId"] == "ad-0"
    assert payload["content"][5] == {"type": "Ads"}


def test_compose_response_skips_merge_when_errors_exist(monkeypatch: pytest.MonkeyPatch) -> None:
    result = _result(4, 1)
    result.errors.add(503, "Error of preparing structure advertisement: bad")

    def fail(*args, **kwargs):  # pragma: no cover - must not be called
        raise AssertionError("merge stage should not run")

    monkeypatch.setattr(responses, "interleave", fail)

    payload = json.loads(compose_response(result, 2, "Ads"))

    assert payload == {"error": [{"code": 503, "message": "Error of preparing structure advertisement: bad"}]}


def test_merge_failure_is_reported_as_502(monkeypatch: pytest.MonkeyPatch) -> None:
    def explode(*args, **kwargs):
        raise ValueError("slot table corrupted")

    monkeypatch.setattr(responses, "interleave", explode)

    payload = json.loads(compose_response(_result(4, 1), 2, "Ads"))

    assert "content" not in payload
    assert payload["error"] == [
        {"code": 502, "message": "Error while combining content with ads: slot table corrupted"}
    ]
