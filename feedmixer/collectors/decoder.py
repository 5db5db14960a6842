"""Validation and decoding of raw feed bodies into typed collections."""

from __future__ import annotations

import json
from enum import Enum
from typing import Type, Union

from pydantic import ValidationError

from feedmixer.contracts import AdvertisementFeed, ContentFeed
from feedmixer.errors import DecodeError, InvalidJSONError

Feed = Union[ContentFeed, AdvertisementFeed]


class FeedKind(Enum):
    """The two feed shapes the service knows how to decode."""

    CONTENT = "content"
    ADVERTISEMENT = "advertisement"

    @property
    def label(self) -> str:
        return self.value

    @property
    def model(self) -> Type[Feed]:
        return ContentFeed if self is FeedKind.CONTENT else AdvertisementFeed


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def _summarize(error: ValidationError) -> str:
    parts = []
    for record in error.errors():
        location = ".".join(str(part) for part in record.get("loc", ())) or "<root>"
        parts.append(f"{location}: {record.get('msg', 'invalid value')}")
    return "; ".join(parts)


def decode_feed(raw: bytes, kind: FeedKind) -> Feed:
    """Decode ``raw`` into the feed model selected by ``kind``.

    Raises:
        InvalidJSONError: the bytes are not syntactically valid JSON.
        DecodeError: the JSON does not match the feed shape. The whole
            collection is rejected; nothing is partially decoded.
    """
    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, TypeError) as exc:
        raise InvalidJSONError("Json string is not a valid json") from exc

    try:
        return kind.model.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(
            f"{kind.label} feed does not match the expected shape: {_summarize(exc)}"
        ) from exc


__all__ = ["Feed", "FeedKind", "decode_feed"]
