"""Response items and the two mutually exclusive response envelopes."""

from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field

from .feeds import AdvertisementItem, ContentItem


class DefaultAdvertisement(BaseModel):
    """Placeholder emitted once the advertisement feed is exhausted."""

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[str] = "default_advertisement"

    type: str

    def to_wire(self) -> Dict[str, Any]:
        return {"type": self.type}


ResponseItem = Union[ContentItem, AdvertisementItem, DefaultAdvertisement]


class ErrorRecord(BaseModel):
    """One ``{code, message}`` entry of the error envelope."""

    model_config = ConfigDict(frozen=True)

    code: int
    message: str


class ErrorEnvelope(BaseModel):
    error: List[ErrorRecord] = Field(min_length=1)

    def to_wire(self) -> Dict[str, Any]:
        return {"error": [record.model_dump(mode="json") for record in self.error]}


class SuccessEnvelope(BaseModel):
    """Combined content returned when both feeds were loaded."""

    model_config = ConfigDict(populate_by_name=True)

    http_status: int = Field(default=200, alias="httpStatus")
    content: List[ResponseItem] = Field(default_factory=list)

    def to_wire(self) -> Dict[str, Any]:
        # Each variant owns its field set; no shared schema is applied here.
        return {
            "httpStatus": self.http_status,
            "content": [item.to_wire() for item in self.content],
        }


__all__ = [
    "DefaultAdvertisement",
    "ErrorEnvelope",
    "ErrorRecord",
    "ResponseItem",
    "SuccessEnvelope",
]
