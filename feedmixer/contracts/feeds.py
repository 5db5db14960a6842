"""Contracts for the two remote feeds consumed by the service."""

from __future__ import annotations

from typing import Any, ClassVar, Dict, List

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationInfo,
    field_validator,
)


class FeedModel(BaseModel):
    """Base model for feed payloads.

    Absent keys and JSON ``null`` fall back to the field's zero value, unknown
    keys are ignored, and values of the wrong JSON type are rejected.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_zero_value(cls, value: Any, info: ValidationInfo) -> Any:
        if value is not None:
            return value
        field = cls.model_fields[info.field_name]
        return field.get_default(call_default_factory=True)

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON-ready mapping using the feed's own field names."""

        return self.model_dump(mode="json", by_alias=True)


class ContentItem(FeedModel):
    """Single item of the content feed."""

    kind: ClassVar[str] = "content"

    type: StrictStr = ""
    harvester_id: StrictStr = Field(default="", alias="harvesterId")
    relevance_score: StrictFloat = Field(default=0.0, alias="cerebro-score", allow_inf_nan=False)
    url: StrictStr = ""
    title: StrictStr = ""
    clean_image: StrictStr = Field(default="", alias="cleanImage")


class AdvertisementItem(FeedModel):
    """Single item of the advertisement feed."""

    kind: ClassVar[str] = "advertisement"

    type: StrictStr = ""
    harvester_id: StrictStr = Field(default="", alias="harvesterId")
    commercial_partner: StrictStr = Field(default="", alias="commercialPartner")
    logo_url: StrictStr = Field(default="", alias="logoURL")
    relevance_score: StrictFloat = Field(default=0.0, alias="cerebro-score", allow_inf_nan=False)
    url: StrictStr = ""
    title: StrictStr = ""
    clean_image: StrictStr = Field(default="", alias="cleanImage")


class FeedItems(FeedModel):
    """Base for the ``response`` object; a ``null`` entry in ``items`` is an empty item."""

    @field_validator("items", mode="before", check_fields=False)
    @classmethod
    def _null_items_to_empty(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{} if item is None else item for item in value]
        return value


class ContentItems(FeedItems):
    items: List[ContentItem] = Field(default_factory=list)


class AdvertisementItems(FeedItems):
    items: List[AdvertisementItem] = Field(default_factory=list)


class ContentFeed(FeedModel):
    """Envelope returned by the content feed: ``{httpStatus, response: {items}}``."""

    http_status: StrictInt = Field(default=0, alias="httpStatus")
    response: ContentItems = Field(default_factory=ContentItems)

    @property
    def items(self) -> List[ContentItem]:
        return self.response.items


class AdvertisementFeed(FeedModel):
    """Envelope returned by the advertisement feed."""

    http_status: StrictInt = Field(default=0, alias="httpStatus")
    response: AdvertisementItems = Field(default_factory=AdvertisementItems)

    @property
    def items(self) -> List[AdvertisementItem]:
        return self.response.items


__all__ = [
    "AdvertisementFeed",
    "AdvertisementItem",
    "AdvertisementItems",
    "ContentFeed",
    "ContentItem",
    "ContentItems",
    "FeedItems",
    "FeedModel",
]
