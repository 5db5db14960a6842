"""Interleaving of content items with advertisements."""

from __future__ import annotations

from typing import List, Sequence

from feedmixer.contracts import (
    AdvertisementItem,
    ContentItem,
    DefaultAdvertisement,
    ResponseItem,
)


def advertisement_for_slot(
    advertisements: Sequence[AdvertisementItem],
    index: int,
    default_label: str,
) -> ResponseItem:
    """Return the advertisement at ``index`` or the default placeholder."""
    if 0 <= index < len(advertisements):
        return advertisements[index]
    return DefaultAdvertisement(type=default_label)


def interleave(
    content: Sequence[ContentItem],
    advertisements: Sequence[AdvertisementItem],
    frequency: int,
    default_label: str,
) -> List[ResponseItem]:
    """Insert one advertisement after every ``frequency`` content items.

    The k-th insertion (after content position k * frequency, 1-indexed) uses
    ``advertisements[k - 1]`` when it exists and the default placeholder
    otherwise. A trailing group shorter than ``frequency`` gets no
    advertisement, so the result holds ``len(content) // frequency``
    insertions.
    """
    if isinstance(frequency, bool) or not isinstance(frequency, int) or frequency < 1:
        raise ValueError(f"frequency must be a positive integer, got {frequency!r}")

    mixed: List[ResponseItem] = []
    for position, item in enumerate(content, start=1):
        mixed.append(item)
        if position % frequency == 0:
            slot = position // frequency - 1
            mixed.append(advertisement_for_slot(advertisements, slot, default_label))
    return mixed


__all__ = ["advertisement_for_slot", "interleave"]
