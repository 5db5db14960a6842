"""Merging of content and advertisement collections."""

from .interleaver import advertisement_for_slot, interleave

__all__ = ["advertisement_for_slot", "interleave"]
