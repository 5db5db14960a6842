"""Error kinds raised by the feed pipelines and the merge stage."""

from __future__ import annotations


class FeedMixerError(Exception):
    """Base class for request-scoped failures reported in the error envelope."""

    code: int = 500

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code

    @property
    def message(self) -> str:
        return str(self)


class FetchError(FeedMixerError):
    """A feed could not be reached or its body could not be read."""

    code = 503


class InvalidJSONError(FeedMixerError):
    """A feed answered with bytes that are not syntactically valid JSON."""

    code = 503


class DecodeError(FeedMixerError):
    """A feed answered with valid JSON that does not match the expected shape."""

    code = 503


class MergeError(FeedMixerError):
    """Combining content with advertisements failed."""

    code = 502


__all__ = [
    "DecodeError",
    "FeedMixerError",
    "FetchError",
    "InvalidJSONError",
    "MergeError",
]
