"""Construction and serialization of the success and error envelopes."""

from __future__ import annotations

import json
from typing import Optional, Sequence, Union

from feedmixer.collectors import ErrorAggregator, LoadResult
from feedmixer.contracts import ErrorEnvelope, ResponseItem, SuccessEnvelope
from feedmixer.errors import MergeError
from feedmixer.mixing import interleave

Envelope = Union[SuccessEnvelope, ErrorEnvelope]


def build_envelope(
    errors: ErrorAggregator, items: Optional[Sequence[ResponseItem]]
) -> Envelope:
    """Pick the error envelope whenever any error was recorded.

    Errors take total precedence: content is dropped even if it was built.
    """
    if not errors.is_empty():
        return ErrorEnvelope(error=errors.records())
    return SuccessEnvelope(http_status=200, content=list(items or []))


def render_envelope(envelope: Envelope) -> bytes:
    """Serialize ``envelope`` to compact strict JSON."""
    return json.dumps(
        envelope.to_wire(),
        ensure_ascii=False,
        allow_nan=False,
        separators=(",", ":"),
    ).encode("utf-8")


def compose_response(result: LoadResult, frequency: int, default_label: str) -> bytes:
    """Run the merge stage for a finished load and return the response body.

    The merge stage only runs when both feeds loaded cleanly. A failure while
    interleaving or serializing is recorded as a 502 ``MergeError`` and the
    error envelope is returned instead.
    """
    errors = result.errors
    if not errors.is_empty():
        return render_envelope(build_envelope(errors, None))

    try:
        items = interleave(
            result.content_items,
            result.advertisement_items,
            frequency,
            default_label,
        )
        return render_envelope(build_envelope(errors, items))
    except (ValueError, TypeError) as exc:
        errors.add_error(MergeError(f"Error while combining content with ads: {exc}"))
        return render_envelope(build_envelope(errors, None))


__all__ = ["Envelope", "build_envelope", "compose_response", "render_envelope"]
