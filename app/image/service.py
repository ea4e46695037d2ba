"""Translation helpers for upstream image-generation outcomes.

Role in pipeline:
    - Turns a JSON error document from the upstream into a caller-facing
      message, including cold-start retry guidance.
    - Maps that message to an HTTP status code.
    - Encodes binary image content for JSON transport.

Error handling strategy:
    - Parsing failures never propagate; a generic message is used instead.

Determinism:
    All functions are pure and deterministic for identical inputs.
"""

import base64
import json
import math
import numbers

from app.image.provider_config import GENERIC_UPSTREAM_ERROR

LOADING_MARKER = "loading"


def _loading_hint(estimated_time) -> str:
    return (
        f" Model may be loading (estimated time: {estimated_time:.1f}s)."
        " Try again shortly."
    )


def describe_upstream_error(text: str) -> str:
    """Build a caller-facing message from an upstream JSON error body.

    Args:
        text: Raw response text declared as JSON by the upstream.

    Returns:
        The upstream `error` field (or the generic message), followed by a
        loading notice when `estimated_time` is a non-zero number.

    Edge cases:
        - Invalid JSON or a non-object document -> generic message.
        - Non-string `error` values are stringified.
        - Zero, NaN, boolean or non-numeric `estimated_time` is ignored.
    """
    try:
        payload = json.loads(text)
    except (TypeError, ValueError):
        return GENERIC_UPSTREAM_ERROR

    if not isinstance(payload, dict):
        return GENERIC_UPSTREAM_ERROR

    error = payload.get("error")
    message = str(error) if error else GENERIC_UPSTREAM_ERROR

    estimated_time = payload.get("estimated_time")
    if (
        isinstance(estimated_time, numbers.Real)
        and not isinstance(estimated_time, bool)
        and estimated_time
        and not math.isnan(estimated_time)
    ):
        message += _loading_hint(estimated_time)

    return message


def status_for_upstream_error(message: str) -> int:
    """Return 503 for cold-loading errors, 500 for everything else."""
    return 503 if LOADING_MARKER in message else 500


def encode_image(content: bytes) -> str:
    """Encode binary image content as base64 text."""
    return base64.b64encode(content).decode("ascii")
