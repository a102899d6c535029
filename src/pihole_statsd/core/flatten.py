"""Turn a Pi-hole status document into a flat list of metrics."""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pihole_statsd.core.errors import MalformedResponse
from pihole_statsd.core.models import Metric, MetricType
from pihole_statsd.core.tags import make_tag

logger = logging.getLogger(__name__)

EXCLUDED_KEYS = frozenset(
    {
        "status",
        "clients_ever_seen",
        "unique_clients",
        "unique_domains",
        "FTLnotrunning",
    }
)

GRAVITY_KEY = "gravity_last_updated"

# Gravity sub-keys that never become their own metric
_GRAVITY_SPECIAL_KEYS = frozenset({"relative", "file_exists", "absolute"})

MINUTES_PER_DAY = 24 * 60
MINUTES_PER_HOUR = 60


def parse_status(body: str | bytes) -> dict[str, Any]:
    """Decode a status response body.

    Args:
        body: Raw response body.

    Returns:
        The decoded top-level JSON object.

    Raises:
        MalformedResponse: If the body is not JSON or not a JSON object.
    """
    try:
        document = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedResponse(f"Status body is not valid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise MalformedResponse(
            f"Status body must be a JSON object, got {type(document).__name__}"
        )
    return document


def _relative_minutes(relative: Any) -> int | float | None:
    """Gravity age in minutes, or None if ``relative`` is unusable."""
    if not isinstance(relative, Mapping):
        logger.warning(
            "Skipping last_updated: %s.relative must be an object, got %s",
            GRAVITY_KEY,
            type(relative).__name__,
        )
        return None
    parts = [relative.get(unit, 0) for unit in ("days", "hours", "minutes")]
    if not all(
        isinstance(part, (int, float)) and not isinstance(part, bool) for part in parts
    ):
        logger.warning(
            "Skipping last_updated: %s.relative holds non-numeric fields: %r",
            GRAVITY_KEY,
            dict(relative),
        )
        return None
    days, hours, minutes = parts
    return days * MINUTES_PER_DAY + hours * MINUTES_PER_HOUR + minutes


def _flatten_gravity(gravity: Any) -> list[Metric]:
    if not isinstance(gravity, Mapping):
        logger.warning(
            "Ignoring %s: expected an object, got %s",
            GRAVITY_KEY,
            type(gravity).__name__,
        )
        return []

    tags = (make_tag("pihole", "grav"),)
    metrics: list[Metric] = []
    for key, value in gravity.items():
        if key == "relative":
            total = _relative_minutes(value)
            if total is not None:
                metrics.append(Metric("last_updated", total, MetricType.COUNTER, tags))
        elif key not in _GRAVITY_SPECIAL_KEYS:
            metrics.append(Metric(key, value, MetricType.COUNTER, tags))
    return metrics


def flatten_stats(document: Mapping[str, Any]) -> list[Metric]:
    """Flatten a status document into counter metrics.

    Excluded keys are skipped. The gravity sub-document is unwrapped one
    level, with its ``relative`` age collapsed into a single
    ``last_updated`` metric in minutes. Every other top-level value is
    forwarded as-is and tagged ``pihole=top``. An unusable gravity
    sub-document or age is logged and skipped; the rest of the document
    is still flattened.

    Args:
        document: Decoded status document. It is not modified.

    Returns:
        Metrics in document iteration order.
    """
    top_tags = (make_tag("pihole", "top"),)
    metrics: list[Metric] = []
    for key, value in document.items():
        if key in EXCLUDED_KEYS:
            continue
        if key == GRAVITY_KEY:
            metrics.extend(_flatten_gravity(value))
        else:
            metrics.append(Metric(key, value, MetricType.COUNTER, top_tags))
    return metrics
