"""StatsD line encoder with dotted tags.

Tags are folded into the metric name rather than sent with the DogStatsD
``|#`` extension, so the aggregator must split them back out using the
configured prefix:

    dns_queries_today._t_pihole.top._t_location.pihole:1234|c
"""

import json
import math
from collections.abc import Iterable, Sequence

from pihole_statsd.core.models import Metric, MetricType, MetricValue, Tag
from pihole_statsd.core.tags import make_tag

DEFAULT_TAG_PREFIX = "_t_"

# Appended to every line; callers cannot remove it.
DEFAULT_TAG = make_tag("location", "pihole")


def _format_value(value: MetricValue) -> str:
    """Render a value the way it appears in the source JSON."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if not math.isfinite(value):
            return json.dumps(value)
        if value.is_integer():
            return str(int(value))
    if value is None or isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _format_tag(tag: Tag, prefix: str) -> str:
    return f"{prefix}{tag.name}.{_format_value(tag.value)}"


def format_metric(
    name: str,
    value: MetricValue,
    metric_type: MetricType | str,
    tags: Sequence[Tag] = (),
    prefix: str = DEFAULT_TAG_PREFIX,
) -> str:
    """Format one metric as a StatsD line.

    Args:
        name: Metric name.
        value: Metric value.
        metric_type: A MetricType, its wire code ("c") or its name ("counter").
        tags: Caller tags, rendered before the default location tag.
        prefix: String put in front of every tag name.

    Returns:
        The line, e.g. ``foo._t_pihole.top._t_location.pihole:5|c``.

    Raises:
        InvalidMetricType: If ``metric_type`` is not a recognized type.
    """
    resolved = MetricType.parse(metric_type)
    all_tags = (*tags, DEFAULT_TAG)
    rendered = ".".join(_format_tag(tag, prefix) for tag in all_tags)
    suffix = f".{rendered}" if rendered else ""
    return f"{name}{suffix}:{_format_value(value)}|{resolved.code}"


def encode_metrics(
    metrics: Iterable[Metric], prefix: str = DEFAULT_TAG_PREFIX
) -> list[str]:
    """Encode metrics to StatsD lines, preserving input order.

    Args:
        metrics: An iterable of Metric objects.
        prefix: Tag prefix passed to format_metric.

    Returns:
        One line per metric. Empty list if no metrics.
    """
    return [
        format_metric(metric.name, metric.value, metric.type, metric.tags, prefix)
        for metric in metrics
    ]
