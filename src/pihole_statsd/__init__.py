"""Poll a Pi-hole status API and forward its counters to StatsD."""

from pihole_statsd.config import PiholeStatsdConfig
from pihole_statsd.core.encoding.statsd import encode_metrics, format_metric
from pihole_statsd.core.errors import (
    FetchError,
    InvalidMetricType,
    InvalidTagValue,
    MalformedResponse,
    PiholeStatsdError,
    SendError,
)
from pihole_statsd.core.flatten import flatten_stats, parse_status
from pihole_statsd.core.models import Metric, MetricType, Tag
from pihole_statsd.core.tags import make_tag

__all__ = [
    "FetchError",
    "InvalidMetricType",
    "InvalidTagValue",
    "MalformedResponse",
    "Metric",
    "MetricType",
    "PiholeStatsdConfig",
    "PiholeStatsdError",
    "SendError",
    "Tag",
    "encode_metrics",
    "flatten_stats",
    "format_metric",
    "make_tag",
    "parse_status",
]
