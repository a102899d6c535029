"""Core domain models for metric lines."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pihole_statsd.core.errors import InvalidMetricType

TagValue = str | int | float
# Any decoded JSON value; the encoder renders non-scalars as compact JSON.
MetricValue = int | float | str | bool | None | list[Any] | dict[str, Any]


@dataclass(frozen=True)
class Tag:
    """A name/value annotation attached to a metric line.

    Attributes:
        name: Tag name, already escaped.
        value: Tag value, already escaped if it is a string.
    """

    name: str
    value: TagValue


class MetricType(Enum):
    """StatsD metric semantics, valued by their wire code."""

    COUNTER = "c"
    SET = "s"
    GAUGE = "g"
    TIMER = "ms"

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: object) -> "MetricType":
        """Resolve a MetricType from a member, a wire code or a type name.

        Raises:
            InvalidMetricType: If ``value`` names no known metric type.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if value == member.value or value == member.name.lower():
                    return member
        raise InvalidMetricType(value)


@dataclass(frozen=True)
class Metric:
    """A single metric ready to be formatted.

    Attributes:
        name: Metric name (e.g., dns_queries_today).
        value: The metric value as reported by the status API.
        type: StatsD metric type.
        tags: Caller tags, in render order.
    """

    name: str
    value: MetricValue
    type: MetricType = MetricType.COUNTER
    tags: tuple[Tag, ...] = field(default_factory=tuple)
