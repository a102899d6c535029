"""Exception hierarchy for the polling pipeline."""

from typing import Any


class PiholeStatsdError(Exception):
    """Base class for all pihole-statsd errors."""


class FetchError(PiholeStatsdError):
    """The status endpoint could not be reached or answered with non-2xx."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class MalformedResponse(PiholeStatsdError):
    """The status body is not a JSON object of the expected shape."""


class InvalidMetricType(PiholeStatsdError, ValueError):
    """A metric type outside counter/set/gauge/timer was requested."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"{value!r} is not a statsd metric type "
            "(one of 'c', 's', 'g', 'ms' or counter, set, gauge, timer)"
        )
        self.value = value


class InvalidTagValue(PiholeStatsdError, TypeError):
    """A tag name or value is neither a string nor a number."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(
            f"Tag {field} must be a string or a number, got {type(value).__name__}"
        )
        self.field = field
        self.value = value


class SendError(PiholeStatsdError):
    """Writing a payload to the metrics transport failed."""


class ConfigError(PiholeStatsdError):
    """Static configuration is missing or invalid."""
