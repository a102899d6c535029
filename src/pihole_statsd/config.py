"""Static configuration supplied at startup."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from pihole_statsd.core.encoding.statsd import DEFAULT_TAG_PREFIX
from pihole_statsd.core.errors import ConfigError

DEFAULT_METRICS_PORT = 8125
DEFAULT_POLL_INTERVAL_MS = 1000
DEFAULT_LOG_LEVEL = "INFO"

ENV_PREFIX = "PIHOLE_STATSD_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class PiholeStatsdConfig:
    """Configuration for one exporter process.

    Attributes:
        api_host: Pi-hole host (``host`` or ``host:port``) serving the API.
        metrics_host: StatsD aggregator host.
        metrics_port: StatsD aggregator UDP port.
        tag_prefix: String put in front of every tag name.
        poll_interval_ms: Time between polls in milliseconds.
        debug: Write payloads to stdout instead of sending them.
        log_level: Root logging level name.
    """

    api_host: str
    metrics_host: str
    metrics_port: int = DEFAULT_METRICS_PORT
    tag_prefix: str = DEFAULT_TAG_PREFIX
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    debug: bool = False
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if not self.api_host:
            raise ConfigError("api_host is required")
        if not self.metrics_host and not self.debug:
            raise ConfigError("metrics_host is required unless debug is enabled")
        if not 0 < self.metrics_port < 65536:
            raise ConfigError(f"metrics_port out of range: {self.metrics_port}")
        if self.poll_interval_ms <= 0:
            raise ConfigError(
                f"poll_interval_ms must be positive, got {self.poll_interval_ms}"
            )

    @property
    def poll_interval_seconds(self) -> float:
        return self.poll_interval_ms / 1000

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None
    ) -> "PiholeStatsdConfig":
        """Build a configuration from ``PIHOLE_STATSD_*`` variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Raises:
            ConfigError: If a value is missing or cannot be parsed.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            return env.get(ENV_PREFIX + name)

        kwargs: dict[str, object] = {
            "api_host": get("API_HOST") or "",
            "metrics_host": get("METRICS_HOST") or "",
        }
        if (raw := get("METRICS_PORT")) is not None:
            kwargs["metrics_port"] = _parse_int("METRICS_PORT", raw)
        if (raw := get("TAG_PREFIX")) is not None:
            kwargs["tag_prefix"] = raw
        if (raw := get("POLL_INTERVAL_MS")) is not None:
            kwargs["poll_interval_ms"] = _parse_int("POLL_INTERVAL_MS", raw)
        if (raw := get("DEBUG")) is not None:
            kwargs["debug"] = _parse_bool("DEBUG", raw)
        if (raw := get("LOG_LEVEL")) is not None:
            kwargs["log_level"] = raw.upper()
        return cls(**kwargs)  # type: ignore[arg-type]
