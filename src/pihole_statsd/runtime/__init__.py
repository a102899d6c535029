"""Runtime components that drive the polling pipeline."""

from pihole_statsd.runtime.scheduler import PollScheduler

__all__ = ["PollScheduler"]
