"""One polling tick: fetch, flatten, format, dispatch."""

import logging

from pihole_statsd.core.dispatch import Dispatcher
from pihole_statsd.core.encoding.statsd import DEFAULT_TAG_PREFIX, encode_metrics
from pihole_statsd.core.errors import FetchError, MalformedResponse
from pihole_statsd.core.flatten import flatten_stats, parse_status
from pihole_statsd.core.ports import StatusSourcePort

logger = logging.getLogger(__name__)


class StatsPipeline:
    """Runs the fetch -> flatten -> format -> dispatch chain once per call.

    No state is kept between calls, so overlapping ticks are independent.
    """

    def __init__(
        self,
        source: StatusSourcePort,
        dispatcher: Dispatcher,
        tag_prefix: str = DEFAULT_TAG_PREFIX,
    ) -> None:
        self._source = source
        self._dispatcher = dispatcher
        self._tag_prefix = tag_prefix

    async def run_once(self) -> int:
        """Execute one tick.

        Fetch and parse failures abort the tick and are logged. Formatting
        errors are programming errors and propagate.

        Returns:
            Number of metric lines handed to the dispatcher.
        """
        try:
            body = await self._source.fetch()
            document = parse_status(body)
            metrics = flatten_stats(document)
        except (FetchError, MalformedResponse) as exc:
            logger.warning("Skipping tick: %s", exc)
            return 0

        lines = encode_metrics(metrics, self._tag_prefix)
        await self._dispatcher.dispatch(lines)
        return len(lines)

    async def __call__(self) -> None:
        await self.run_once()
