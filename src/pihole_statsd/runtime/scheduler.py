"""Fixed-interval scheduler for the polling pipeline."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

Tick = Callable[[], Awaitable[object]]


class PollScheduler:
    """Fires a tick immediately, then on every interval boundary.

    Ticks run as independent tasks: a slow or failing tick never delays or
    cancels the next one, and ticks may overlap. The scheduler owns its
    timer task, so each instance can be started and stopped on its own.

    Example:
        ```python
        scheduler = PollScheduler(pipeline, interval_seconds=1.0)
        await scheduler.run_forever()
        ```
    """

    def __init__(self, tick: Tick, interval_seconds: float = 1.0) -> None:
        """Initialize the scheduler.

        Args:
            tick: Coroutine function run on every tick.
            interval_seconds: Time between tick starts. Must be positive.
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._tick = tick
        self._interval = interval_seconds
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[None]] = set()
        self._stopped: asyncio.Event | None = None
        self.ticks_started = 0

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def in_flight(self) -> int:
        """Number of ticks currently running."""
        return len(self._in_flight)

    def start(self) -> None:
        """Fire the first tick and arm the repeating timer.

        Must be called from inside a running event loop.
        """
        if self.is_running:
            raise RuntimeError("scheduler is already running")
        self._stopped = asyncio.Event()
        self._fire()
        self._timer = asyncio.create_task(self._run_timer())

    async def stop(self) -> None:
        """Cancel the timer and every in-flight tick."""
        tasks: list[asyncio.Task[None]] = list(self._in_flight)
        if self._timer is not None:
            tasks.append(self._timer)
            self._timer = None
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._in_flight.clear()
        if self._stopped is not None:
            self._stopped.set()

    async def run_forever(self) -> None:
        """Start the scheduler and wait until stop() is called."""
        self.start()
        assert self._stopped is not None
        try:
            await self._stopped.wait()
        finally:
            await self.stop()

    async def __aenter__(self) -> "PollScheduler":
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    def _fire(self) -> None:
        task = asyncio.create_task(self._run_tick())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run_tick(self) -> None:
        self.ticks_started += 1
        number = self.ticks_started
        try:
            await self._tick()
        except Exception:
            logger.exception("Tick %d failed", number)

    async def _run_timer(self) -> None:
        loop = asyncio.get_running_loop()
        started_at = loop.time()
        boundary = 0
        while True:
            boundary += 1
            delay = started_at + boundary * self._interval - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)
            else:
                # The loop was blocked past one or more boundaries; fire once.
                boundary = int((loop.time() - started_at) // self._interval)
            self._fire()
