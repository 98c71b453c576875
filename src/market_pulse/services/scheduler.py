"""Recurring refresh timer for the aggregator."""
import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Runs an initial load, then repeats the refresh every ``interval_ms``.

    At most one timer is pending at any time: changing the interval cancels
    the running timer task before a new one is created. Refreshes never
    overlap: the initial load and every timer tick share one lock.
    An interval of zero or less disables recurring refresh.
    """

    def __init__(self, refresh: Callable[[], Awaitable[object]], interval_ms: int) -> None:
        self._refresh = refresh
        self._interval_ms = interval_ms
        self._task: asyncio.Task | None = None
        self._lock = asyncio.Lock()

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def pending(self) -> bool:
        """True while a timer task is scheduled."""
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Load once now, then schedule the recurring timer."""
        await self._run_once()
        if not self.pending:  # set_interval may have run during the load
            self._schedule()

    def set_interval(self, interval_ms: int) -> None:
        """Replace the interval; the previous timer is cancelled first."""
        self._cancel()
        self._interval_ms = interval_ms
        self._schedule()

    async def stop(self) -> None:
        task = self._task
        self._cancel()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    def _cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _schedule(self) -> None:
        self._cancel()
        if self._interval_ms <= 0:
            logger.info("Recurring refresh disabled")
            return
        self._task = asyncio.create_task(self._loop(self._interval_ms / 1000))

    async def _loop(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            await self._run_once()

    async def _run_once(self) -> None:
        try:
            async with self._lock:
                await self._refresh()
        except Exception:  # pylint: disable=broad-except
            logger.exception("Refresh cycle failed")
