import asyncio

import pytest

from market_pulse.services import RefreshScheduler


class Counter:
    def __init__(self, fail=False):
        self.calls = 0
        self.fail = fail

    async def __call__(self):
        self.calls += 1
        if self.fail:
            raise RuntimeError("refresh failed")


def _other_tasks():
    current = asyncio.current_task()
    return [t for t in asyncio.all_tasks() if t is not current and not t.done()]


@pytest.mark.asyncio
async def test_start_loads_immediately_then_repeats():
    refresh = Counter()
    scheduler = RefreshScheduler(refresh, interval_ms=10)

    await scheduler.start()
    assert refresh.calls == 1
    assert scheduler.pending

    await asyncio.sleep(0.06)
    await scheduler.stop()

    assert refresh.calls >= 3
    assert not scheduler.pending


@pytest.mark.asyncio
async def test_interval_change_leaves_one_timer():
    scheduler = RefreshScheduler(Counter(), interval_ms=60_000)
    await scheduler.start()
    first = scheduler._task

    scheduler.set_interval(30_000)
    scheduler.set_interval(15_000)
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    assert first.cancelled()
    assert len(_other_tasks()) == 1
    assert scheduler.interval_ms == 15_000
    await scheduler.stop()


@pytest.mark.asyncio
@pytest.mark.parametrize("interval", [0, -5])
async def test_non_positive_interval_disables_timer(interval):
    refresh = Counter()
    scheduler = RefreshScheduler(refresh, interval_ms=interval)

    await scheduler.start()

    assert refresh.calls == 1
    assert not scheduler.pending
    assert _other_tasks() == []


@pytest.mark.asyncio
async def test_disabling_cancels_running_timer():
    scheduler = RefreshScheduler(Counter(), interval_ms=60_000)
    await scheduler.start()

    scheduler.set_interval(0)

    assert not scheduler.pending


@pytest.mark.asyncio
async def test_failed_refresh_keeps_timer_running():
    refresh = Counter(fail=True)
    scheduler = RefreshScheduler(refresh, interval_ms=10)

    await scheduler.start()
    await asyncio.sleep(0.05)
    await scheduler.stop()

    assert refresh.calls >= 2


@pytest.mark.asyncio
async def test_new_interval_takes_effect():
    refresh = Counter()
    scheduler = RefreshScheduler(refresh, interval_ms=60_000)
    await scheduler.start()

    scheduler.set_interval(20)
    await asyncio.sleep(0.01)
    assert refresh.calls == 1

    await asyncio.sleep(0.09)
    await scheduler.stop()
    assert refresh.calls >= 3


class GatedRefresh:
    """Refresh whose first call blocks until released."""

    def __init__(self):
        self.gate = asyncio.Event()
        self.calls = 0
        self.running = 0
        self.max_running = 0

    async def __call__(self):
        self.calls += 1
        self.running += 1
        self.max_running = max(self.max_running, self.running)
        try:
            if self.calls == 1:
                await self.gate.wait()
        finally:
            self.running -= 1


@pytest.mark.asyncio
async def test_interval_change_during_initial_load():
    refresh = GatedRefresh()
    scheduler = RefreshScheduler(refresh, interval_ms=60_000)

    start = asyncio.create_task(scheduler.start())
    await asyncio.sleep(0)
    scheduler.set_interval(20)
    await asyncio.sleep(0.05)
    refresh.gate.set()
    await start

    assert len(_other_tasks()) == 1
    assert scheduler.interval_ms == 20
    assert refresh.max_running == 1

    await asyncio.sleep(0.06)
    await scheduler.stop()

    assert refresh.calls >= 2
    assert _other_tasks() == []
