import asyncio
from unittest.mock import MagicMock

import pytest

from shortclient.ticker import AgeRefreshTicker


class FakeSleep:
    """Sleep that yields to the loop and records requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


async def run_until(predicate, limit: int = 1000) -> None:
    for _ in range(limit):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError('condition never met')


@pytest.mark.parametrize('interval', [0, -1])
def test_invalid_interval(interval):
    with pytest.raises(ValueError, match='Interval must be positive'):
        AgeRefreshTicker(MagicMock(), interval=interval)


@pytest.mark.asyncio
async def test_renders_on_every_tick():
    render = MagicMock()
    sleep = FakeSleep()
    ticker = AgeRefreshTicker(render, interval=60.0, sleep=sleep).start()

    await run_until(lambda: ticker.ticks >= 3)
    await ticker.stop()

    assert render.call_count == ticker.ticks
    assert set(sleep.delays) == {60.0}


@pytest.mark.asyncio
async def test_no_render_before_first_interval():
    render = MagicMock()
    gate = asyncio.Event()

    async def sleep(_):
        await gate.wait()

    ticker = AgeRefreshTicker(render, sleep=sleep).start()
    await asyncio.sleep(0)

    assert ticker.running
    render.assert_not_called()
    await ticker.stop()


@pytest.mark.asyncio
async def test_stop_cancels_pending_tick():
    render = MagicMock()
    ticker = AgeRefreshTicker(render, interval=3600)
    ticker.start()
    await asyncio.sleep(0)

    await ticker.stop()

    assert not ticker.running
    render.assert_not_called()


@pytest.mark.asyncio
async def test_stop_is_idempotent():
    ticker = AgeRefreshTicker(MagicMock())

    await ticker.stop()
    ticker.start()
    await ticker.stop()
    await ticker.stop()

    assert not ticker.running


@pytest.mark.asyncio
async def test_start_twice_keeps_one_task():
    ticker = AgeRefreshTicker(MagicMock(), sleep=FakeSleep())

    ticker.start()
    task = ticker._task
    ticker.start()

    assert ticker._task is task
    await ticker.stop()


@pytest.mark.asyncio
async def test_render_errors_do_not_stop_the_loop():
    render = MagicMock(side_effect=[RuntimeError('boom'), None, None])
    ticker = AgeRefreshTicker(render, sleep=FakeSleep()).start()

    await run_until(lambda: render.call_count >= 3)
    await ticker.stop()

    assert ticker.ticks >= 3


@pytest.mark.asyncio
async def test_context_manager():
    render = MagicMock()

    async with AgeRefreshTicker(render, sleep=FakeSleep()) as ticker:
        assert ticker.running
        await run_until(lambda: ticker.ticks >= 1)

    assert not ticker.running


@pytest.mark.asyncio
async def test_stop_after_loop_died(caplog):
    """Ensure teardown completes when the loop already failed on its own."""

    async def broken_sleep(_):
        raise RuntimeError('clock gone')

    ticker = AgeRefreshTicker(MagicMock(), sleep=broken_sleep).start()
    await run_until(lambda: not ticker.running)

    await ticker.stop()

    assert not ticker.running
    assert 'Age refresh ticker failed.' in caplog.messages
