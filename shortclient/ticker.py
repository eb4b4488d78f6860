"""Periodic age label refresh

Age labels ('3 minutes ago') go stale while the history is on screen.
AgeRefreshTicker re-renders them on a fixed cadence as a cancellable asyncio
task. Ticks only call `render()`: they never mutate the history collection.

The default cadence is 60 seconds, the resolution of the finest label unit.

Example:
    >>> async with AgeRefreshTicker(lambda: print(controller.history_lines())):
    ...     await asyncio.sleep(300)  # labels re-rendered every minute
    >>> # leaving the block cancels the scheduled tick
"""

import asyncio
import logging

from shortclient.constants import Defaults
from shortclient.types import Render, Sleep


logger = logging.getLogger(__name__)


class AgeRefreshTicker:
    """Best-effort repeating render timer

    Attributes:
        render (Render):
            Callback invoked on every tick.
        interval (float):
            Seconds between ticks. Ticks are not guaranteed to fire at an exact cadence.
        ticks (int):
            Number of completed ticks.

    Methods:
        start() -> AgeRefreshTicker:
            Schedule the repeating task on the running loop (no-op if already running).
        stop() -> None:
            Cancel the task and wait for it to finish.
    """

    def __init__(self, render: Render, interval: float = Defaults.REFRESH_INTERVAL_SECONDS, sleep: Sleep = asyncio.sleep):
        if interval <= 0:
            raise ValueError(f'Interval must be positive (given value: {interval}).')

        self.render = render
        self.interval = interval
        self.ticks = 0
        self._sleep = sleep
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> 'AgeRefreshTicker':
        if not self.running:
            self._task = asyncio.get_running_loop().create_task(self._run(), name='age-refresh-ticker')
            logger.debug('Started age refresh ticker.', extra={'interval': self.interval})
        return self

    async def stop(self) -> None:
        if self._task is None:
            return

        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception:
            # The loop died on its own, e.g. sleep() raised
            logger.exception('Age refresh ticker failed.')
        logger.debug('Stopped age refresh ticker.', extra={'ticks': self.ticks})

    async def _run(self) -> None:
        while True:
            await self._sleep(self.interval)
            try:
                self.render()
            except Exception:
                # A broken frame must not kill the refresh loop
                logger.exception('Age refresh render failed.')
            self.ticks += 1

    async def __aenter__(self) -> 'AgeRefreshTicker':
        return self.start()

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
