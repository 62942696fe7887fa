"""Fixed-interval background polling with an explicit lifecycle."""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Self

import structlog

logger = structlog.get_logger(__name__)


class Poller:
    """Runs ``tick`` every ``interval`` seconds on a cancellable asyncio task.

    The first tick runs immediately after ``start()``. A failing tick is
    logged and the loop keeps going; there is no backoff or jitter.
    """

    def __init__(self, name: str, interval: float, tick: Callable[[], Awaitable[None]]) -> None:
        if interval <= 0:
            raise ValueError("Poll interval must be positive")
        self.name = name
        self.interval = interval
        self._tick = tick
        self._task: asyncio.Task[None] | None = None
        self.tick_count = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start polling on the running event loop."""
        if self.running:
            raise RuntimeError(f"Poller '{self.name}' is already running")
        self._task = asyncio.create_task(self._run(), name=f"poller:{self.name}")
        logger.debug("poller_started", poller=self.name, interval=self.interval)

    async def stop(self) -> None:
        """Cancel the timer task and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.debug("poller_stopped", poller=self.name, ticks=self.tick_count)

    async def _run(self) -> None:
        while True:
            try:
                await self._tick()
            except Exception as e:
                logger.exception("poll_tick_failed", poller=self.name, error=str(e))
            self.tick_count += 1
            await asyncio.sleep(self.interval)

    async def __aenter__(self) -> Self:
        self.start()
        return self

    async def __aexit__(
        self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: TracebackType | None
    ) -> None:
        await self.stop()
