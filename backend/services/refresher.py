"""Background timer that keeps the cache warm without incoming traffic."""

import asyncio
import logging

from services.injuries import InjuryFetcher

logger = logging.getLogger(__name__)


class PeriodicRefresher:
    """Calls the fetcher every `interval_seconds`, ignoring cache state.

    The first refresh fires one interval after start(). Runs until stop().
    """

    def __init__(self, fetcher: InjuryFetcher, interval_seconds: int):
        self._fetcher = fetcher
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh_once(self) -> bool:
        data = await self._fetcher.fetch()
        if data is None:
            logger.warning("Scheduled refresh failed, keeping previous cache entry")
            return False
        logger.info("Scheduled refresh stored fresh injury data")
        return True

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.refresh_once()
            except Exception:
                logger.exception("Scheduled refresh raised")

    def start(self) -> None:
        if self.running:
            return
        logger.info("Refreshing injury data every %ds", self.interval_seconds)
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
