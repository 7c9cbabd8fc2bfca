import asyncio
import contextlib
import logging
import signal
import sys
from datetime import datetime, timedelta

from infrastructure.cache.rate_cache import RateCache

logger = logging.getLogger(__name__)


class RateRefresher:
    """
    Background loop that keeps the rate cache fresh.

    Reads already trigger refreshes on demand; this loop covers quiet periods so
    the snapshot does not age just because nobody asked for a conversion.
    """
    def __init__(
            self,
            cache: RateCache,
            refresh_interval: timedelta = timedelta(hours=1),
            check_interval: timedelta = timedelta(seconds=60),
    ):
        """
        Args:
            cache: Cache whose snapshot is kept fresh
            refresh_interval: Age after which the snapshot is refreshed
            check_interval: Time between staleness checks
        """
        self.cache = cache
        self.refresh_interval = refresh_interval
        self.check_interval = check_interval
        self.is_running = False
        self.cycle_count = 0
        self._task: asyncio.Task | None = None

    async def run_cycle(self) -> bool | None:
        """
        Refresh if due. Returns the refresh outcome, or None when nothing was due.
        """
        self.cycle_count += 1
        task = self.cache.refresh_if_stale(self.refresh_interval)
        if task is None:
            logger.debug(f"Cycle #{self.cycle_count}: {self.cache.base_code} rates are fresh")
            return None

        cycle_start = datetime.now()
        succeeded = await task
        cycle_duration = (datetime.now() - cycle_start).total_seconds()

        logger.info(
            f"Cycle #{self.cycle_count} completed in {cycle_duration:.2f}s: "
            f"refresh {'succeeded' if succeeded else 'failed'}"
        )
        return succeeded

    async def run(self):
        """
        Main loop. Runs until stopped or cancelled.
        """
        self.is_running = True
        logger.info(
            f"Rate refresher started for {self.cache.base_code} "
            f"(refresh every {self.refresh_interval}, check every {self.check_interval})"
        )

        while self.is_running:
            try:
                await self.run_cycle()
                await asyncio.sleep(self.check_interval.total_seconds())

            except asyncio.CancelledError:
                logger.info("Rate refresher received cancellation signal")
                break
            except Exception as e:
                logger.error(f"Error in refresher cycle: {e}", exc_info=True)
                # Sleep and continue on error
                await asyncio.sleep(self.check_interval.total_seconds())

        self.is_running = False
        logger.info("Rate refresher stopped")

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self.run(), name="rate-refresher")
        return self._task

    async def stop(self):
        """Gracefully stop the loop"""
        logger.info("Stopping rate refresher...")
        self.is_running = False
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task


async def main():
    """Entry point for running the refresher as a standalone process."""
    from application.factory import build_conversion_service
    from config.settings import get_settings
    from infrastructure.monitoring.logger import configure_logging

    settings = get_settings()
    configure_logging(settings.LOG_DIRECTORY, console_level=settings.LOG_LEVEL)

    if not settings.provider_credential:
        logger.error(f"No API credential configured for provider {settings.RATE_PROVIDER}")
        sys.exit(1)

    logger.info("=" * 60)
    logger.info("RATE REFRESHER STARTING")
    logger.info("=" * 60)
    logger.info(f"Provider: {settings.RATE_PROVIDER}")
    logger.info(f"Base currency: {settings.BASE_CURRENCY}")
    logger.info(f"Refresh interval: {settings.REFRESH_INTERVAL}")
    logger.info(f"Snapshot persistence: {'redis' if settings.REDIS_URL else 'disabled'}")
    logger.info("=" * 60)

    service = build_conversion_service(settings)
    stop_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop_event.set)

    await service.start(check_interval=settings.REFRESH_CHECK_INTERVAL)
    try:
        await stop_event.wait()
    finally:
        await service.close()


if __name__ == "__main__":
    asyncio.run(main())
