import asyncio
import contextlib
import logging
import time
from datetime import datetime, timedelta
from typing import Protocol

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from application.utils.time import Clock, utc_now
from domain.exceptions.currency import CacheError, NetworkError, RateRefreshError
from domain.models.currency import CacheState, RateSnapshot
from infrastructure.monitoring.logger import EventLogger
from infrastructure.providers.base import ExchangeRateProvider

logger = logging.getLogger(__name__)


class SnapshotStore(Protocol):
    async def get_snapshot(self, base_code: str) -> RateSnapshot | None: ...

    async def set_snapshot(self, snapshot: RateSnapshot) -> None: ...

    async def close(self) -> None: ...


class RateCache:
    """
    Holds the current rate snapshot and coordinates refreshes.

    Readers get whatever snapshot reference is installed and never wait on the
    network. At most one refresh task runs at a time; a failed refresh keeps the
    previous snapshot and is reported to the event logger instead of the reader.

    The check-and-schedule in :meth:`refresh_if_stale` and :meth:`force_refresh`
    contains no await, so it is atomic with respect to other coroutines on the
    same event loop.
    """

    def __init__(
        self,
        provider: ExchangeRateProvider,
        base_code: str = "USD",
        store: SnapshotStore | None = None,
        clock: Clock = utc_now,
        retry_attempts: int = 1,
        retry_max_wait: timedelta = timedelta(seconds=10),
        failure_cooldown: timedelta = timedelta(0),
        events: EventLogger | None = None,
    ):
        self.provider = provider
        self.base_code = base_code
        self.store = store
        self.retry_attempts = retry_attempts
        self.retry_max_wait = retry_max_wait
        self.failure_cooldown = failure_cooldown
        self._clock = clock
        self._events = events or EventLogger()

        self._snapshot: RateSnapshot | None = None
        self._last_attempt_at: datetime | None = None
        self._last_success_at: datetime | None = None
        self._last_failure_at: datetime | None = None
        self._last_error: Exception | None = None
        self._refresh_task: asyncio.Task[bool] | None = None

    def current_snapshot(self) -> RateSnapshot | None:
        return self._snapshot

    @property
    def last_success_at(self) -> datetime | None:
        return self._last_success_at

    @property
    def last_attempt_at(self) -> datetime | None:
        return self._last_attempt_at

    @property
    def last_failure_at(self) -> datetime | None:
        return self._last_failure_at

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    @property
    def refresh_in_progress(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    @property
    def state(self) -> CacheState:
        return CacheState(
            snapshot=self._snapshot,
            last_attempt_at=self._last_attempt_at,
            last_success_at=self._last_success_at,
            refresh_in_progress=self.refresh_in_progress,
            last_error=self._last_error,
        )

    def age(self) -> timedelta | None:
        if self._last_success_at is None:
            return None
        return self._clock() - self._last_success_at

    def is_stale(self, ttl: timedelta) -> bool:
        age = self.age()
        return self._snapshot is None or age is None or age >= ttl

    def _in_failure_cooldown(self) -> bool:
        if self._last_error is None or self._last_failure_at is None:
            return False
        return self._clock() - self._last_failure_at < self.failure_cooldown

    def refresh_if_stale(self, ttl: timedelta) -> asyncio.Task[bool] | None:
        """
        Start a refresh when the snapshot is older than ``ttl`` (or missing).

        Returns the in-flight refresh task when one is already running, the newly
        started task, or ``None`` when nothing needed doing. Must be called from
        a running event loop.
        """
        if self.refresh_in_progress:
            return self._refresh_task
        if not self.is_stale(ttl) or self._in_failure_cooldown():
            return None
        return self._start_refresh()

    def force_refresh(self) -> asyncio.Task[bool]:
        """Start a refresh regardless of age, still joining one already in flight."""
        if self.refresh_in_progress:
            return self._refresh_task
        return self._start_refresh()

    def _start_refresh(self) -> asyncio.Task[bool]:
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._refresh(), name=f"rate-refresh-{self.base_code}")
        task.add_done_callback(self._on_refresh_done)
        self._refresh_task = task
        return task

    def _on_refresh_done(self, task: asyncio.Task[bool]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._last_error = exc
            self._last_failure_at = self._clock()
            logger.error(f"Unexpected error during rate refresh for {self.base_code}: {exc}", exc_info=exc)

    async def _fetch_with_retry(self) -> RateSnapshot:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=1, min=0, max=self.retry_max_wait.total_seconds()),
            retry=retry_if_exception_type(NetworkError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self.provider.fetch(self.base_code)
        raise AssertionError("unreachable")  # pragma: no cover

    async def _refresh(self) -> bool:
        start = time.perf_counter()
        self._last_attempt_at = self._clock()

        try:
            snapshot = await self._fetch_with_retry()
        except RateRefreshError as e:
            self._last_error = e
            self._last_failure_at = self._clock()
            self._events.log_rate_refresh(
                self.base_code,
                success=False,
                duration_ms=(time.perf_counter() - start) * 1000,
                error=e,
                serving_stale=self._snapshot is not None,
            )
            return False

        # Install first: a reader that sees the new last_success_at must also see this snapshot.
        self._snapshot = snapshot
        self._last_success_at = self._clock()
        self._last_error = None

        self._events.log_rate_refresh(
            self.base_code,
            success=True,
            duration_ms=(time.perf_counter() - start) * 1000,
            rate_count=len(snapshot.rates),
        )

        if self.store is not None:
            await self._persist(snapshot)
        return True

    async def _persist(self, snapshot: RateSnapshot) -> None:
        try:
            await self.store.set_snapshot(snapshot)
        except CacheError as e:
            self._events.log_snapshot_store("save", snapshot.base_code, success=False, error_message=str(e))
        else:
            self._events.log_snapshot_store("save", snapshot.base_code, success=True)

    async def restore(self) -> bool:
        """Install a persisted snapshot when the cache is still empty."""
        if self.store is None or self._snapshot is not None:
            return False

        try:
            snapshot = await self.store.get_snapshot(self.base_code)
        except CacheError as e:
            self._events.log_snapshot_store("restore", self.base_code, success=False, error_message=str(e))
            return False

        if snapshot is None or snapshot.base_code != self.base_code:
            return False
        # A refresh may have completed while the store was being read.
        if self._snapshot is not None:
            return False

        self._snapshot = snapshot
        self._last_success_at = snapshot.fetched_at
        self._events.log_snapshot_store("restore", self.base_code, success=True)
        logger.info(f"Restored {self.base_code} snapshot fetched at {snapshot.fetched_at.isoformat()}")
        return True

    async def close(self) -> None:
        task = self._refresh_task
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
