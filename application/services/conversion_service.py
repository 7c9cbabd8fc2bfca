import asyncio
import logging
from datetime import datetime, timedelta
from decimal import Decimal

from application.services.conversion_engine import ConversionEngine
from application.services.currency_metadata import CurrencyMetadata
from application.workers.rate_refresher import RateRefresher
from domain.exceptions.currency import RatesUnavailableError
from domain.models.currency import RateSnapshot, RateTableEntry
from infrastructure.cache.rate_cache import RateCache

logger = logging.getLogger(__name__)


def normalize_code(code: str) -> str:
	return code.strip().upper()


class ConversionService:
	"""Consumer-facing API: currency names, symbols, conversions and data age.

	Every read asks the cache for a best-effort refresh first. That call only
	schedules work; the reader is served from whatever snapshot is installed.
	"""

	def __init__(
		self,
		cache: RateCache,
		metadata: CurrencyMetadata,
		engine: ConversionEngine | None = None,
		refresh_interval: timedelta = timedelta(hours=1),
		max_staleness: timedelta | None = None,
	):
		self.cache = cache
		self.metadata = metadata
		self.engine = engine or ConversionEngine()
		self.refresh_interval = refresh_interval
		self.max_staleness = max_staleness
		self._refresher: RateRefresher | None = None

	async def __aenter__(self) -> 'ConversionService':
		await self.start()
		return self

	async def __aexit__(self, exc_type, exc, tb) -> None:
		await self.close()

	async def start(self, warm: bool = True, run_refresher: bool = True, check_interval: timedelta = timedelta(seconds=60)) -> None:
		"""Restore any persisted snapshot, optionally wait for a first refresh, and
		start the background refresher."""
		await self.cache.restore()

		if warm:
			task = self.cache.refresh_if_stale(self.refresh_interval)
			if task is not None:
				await task
			if self.cache.current_snapshot() is None:
				logger.warning(f'Starting without {self.cache.base_code} rates: {self.cache.last_error}')

		if run_refresher and self._refresher is None:
			self._refresher = RateRefresher(self.cache, self.refresh_interval, check_interval)
			self._refresher.start()

	async def close(self) -> None:
		if self._refresher is not None:
			await self._refresher.stop()
			self._refresher = None
		await self.cache.close()
		await self.cache.provider.close()
		if self.cache.store is not None:
			await self.cache.store.close()

	def _snapshot(self) -> RateSnapshot | None:
		self.cache.refresh_if_stale(self.refresh_interval)
		return self.cache.current_snapshot()

	def _require_snapshot(self) -> RateSnapshot:
		snapshot = self._snapshot()
		if snapshot is None:
			raise RatesUnavailableError(f'No {self.cache.base_code} exchange rates have been fetched yet')

		if self.max_staleness is not None:
			age = self.cache.age()
			if age is not None and age > self.max_staleness:
				raise RatesUnavailableError(
					f'Exchange rates are {age} old, older than the allowed {self.max_staleness}'
				)
		return snapshot

	async def get_names(self) -> list[tuple[str, str]]:
		self._snapshot()
		return self.metadata.names()

	async def get_symbol(self, code: str) -> str:
		self._snapshot()
		return self.metadata.symbol(normalize_code(code))

	async def get_name(self, code: str) -> str:
		self._snapshot()
		return self.metadata.name(normalize_code(code))

	async def last_updated(self) -> datetime | None:
		self._snapshot()
		return self.cache.last_success_at

	async def convert(self, from_code: str, to_code: str, amount: Decimal | int | float | str) -> Decimal:
		snapshot = self._require_snapshot()
		return self.engine.convert(snapshot, normalize_code(from_code), normalize_code(to_code), amount)

	async def get_rate(self, from_code: str, to_code: str) -> Decimal:
		snapshot = self._require_snapshot()
		return self.engine.rate(snapshot, normalize_code(from_code), normalize_code(to_code))

	async def get_rates_table(self) -> list[RateTableEntry]:
		snapshot = self._require_snapshot()
		entries = []
		for code in snapshot.codes:
			currency = self.metadata.get(code) if code in self.metadata else None
			entries.append(
				RateTableEntry(
					code=code,
					name=currency.name if currency else None,
					symbol=currency.symbol if currency else None,
					rate=snapshot.rates[code],
				)
			)
		return entries

	async def refresh(self, force: bool = True) -> bool:
		"""Administrative refresh; waits for the fetch and reports whether it succeeded."""
		task = self.cache.force_refresh() if force else self.cache.refresh_if_stale(self.refresh_interval)
		if task is None:
			return False
		return await asyncio.shield(task)
