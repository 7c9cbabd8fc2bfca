import asyncio
import logging
import time
from abc import ABC, abstractmethod
from datetime import timedelta
from decimal import Decimal
from typing import Any, Protocol

import httpx

from application.utils.time import Clock, from_epoch, utc_now
from domain.exceptions.currency import NetworkError, ParseError, ProviderError
from domain.models.currency import RateSnapshot, is_currency_code
from infrastructure.monitoring.logger import EventLogger

logger = logging.getLogger(__name__)


class ExchangeRateProvider(Protocol):
	@property
	def name(self) -> str: ...

	async def fetch(self, base_code: str) -> RateSnapshot: ...

	async def close(self) -> None: ...


class BaseAPIProvider(ABC):
	"""Common HTTP handling for providers serving ``{base, timestamp, rates}`` bodies.

	One call to :meth:`fetch` issues exactly one GET request. Failures are mapped
	onto the refresh error family: transport problems and timeouts become
	``NetworkError``, non-2xx statuses and error bodies become ``ProviderError``,
	and anything that does not decode into a valid rate table is a ``ParseError``.
	"""

	BASE_URL: str

	def __init__(
		self,
		api_key: str,
		client: httpx.AsyncClient | None = None,
		timeout: timedelta = timedelta(seconds=10),
		clock: Clock = utc_now,
		events: EventLogger | None = None,
	):
		self.api_key = api_key
		self.timeout = timeout
		self._clock = clock
		self._events = events or EventLogger()
		self._owns_client = client is None
		self._client = client or httpx.AsyncClient(timeout=timeout.total_seconds())

	@property
	@abstractmethod
	def name(self) -> str: ...

	@abstractmethod
	def _build_request(self, base_code: str) -> tuple[str, dict[str, str]]:
		"""Returns the url and query params for the latest-rates endpoint."""

	def _check_error_body(self, data: dict[str, Any]) -> None:
		"""Raises ``ProviderError`` when a 2xx body reports a provider-side error."""

	async def fetch(self, base_code: str) -> RateSnapshot:
		start = time.perf_counter()
		try:
			data = await self._request(base_code)
			snapshot = self._parse(base_code, data)
		except (NetworkError, ProviderError, ParseError) as e:
			self._events.log_provider_call(
				self.name,
				base_code,
				success=False,
				response_time_ms=(time.perf_counter() - start) * 1000,
				status_code=getattr(e, 'status_code', None),
				error_message=str(e),
			)
			raise

		self._events.log_provider_call(
			self.name,
			base_code,
			success=True,
			response_time_ms=(time.perf_counter() - start) * 1000,
			rate_count=len(snapshot.rates),
		)
		return snapshot

	async def _request(self, base_code: str) -> dict[str, Any]:
		url, params = self._build_request(base_code)

		try:
			async with asyncio.timeout(self.timeout.total_seconds()):
				response = await self._client.get(url, params=params)
			response.raise_for_status()
		except httpx.HTTPStatusError as e:
			raise ProviderError(
				f'{self.name} HTTP error {e.response.status_code}: {e.response.text[:200]}',
				status_code=e.response.status_code,
			) from e
		except httpx.RequestError as e:
			raise NetworkError(f'{self.name} request failed: {e.__class__.__name__}') from e
		except TimeoutError as e:
			raise NetworkError(
				f'{self.name} request timed out after {self.timeout.total_seconds():g}s'
			) from e

		content_type = response.headers.get('content-type', '')
		if 'json' not in content_type:
			raise ParseError(f'{self.name} returned unexpected content type {content_type!r}')

		try:
			data = response.json()
		except ValueError as e:
			raise ParseError(f'{self.name} response parsing error: {e}') from e

		if not isinstance(data, dict):
			raise ParseError(f'{self.name} response is not a JSON object')

		self._check_error_body(data)
		return data

	def _parse(self, base_code: str, data: dict[str, Any]) -> RateSnapshot:
		base = data.get('base')
		if not isinstance(base, str) or base.upper() != base_code:
			raise ParseError(f'{self.name} returned base {base!r}, expected {base_code!r}')

		timestamp = data.get('timestamp')
		if isinstance(timestamp, bool) or not isinstance(timestamp, int):
			raise ParseError(f'{self.name} returned invalid timestamp {timestamp!r}')
		try:
			published_at = from_epoch(timestamp)
		except (OverflowError, OSError, ValueError) as e:
			raise ParseError(f'{self.name} returned out of range timestamp {timestamp!r}') from e

		raw_rates = data.get('rates')
		if not isinstance(raw_rates, dict) or not raw_rates:
			raise ParseError(f'{self.name} response is missing rates')

		rates: dict[str, Decimal] = {}
		for raw_code, value in raw_rates.items():
			code = raw_code.upper() if isinstance(raw_code, str) else raw_code
			if not is_currency_code(code):
				raise ParseError(f'{self.name} returned invalid currency code {raw_code!r}')
			if code in rates:
				raise ParseError(f'{self.name} returned duplicate rates for {code}')
			if isinstance(value, bool) or not isinstance(value, (int, float)):
				raise ParseError(f'Non-numeric rate for {code}: {value!r}')
			rate = Decimal(str(value))
			if not rate.is_finite() or rate <= 0:
				raise ParseError(f'Rate for {code} must be positive and finite, got {value!r}')
			rates[code] = rate

		# Some plans omit the base from the table; it is 1 by definition.
		rates.setdefault(base_code, Decimal(1))

		return RateSnapshot(
			base_code=base_code,
			rates=rates,
			fetched_at=self._clock(),
			published_at=published_at,
		)

	async def close(self) -> None:
		"""Close the HTTP client, unless it was passed in by the caller."""
		if self._owns_client:
			await self._client.aclose()
