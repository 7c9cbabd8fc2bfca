from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType

from domain.exceptions.currency import ParseError


def is_currency_code(code: object) -> bool:
	return isinstance(code, str) and len(code) == 3 and code.isascii() and code.isalpha() and code.isupper()


@dataclass(frozen=True)
class Currency:
	code: str
	name: str
	symbol: str


@dataclass(frozen=True)
class RateSnapshot:
	"""Immutable table of rates for one base currency.

	Rates are expressed as units of the quoted currency per one unit of the base.
	Construction validates the table and freezes the mapping, so a snapshot can be
	shared between readers without locking.
	"""

	base_code: str
	rates: Mapping[str, Decimal]
	fetched_at: datetime
	published_at: datetime | None = None

	def __post_init__(self):
		if not is_currency_code(self.base_code):
			raise ParseError(f'Invalid base currency code: {self.base_code!r}')

		frozen: dict[str, Decimal] = {}
		for code, rate in self.rates.items():
			if not is_currency_code(code):
				raise ParseError(f'Invalid currency code in rates: {code!r}')
			if not isinstance(rate, Decimal):
				raise ParseError(f'Rate for {code} must be a Decimal, got {type(rate).__name__}')
			if not rate.is_finite() or rate <= 0:
				raise ParseError(f'Rate for {code} must be positive and finite, got {rate}')
			frozen[code] = rate

		if frozen.get(self.base_code) != Decimal(1):
			raise ParseError(f'Rate for base currency {self.base_code} must be exactly 1')

		object.__setattr__(self, 'rates', MappingProxyType(frozen))

	def __contains__(self, code: str) -> bool:
		return code in self.rates

	@property
	def codes(self) -> list[str]:
		return sorted(self.rates)


@dataclass(frozen=True)
class CacheState:
	snapshot: RateSnapshot | None = None
	last_attempt_at: datetime | None = None
	last_success_at: datetime | None = None
	refresh_in_progress: bool = False
	last_error: Exception | None = field(default=None, compare=False)

	@property
	def is_empty(self) -> bool:
		return self.snapshot is None


@dataclass(frozen=True)
class RateTableEntry:
	code: str
	name: str | None
	symbol: str | None
	rate: Decimal
