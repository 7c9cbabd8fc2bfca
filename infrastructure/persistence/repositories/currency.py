from collections.abc import Iterable

from domain.models.currency import Currency, is_currency_code
from infrastructure.persistence.reference import CURRENCY_REFERENCE


class CurrencyRepository:
	"""Loads currency reference data into ``Currency`` records.

	``overrides`` replace (or add) rows of the built-in table by code, so a
	deployment can rename a currency or fix a symbol without editing the table.
	"""

	def __init__(
		self,
		reference: Iterable[tuple[str, str, str]] = CURRENCY_REFERENCE,
		overrides: Iterable[Currency] = (),
	):
		self.reference = tuple(reference)
		self.overrides = tuple(overrides)

	def get_currencies(self) -> list[Currency]:
		currencies: dict[str, Currency] = {}
		for code, name, symbol in self.reference:
			if not is_currency_code(code):
				raise ValueError(f'Invalid currency code in reference data: {code!r}')
			if code in currencies:
				raise ValueError(f'Duplicate currency code in reference data: {code}')
			currencies[code] = Currency(code=code, name=name, symbol=symbol)

		for currency in self.overrides:
			currencies[currency.code] = currency

		return sorted(currencies.values(), key=lambda c: c.code)
