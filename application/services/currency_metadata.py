from collections.abc import Iterable

from domain.exceptions.currency import UnknownCurrencyError
from domain.models.currency import Currency
from infrastructure.persistence.repositories.currency import CurrencyRepository


class CurrencyMetadata:
	"""Read-only lookup of currency names and symbols by code."""

	def __init__(self, currencies: Iterable[Currency] | None = None):
		if currencies is None:
			currencies = CurrencyRepository().get_currencies()

		by_code: dict[str, Currency] = {}
		for currency in currencies:
			if currency.code in by_code:
				raise ValueError(f'Duplicate currency code: {currency.code}')
			by_code[currency.code] = currency

		self._currencies = dict(sorted(by_code.items()))
		self._names = [(code, c.name) for code, c in self._currencies.items()]

	def __contains__(self, code: str) -> bool:
		return code in self._currencies

	def __len__(self) -> int:
		return len(self._currencies)

	def codes(self) -> list[str]:
		return list(self._currencies)

	def names(self) -> list[tuple[str, str]]:
		return list(self._names)

	def get(self, code: str) -> Currency:
		try:
			return self._currencies[code]
		except KeyError:
			raise UnknownCurrencyError(code, domain='metadata') from None

	def name(self, code: str) -> str:
		return self.get(code).name

	def symbol(self, code: str) -> str:
		return self.get(code).symbol
