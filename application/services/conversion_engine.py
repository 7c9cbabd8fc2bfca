from decimal import Decimal, InvalidOperation

from domain.exceptions.currency import InvalidAmountError, UnknownCurrencyError
from domain.models.currency import RateSnapshot


def to_amount(amount: Decimal | int | float | str) -> Decimal:
	"""Validates a caller supplied amount and returns it as a Decimal."""
	if isinstance(amount, bool):
		raise InvalidAmountError(f'Amount must be numeric, got {amount!r}')
	if isinstance(amount, Decimal):
		value = amount
	elif isinstance(amount, (int, float, str)):
		try:
			value = Decimal(str(amount).strip())
		except InvalidOperation:
			raise InvalidAmountError(f'Amount is not a number: {amount!r}') from None
	else:
		raise InvalidAmountError(f'Amount must be numeric, got {type(amount).__name__}')

	if value.is_nan():
		raise InvalidAmountError('Amount must not be NaN')
	if value.is_infinite():
		raise InvalidAmountError('Amount must be finite')
	if value < 0:
		raise InvalidAmountError(f'Amount must not be negative, got {value}')
	return value


class ConversionEngine:
	"""Pure conversions over a single snapshot, normalised through its base."""

	def _rate_for(self, snapshot: RateSnapshot, code: str) -> Decimal:
		try:
			return snapshot.rates[code]
		except KeyError:
			raise UnknownCurrencyError(code, domain='rates') from None

	def rate(self, snapshot: RateSnapshot, from_code: str, to_code: str) -> Decimal:
		from_rate = self._rate_for(snapshot, from_code)
		to_rate = self._rate_for(snapshot, to_code)
		if from_code == to_code:
			return Decimal(1)
		return to_rate / from_rate

	def convert(
		self,
		snapshot: RateSnapshot,
		from_code: str,
		to_code: str,
		amount: Decimal | int | float | str,
	) -> Decimal:
		from_rate = self._rate_for(snapshot, from_code)
		to_rate = self._rate_for(snapshot, to_code)
		value = to_amount(amount)

		if from_code == to_code:
			return value
		return value * (to_rate / from_rate)
