class CurrencyException(Exception):
	pass


class RateRefreshError(CurrencyException):
	"""Raised on the refresh path only; never reaches conversion callers."""


class NetworkError(RateRefreshError):
	pass


class ProviderError(RateRefreshError):
	def __init__(self, message: str, status_code: int | None = None):
		super().__init__(message)
		self.status_code = status_code


class ParseError(RateRefreshError):
	pass


class UnknownCurrencyError(CurrencyException):
	def __init__(self, code: str, domain: str = 'rates'):
		super().__init__(f'Unknown currency {code!r} in {domain}')
		self.code = code
		self.domain = domain


class InvalidAmountError(CurrencyException):
	pass


class RatesUnavailableError(CurrencyException):
	pass


class CacheError(CurrencyException):
	pass
