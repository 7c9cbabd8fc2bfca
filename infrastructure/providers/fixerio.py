from typing import Any

from domain.exceptions.currency import ProviderError
from infrastructure.providers.base import BaseAPIProvider


class FixerIOProvider(BaseAPIProvider):
	BASE_URL = 'https://data.fixer.io/api'

	@property
	def name(self) -> str:
		return 'fixerio'

	def _build_request(self, base_code: str) -> tuple[str, dict[str, str]]:
		return f'{self.BASE_URL}/latest', {'access_key': self.api_key, 'base': base_code}

	def _check_error_body(self, data: dict[str, Any]) -> None:
		if not data.get('success', False):
			error = data.get('error')
			info = error.get('info', 'Unknown error') if isinstance(error, dict) else 'Unknown error'
			raise ProviderError(f'Fixer.io API error: {info}')
