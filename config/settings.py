from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Provider
	RATE_PROVIDER: Literal['openexchange', 'fixerio'] = 'openexchange'
	API_CREDENTIAL: str = ''
	OPENEXCHANGE_APP_ID: str = ''
	FIXERIO_API_KEY: str = ''
	BASE_CURRENCY: str = 'USD'

	# Refresh policy
	REFRESH_INTERVAL: timedelta = timedelta(hours=1)
	REFRESH_CHECK_INTERVAL: timedelta = timedelta(seconds=60)
	FETCH_TIMEOUT: timedelta = timedelta(seconds=10)
	FETCH_RETRY_ATTEMPTS: int = 3
	FETCH_RETRY_MAX_WAIT: timedelta = timedelta(seconds=10)
	REFRESH_FAILURE_COOLDOWN: timedelta = timedelta(seconds=30)
	MAX_STALENESS: timedelta | None = None

	# Snapshot persistence
	REDIS_URL: str | None = None
	SNAPSHOT_TTL: timedelta = timedelta(days=7)

	# Application
	APP_NAME: str = 'Currency Conversion Service'
	LOG_DIRECTORY: str = 'logs'
	LOG_LEVEL: str = 'INFO'

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

	@field_validator('BASE_CURRENCY')
	@classmethod
	def _normalize_base_currency(cls, value: str) -> str:
		value = value.strip().upper()
		if len(value) != 3 or not value.isalpha():
			raise ValueError(f'BASE_CURRENCY must be a 3-letter code, got {value!r}')
		return value

	@field_validator('FETCH_RETRY_ATTEMPTS')
	@classmethod
	def _at_least_one_attempt(cls, value: int) -> int:
		if value < 1:
			raise ValueError('FETCH_RETRY_ATTEMPTS must be at least 1')
		return value

	@property
	def provider_credential(self) -> str:
		if self.API_CREDENTIAL:
			return self.API_CREDENTIAL
		if self.RATE_PROVIDER == 'fixerio':
			return self.FIXERIO_API_KEY
		return self.OPENEXCHANGE_APP_ID


@lru_cache
def get_settings() -> Settings:
	return Settings()
