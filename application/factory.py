import logging

import httpx
from redis.asyncio import Redis

from application.services import ConversionService, CurrencyMetadata
from application.utils.time import Clock, utc_now
from config.settings import Settings, get_settings
from infrastructure.cache.rate_cache import RateCache
from infrastructure.cache.redis_cache import RedisSnapshotStore
from infrastructure.monitoring.logger import EventLogger
from infrastructure.providers import BaseAPIProvider, FixerIOProvider, OpenExchangeProvider

logger = logging.getLogger(__name__)

PROVIDERS: dict[str, type[BaseAPIProvider]] = {
	'openexchange': OpenExchangeProvider,
	'fixerio': FixerIOProvider,
}


def build_provider(
	settings: Settings,
	client: httpx.AsyncClient | None = None,
	clock: Clock = utc_now,
	events: EventLogger | None = None,
) -> BaseAPIProvider:
	provider_cls = PROVIDERS[settings.RATE_PROVIDER]
	return provider_cls(
		api_key=settings.provider_credential,
		client=client,
		timeout=settings.FETCH_TIMEOUT,
		clock=clock,
		events=events,
	)


def build_snapshot_store(settings: Settings, redis_client: Redis | None = None) -> RedisSnapshotStore | None:
	if redis_client is None:
		if not settings.REDIS_URL:
			return None
		redis_client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
	return RedisSnapshotStore(redis_client, snapshot_ttl=settings.SNAPSHOT_TTL)


def build_conversion_service(
	settings: Settings | None = None,
	client: httpx.AsyncClient | None = None,
	redis_client: Redis | None = None,
	clock: Clock = utc_now,
	metadata: CurrencyMetadata | None = None,
) -> ConversionService:
	"""Wire a ConversionService from settings. Call ``start()`` before serving."""
	settings = settings or get_settings()
	events = EventLogger()

	provider = build_provider(settings, client=client, clock=clock, events=events)
	cache = RateCache(
		provider=provider,
		base_code=settings.BASE_CURRENCY,
		store=build_snapshot_store(settings, redis_client),
		clock=clock,
		retry_attempts=settings.FETCH_RETRY_ATTEMPTS,
		retry_max_wait=settings.FETCH_RETRY_MAX_WAIT,
		failure_cooldown=settings.REFRESH_FAILURE_COOLDOWN,
		events=events,
	)

	logger.info(f'Conversion service wired: provider={provider.name}, base={settings.BASE_CURRENCY}')
	return ConversionService(
		cache=cache,
		metadata=metadata or CurrencyMetadata(),
		refresh_interval=settings.REFRESH_INTERVAL,
		max_staleness=settings.MAX_STALENESS,
	)
