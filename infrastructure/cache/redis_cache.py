import json
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation

from redis import asyncio as redis
from redis.exceptions import RedisError

from domain.exceptions.currency import CacheError, ParseError
from domain.models.currency import RateSnapshot


class RedisSnapshotStore:
    """Persists the last good snapshot so a restarted process is not cold."""

    def __init__(self, redis_client: redis.Redis, snapshot_ttl: timedelta = timedelta(days=7)):
        self.redis = redis_client
        self.snapshot_ttl = snapshot_ttl

    def _make_snapshot_key(self, base_code: str) -> str:
        return f"rates:snapshot:{base_code}"

    async def get_snapshot(self, base_code: str) -> RateSnapshot | None:
        key = self._make_snapshot_key(base_code)
        try:
            data = await self.redis.get(key)
        except RedisError as e:
            raise CacheError(f"Redis read failed for {key}: {e}") from e

        if not data:
            return None

        try:
            snapshot_dict = json.loads(data)
            published_at = snapshot_dict.get("published_at")
            return RateSnapshot(
                base_code=snapshot_dict["base_code"],
                rates={code: Decimal(rate) for code, rate in snapshot_dict["rates"].items()},
                fetched_at=datetime.fromisoformat(snapshot_dict["fetched_at"]),
                published_at=datetime.fromisoformat(published_at) if published_at else None,
            )
        except json.JSONDecodeError as e:
            raise CacheError(f"Invalid json data for {key}") from e
        except (KeyError, TypeError, AttributeError, ValueError, InvalidOperation, ParseError) as e:
            raise CacheError(f"Invalid snapshot data for {key}: {e}") from e

    async def set_snapshot(self, snapshot: RateSnapshot) -> None:
        key = self._make_snapshot_key(snapshot.base_code)

        snapshot_dict = {
            "base_code": snapshot.base_code,
            "rates": {code: str(rate) for code, rate in snapshot.rates.items()},
            "fetched_at": snapshot.fetched_at.isoformat(),
            "published_at": snapshot.published_at.isoformat() if snapshot.published_at else None,
        }

        try:
            await self.redis.setex(key, self.snapshot_ttl, json.dumps(snapshot_dict))
        except RedisError as e:
            raise CacheError(f"Redis write failed for {key}: {e}") from e

    async def close(self) -> None:
        await self.redis.aclose()
