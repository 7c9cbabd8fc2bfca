from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
	"""Returns the current time as an aware UTC datetime."""
	return datetime.now(UTC)


def from_epoch(seconds: int) -> datetime:
	"""Converts provider epoch seconds to an aware UTC datetime."""
	return datetime.fromtimestamp(seconds, UTC)
