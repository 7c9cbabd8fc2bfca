from typing import Any

from domain.exceptions.currency import ProviderError
from infrastructure.providers.base import BaseAPIProvider


class OpenExchangeProvider(BaseAPIProvider):
    BASE_URL = "https://openexchangerates.org/api"

    @property
    def name(self) -> str:
        return "openexchange"

    def _build_request(self, base_code: str) -> tuple[str, dict[str, str]]:
        return f"{self.BASE_URL}/latest.json", {"app_id": self.api_key, "base": base_code}

    def _check_error_body(self, data: dict[str, Any]) -> None:
        if data.get("error"):
            message = data.get("description", data.get("message", "Unknown error"))
            status = data.get("status")
            raise ProviderError(
                f"OpenExchange API error: {message}",
                status_code=status if isinstance(status, int) else None,
            )
