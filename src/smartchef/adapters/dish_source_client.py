"""HTTP client for the monthly dish suggestion source."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class DishSourceClient(Protocol):
    """Interface for fetching dish suggestions for a country and month."""

    async def fetch_dishes(
        self, country_code: str, month: int, year: int
    ) -> list[dict[str, object]]:
        """Return raw dish records."""


@dataclass
class HttpxDishSourceClient(DishSourceClient):
    """HTTPX-backed dish source."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 30.0

    @classmethod
    def create(
        cls, base_url: str, timeout_seconds: float = 30.0
    ) -> "HttpxDishSourceClient":
        """Create a dish source client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_dishes(
        self, country_code: str, month: int, year: int
    ) -> list[dict[str, object]]:
        """Fetch dishes; accepts a bare list or a {"dishes": [...]} body."""
        response = await self.http_client.get(
            f"{self.base_url.rstrip('/')}/dishes",
            params={"countryCode": country_code, "month": month, "year": year},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        payload = response.json()
        if isinstance(payload, dict):
            payload = payload.get("dishes", [])
        return payload if isinstance(payload, list) else []

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
