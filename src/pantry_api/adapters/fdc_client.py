"""USDA FoodData Central API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

MAX_PAGE_SIZE = 200


class FdcClient(Protocol):
    """Interface for FoodData Central API interactions."""

    async def search_foods(
        self,
        query: str,
        page_size: int = 25,
        page_number: int = 1,
        require_all_words: bool = True,
    ) -> dict[str, object]:
        """Search foods by query and return raw API data."""


@dataclass
class HttpxFdcClient(FdcClient):
    """HTTPX-backed FDC client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxFdcClient":
        """Create an FDC client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def search_foods(
        self,
        query: str,
        page_size: int = 25,
        page_number: int = 1,
        require_all_words: bool = True,
    ) -> dict[str, object]:
        """Search foods by query, one page at a time."""
        params: dict[str, object] = {
            "api_key": self.api_key,
            "query": query,
            "pageSize": min(max(page_size, 1), MAX_PAGE_SIZE),
            "pageNumber": max(page_number, 1),
        }
        if require_all_words:
            params["requireAllWords"] = "true"
        response = await self.http_client.get(
            f"{self.base_url}/foods/search",
            params=params,
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
