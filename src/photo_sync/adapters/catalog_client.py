"""Remote photo catalog HTTP client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class PhotoCatalogClient(Protocol):
    """Interface for fetching the remote photo catalog and its thumbnails."""

    async def get_catalog(self) -> list[dict[str, object]]:
        """Fetch the catalog and return the raw JSON array."""

    async def get_thumbnail(self, url: str) -> bytes:
        """Download thumbnail bytes from an absolute URL."""


@dataclass
class HttpxPhotoCatalogClient(PhotoCatalogClient):
    """HTTPX-backed catalog client."""

    catalog_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, catalog_url: str, timeout: float = 15.0
    ) -> "HttpxPhotoCatalogClient":
        """Create a catalog client with a managed httpx session."""
        return cls(
            catalog_url=catalog_url,
            http_client=httpx.AsyncClient(timeout=timeout, follow_redirects=True),
        )

    async def get_catalog(self) -> list[dict[str, object]]:
        """Fetch the catalog array."""
        response = await self.http_client.get(self.catalog_url)
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, list):
            raise ValueError("Catalog payload is not a JSON array")
        return payload

    async def get_thumbnail(self, url: str) -> bytes:
        """Download a thumbnail."""
        response = await self.http_client.get(url)
        response.raise_for_status()
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
