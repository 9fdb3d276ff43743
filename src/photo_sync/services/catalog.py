"""Best-effort remote catalog fetching."""

import logging
from dataclasses import dataclass

import httpx
from pydantic import TypeAdapter, ValidationError

from photo_sync.adapters.catalog_client import PhotoCatalogClient
from photo_sync.domain.photos import CatalogEntry

logger = logging.getLogger(__name__)

_CATALOG_ADAPTER = TypeAdapter(list[CatalogEntry])


@dataclass
class CatalogService:
    """Fetches and decodes the catalog, swallowing and logging failures."""

    client: PhotoCatalogClient
    catalog_limit: int | None = None

    async def fetch_catalog(self) -> list[CatalogEntry] | None:
        """Return decoded catalog entries, or None if the catalog is unusable."""
        try:
            raw = await self.client.get_catalog()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Catalog request failed: %s", exc)
            return None
        except ValueError as exc:
            logger.warning("Malformed catalog payload: %s", exc)
            return None
        try:
            entries = _CATALOG_ADAPTER.validate_python(raw)
        except ValidationError as exc:
            logger.warning(
                "Malformed catalog payload: %d validation errors", exc.error_count()
            )
            return None
        if self.catalog_limit is not None:
            entries = entries[: self.catalog_limit]
        logger.info("Fetched catalog with %d entries", len(entries))
        return entries

    async def fetch_thumbnail(self, url: str) -> bytes | None:
        """Return thumbnail bytes, or None if the download failed or was empty."""
        try:
            data = await self.client.get_thumbnail(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Thumbnail download failed for %s: %s", url, exc)
            return None
        except Exception:
            logger.exception("Thumbnail download failed for %s", url)
            return None
        if not data:
            logger.warning("Thumbnail download returned no bytes for %s", url)
            return None
        return data
