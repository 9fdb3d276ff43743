"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import pytest

from photo_sync.adapters.catalog_client import PhotoCatalogClient
from photo_sync.config import Settings
from photo_sync.containers import AppContainer
from photo_sync.domain.photos import PhotoRecord, SaveResult
from photo_sync.services.catalog import CatalogService
from photo_sync.services.display import InMemoryPhotoListView
from photo_sync.services.photos import PhotoRepository
from photo_sync.services.sync import PhotoSyncService

PNG_BYTES = b"\x89PNG\r\n\x1a\n-fake-png"
JPEG_BYTES = b"\xff\xd8\xff-fake-jpeg"


@dataclass
class InMemoryPhotoRepository(PhotoRepository):
    """In-memory photo store for tests."""

    records: list[PhotoRecord] = field(default_factory=list)
    dedupe_by_id: bool = True
    fail_ids: set[int] = field(default_factory=set)
    fail_reads: bool = False

    def insert(
        self,
        id: int,  # noqa: A002
        title: str,
        thumbnail_url: str,
        image_data: bytes | None,
    ) -> SaveResult:
        if id in self.fail_ids:
            return SaveResult.failed("disk full")
        if self.dedupe_by_id:
            for index, record in enumerate(self.records):
                if record.id == id:
                    self.records[index] = PhotoRecord(
                        row_id=record.row_id,
                        id=id,
                        title=title,
                        thumbnail_url=thumbnail_url,
                        image_data=image_data or record.image_data,
                    )
                    return SaveResult.saved(record.row_id)
        row_id = len(self.records) + 1
        self.records.append(
            PhotoRecord(
                row_id=row_id,
                id=id,
                title=title,
                thumbnail_url=thumbnail_url,
                image_data=image_data,
            )
        )
        return SaveResult.saved(row_id)

    def fetch_all(self) -> list[PhotoRecord]:
        if self.fail_reads:
            return []
        return list(self.records)


@dataclass
class FakeCatalogClient(PhotoCatalogClient):
    """Fake catalog client with canned payloads and failures."""

    catalog: object = field(default_factory=list)
    thumbnails: dict[str, bytes | Exception] = field(default_factory=dict)
    requested: list[str] = field(default_factory=list)
    download_delay: float = 0.0
    in_flight: int = 0
    max_in_flight: int = 0

    async def get_catalog(self) -> list[dict[str, object]]:
        if isinstance(self.catalog, Exception):
            raise self.catalog
        return self.catalog  # type: ignore[return-value]

    async def get_thumbnail(self, url: str) -> bytes:
        self.requested.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.download_delay:
                await asyncio.sleep(self.download_delay)
            result = self.thumbnails.get(url)
            if result is None:
                raise httpx.ConnectError("unreachable")
            if isinstance(result, Exception):
                raise result
            return result
        finally:
            self.in_flight -= 1


def catalog_entry(photo_id: int, title: str, url: str) -> dict[str, object]:
    """Build a raw catalog element shaped like the remote payload."""
    return {
        "albumId": 1,
        "id": photo_id,
        "title": title,
        "url": url.replace("/thumb/", "/full/"),
        "thumbnailUrl": url,
    }


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        catalog_url="https://catalog.test/photos",
        database_path=tmp_path / "photos.sqlite3",
        max_concurrent_downloads=2,
    )


@pytest.fixture
def repository() -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository()


@pytest.fixture
def catalog_client() -> FakeCatalogClient:
    return FakeCatalogClient()


@pytest.fixture
def view() -> InMemoryPhotoListView:
    return InMemoryPhotoListView()


@pytest.fixture
def sync_service(
    repository: InMemoryPhotoRepository,
    catalog_client: FakeCatalogClient,
    view: InMemoryPhotoListView,
) -> PhotoSyncService:
    return PhotoSyncService(
        repository=repository,
        catalog_service=CatalogService(client=catalog_client),
        view=view,
        max_concurrent_downloads=2,
    )


@pytest.fixture
def container(
    settings: Settings,
    repository: InMemoryPhotoRepository,
    view: InMemoryPhotoListView,
    sync_service: PhotoSyncService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        photo_repository=repository,
        catalog_service=sync_service.catalog_service,
        view=view,
        sync_service=sync_service,
        close_resources=close_resources,
    )
