"""Sync controller for the fetch, persist and refresh cycle."""

import asyncio
import logging
from dataclasses import dataclass, field, replace

from photo_sync.domain.photos import CatalogEntry, PhotoRecord, SyncReport, SyncState
from photo_sync.services.catalog import CatalogService
from photo_sync.services.display import PhotoListView
from photo_sync.services.photos import PhotoRepository

logger = logging.getLogger(__name__)


class SyncInProgressError(RuntimeError):
    """Raised when a sync is requested while another one is running."""


@dataclass
class PhotoSyncService:
    """State machine that keeps the local store and the display in step.

    One cycle loads local records into the view, fetches the catalog, downloads
    thumbnails with bounded concurrency, persists what downloaded, then reloads
    the view. Store and view calls happen on the event loop running ``sync``.
    """

    repository: PhotoRepository
    catalog_service: CatalogService
    view: PhotoListView
    max_concurrent_downloads: int = 8
    _state: SyncState = field(default=SyncState.IDLE, init=False)

    @property
    def state(self) -> SyncState:
        return self._state

    def load_local(self) -> list[PhotoRecord]:
        """Read every stored record and hand it to the view."""
        records = self.repository.fetch_all()
        self.view.show(records)
        return records

    async def sync(self) -> SyncReport:
        """Run one full sync cycle and return its summary."""
        if self._state is SyncState.SYNCING:
            raise SyncInProgressError("A sync is already running")
        self.load_local()
        self._state = SyncState.SYNCING
        try:
            report = await self._sync_remote()
        finally:
            records = self.load_local()
            self._state = SyncState.IDLE
        report = replace(report, records=len(records))
        logger.info(
            "Sync finished: %d/%d saved, %d downloads failed, %d saves failed",
            report.saved,
            report.catalog_size,
            report.failed_downloads,
            report.failed_saves,
        )
        return report

    async def _sync_remote(self) -> SyncReport:
        entries = await self.catalog_service.fetch_catalog()
        if entries is None:
            return SyncReport(catalog_ok=False)

        thumbnails = await self._download_thumbnails(entries)
        downloaded = saved = failed_saves = 0
        for entry, image_data in zip(entries, thumbnails, strict=True):
            if image_data is None:
                continue
            downloaded += 1
            result = self.repository.insert(
                id=entry.id,
                title=entry.title,
                thumbnail_url=entry.thumbnail_url,
                image_data=image_data,
            )
            if result.ok:
                saved += 1
            else:
                failed_saves += 1
                logger.warning("Photo %s was not saved: %s", entry.id, result.error)
        return SyncReport(
            catalog_ok=True,
            catalog_size=len(entries),
            downloaded=downloaded,
            saved=saved,
            failed_downloads=len(entries) - downloaded,
            failed_saves=failed_saves,
        )

    async def _download_thumbnails(
        self, entries: list[CatalogEntry]
    ) -> list[bytes | None]:
        semaphore = asyncio.Semaphore(self.max_concurrent_downloads)

        async def download(entry: CatalogEntry) -> bytes | None:
            async with semaphore:
                return await self.catalog_service.fetch_thumbnail(entry.thumbnail_url)

        return await asyncio.gather(*(download(entry) for entry in entries))
