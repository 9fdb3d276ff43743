"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from photo_sync.adapters.catalog_client import HttpxPhotoCatalogClient
from photo_sync.adapters.sqlite_photo_repository import SqlitePhotoRepository
from photo_sync.adapters.supabase_photo_repository import SupabasePhotoRepository
from photo_sync.config import Settings, parse_storage_backend
from photo_sync.services.catalog import CatalogService
from photo_sync.services.display import InMemoryPhotoListView, PhotoListView
from photo_sync.services.photos import PhotoRepository
from photo_sync.services.sync import PhotoSyncService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    photo_repository: PhotoRepository
    catalog_service: CatalogService
    view: PhotoListView
    sync_service: PhotoSyncService
    close_resources: Callable[[], Awaitable[None]]


def build_photo_repository(settings: Settings) -> PhotoRepository:
    """Create the configured local store."""
    backend = parse_storage_backend(settings.storage_backend)
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "supabase_url and supabase_service_key are required "
                "for the supabase storage backend"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabasePhotoRepository(client, dedupe_by_id=settings.dedupe_by_id)
    return SqlitePhotoRepository.create(
        settings.database_path, dedupe_by_id=settings.dedupe_by_id
    )


def build_container(
    settings: Settings | None = None, view: PhotoListView | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    photo_repository = build_photo_repository(resolved_settings)
    catalog_client = HttpxPhotoCatalogClient.create(
        resolved_settings.catalog_url,
        timeout=resolved_settings.http_timeout_seconds,
    )
    catalog_service = CatalogService(
        client=catalog_client,
        catalog_limit=resolved_settings.catalog_limit,
    )
    resolved_view = view or InMemoryPhotoListView()
    sync_service = PhotoSyncService(
        repository=photo_repository,
        catalog_service=catalog_service,
        view=resolved_view,
        max_concurrent_downloads=resolved_settings.max_concurrent_downloads,
    )

    async def close_resources() -> None:
        await catalog_client.close()
        if isinstance(photo_repository, SqlitePhotoRepository):
            photo_repository.close()

    return AppContainer(
        settings=resolved_settings,
        photo_repository=photo_repository,
        catalog_service=catalog_service,
        view=resolved_view,
        sync_service=sync_service,
        close_resources=close_resources,
    )
