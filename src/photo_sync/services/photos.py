"""Local photo store interface."""

from typing import Protocol

from photo_sync.domain.photos import PhotoRecord, SaveResult


class PhotoRepository(Protocol):
    """Persistence interface for locally stored photo records."""

    def insert(
        self,
        id: int,  # noqa: A002
        title: str,
        thumbnail_url: str,
        image_data: bytes | None,
    ) -> SaveResult:
        """Persist a record and commit, reporting failure instead of raising."""

    def fetch_all(self) -> list[PhotoRecord]:
        """Return all committed records ordered by row id, or [] on read failure."""
