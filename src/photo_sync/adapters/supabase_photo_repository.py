"""Supabase-backed photo repository."""

import base64
import logging
from dataclasses import dataclass

from supabase import Client

from photo_sync.domain.photos import PhotoRecord, SaveResult
from photo_sync.services.photos import PhotoRepository

logger = logging.getLogger(__name__)


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo record persistence.

    Image bytes are stored base64-encoded in the ``image_data_b64`` text column.
    """

    client: Client
    dedupe_by_id: bool = True
    page_size: int = 1000

    def insert(
        self,
        id: int,  # noqa: A002
        title: str,
        thumbnail_url: str,
        image_data: bytes | None,
    ) -> SaveResult:
        """Insert a photo row, or update the existing one when deduping by id."""
        payload: dict[str, object] = {
            "photo_id": id,
            "title": title,
            "thumbnail_url": thumbnail_url,
        }
        if image_data is not None:
            payload["image_data_b64"] = _encode(image_data)
        try:
            existing = self._find_row_id(id) if self.dedupe_by_id else None
            if existing is not None:
                self.client.table("photos").update(payload).eq(
                    "row_id", existing
                ).execute()
                return SaveResult.saved(existing)
            response = self.client.table("photos").insert(payload).execute()
        except Exception as exc:
            logger.exception("Failed to save photo %s", id)
            return SaveResult.failed(str(exc))
        if not response.data:
            logger.error("Supabase returned no row for photo %s", id)
            return SaveResult.failed("Failed to create photo row")
        return SaveResult.saved(int(response.data[0]["row_id"]))

    def fetch_all(self) -> list[PhotoRecord]:
        """Return all stored photos ordered by row id.

        PostgREST caps each response at its configured max rows, so pages are
        requested until one comes back empty.
        """
        rows: list[dict[str, object]] = []
        try:
            while True:
                response = (
                    self.client.table("photos")
                    .select("row_id, photo_id, title, thumbnail_url, image_data_b64")
                    .order("row_id")
                    .range(len(rows), len(rows) + self.page_size - 1)
                    .execute()
                )
                page = response.data or []
                if not page:
                    break
                rows.extend(page)
        except Exception:
            logger.exception("Failed to read stored photos")
            return []
        return [_row_to_record(row) for row in rows]

    def _find_row_id(self, photo_id: int) -> int | None:
        response = (
            self.client.table("photos")
            .select("row_id")
            .eq("photo_id", photo_id)
            .order("row_id")
            .limit(1)
            .execute()
        )
        if response.data:
            return int(response.data[0]["row_id"])
        return None


def _row_to_record(row: dict[str, object]) -> PhotoRecord:
    encoded = row.get("image_data_b64")
    return PhotoRecord(
        row_id=int(row["row_id"]),
        id=int(row["photo_id"]),
        title=str(row["title"]),
        thumbnail_url=str(row["thumbnail_url"]),
        image_data=base64.b64decode(encoded) if isinstance(encoded, str) else None,
    )


def _encode(image_data: bytes) -> str:
    return base64.b64encode(image_data).decode("ascii")
