"""Domain models for photo catalog entries and stored records."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogEntry(BaseModel):
    """Single photo metadata entry decoded from the remote catalog."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    title: str
    thumbnail_url: str = Field(alias="thumbnailUrl")

    @field_validator("thumbnail_url")
    @classmethod
    def validate_thumbnail_url(cls, value: str) -> str:
        text = value.strip()
        if not text.startswith(("http://", "https://")):
            raise ValueError("thumbnail url must be an absolute http(s) URI")
        return text


@dataclass(frozen=True)
class PhotoRecord:
    """Represents a photo row stored locally."""

    row_id: int
    id: int
    title: str
    thumbnail_url: str
    image_data: bytes | None = None

    @property
    def has_image(self) -> bool:
        return bool(self.image_data)


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a single store insert."""

    ok: bool
    row_id: int | None = None
    error: str | None = None

    @classmethod
    def saved(cls, row_id: int) -> "SaveResult":
        return cls(ok=True, row_id=row_id)

    @classmethod
    def failed(cls, error: str) -> "SaveResult":
        return cls(ok=False, error=error)


class SyncState(str, Enum):
    """Lifecycle state of the sync controller."""

    IDLE = "IDLE"
    SYNCING = "SYNCING"


@dataclass(frozen=True)
class SyncReport:
    """Summary of one fetch, persist and reload cycle."""

    catalog_ok: bool
    catalog_size: int = 0
    downloaded: int = 0
    saved: int = 0
    failed_downloads: int = 0
    failed_saves: int = 0
    records: int = 0

    def as_dict(self) -> dict[str, object]:
        return {
            "catalog_ok": self.catalog_ok,
            "catalog_size": self.catalog_size,
            "downloaded": self.downloaded,
            "saved": self.saved,
            "failed_downloads": self.failed_downloads,
            "failed_saves": self.failed_saves,
            "records": self.records,
        }
