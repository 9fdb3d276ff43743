"""Display collaborators for stored photo records."""

import base64
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, TextIO

from photo_sync.domain.photos import PhotoRecord

# 1x1 transparent PNG substituted for records without image data.
PLACEHOLDER_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class PhotoListView(Protocol):
    """Interface for anything that renders the stored photo list."""

    def show(self, records: Sequence[PhotoRecord]) -> None:
        """Replace the displayed list with the given records."""


@dataclass
class InMemoryPhotoListView(PhotoListView):
    """Keeps the last displayed snapshot for the HTTP surface."""

    records: list[PhotoRecord] = field(default_factory=list)
    refresh_count: int = 0

    def show(self, records: Sequence[PhotoRecord]) -> None:
        self.records = list(records)
        self.refresh_count += 1

    def get(self, row_id: int) -> PhotoRecord | None:
        """Return a displayed record by row id."""
        for record in self.records:
            if record.row_id == row_id:
                return record
        return None


@dataclass
class ConsolePhotoListView(PhotoListView):
    """Prints one line per record."""

    stream: TextIO = field(default_factory=lambda: sys.stdout)

    def show(self, records: Sequence[PhotoRecord]) -> None:
        if not records:
            print("(no photos stored)", file=self.stream)
            return
        for record in records:
            image = (
                f"{len(record.image_data)} bytes"
                if record.image_data
                else "[placeholder]"
            )
            print(f"#{record.id} {record.title} ({image})", file=self.stream)


def image_bytes_for(record: PhotoRecord) -> bytes:
    """Return the record's image, or the placeholder when it has none."""
    return record.image_data or PLACEHOLDER_PNG


def detect_media_type(image_bytes: bytes) -> str:
    """Infer an image media type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "application/octet-stream"
