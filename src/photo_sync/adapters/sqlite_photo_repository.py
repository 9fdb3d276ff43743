"""SQLite-backed local photo store.

The store owns a single connection opened with ``check_same_thread=False``. All
access goes through the event loop that owns the display, so calls are never
concurrent even when the loop runs on a different thread than the creator.
"""

import logging
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path

from photo_sync.domain.photos import PhotoRecord, SaveResult
from photo_sync.services.photos import PhotoRepository

logger = logging.getLogger(__name__)

PHOTOS_TABLE_SCHEMA = """
CREATE TABLE IF NOT EXISTS photos (
    row_id INTEGER PRIMARY KEY AUTOINCREMENT,
    photo_id INTEGER NOT NULL,
    title TEXT NOT NULL,
    thumbnail_url TEXT NOT NULL,
    image_data BLOB NULL
);
CREATE INDEX IF NOT EXISTS photos_photo_id_idx ON photos (photo_id);
"""


def connect(db_path: Path) -> sqlite3.Connection:
    """Open a connection, creating parent directories for file databases."""
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    connection = sqlite3.connect(db_path, check_same_thread=False)
    connection.row_factory = sqlite3.Row
    connection.executescript(PHOTOS_TABLE_SCHEMA)
    connection.commit()
    return connection


@dataclass
class SqlitePhotoRepository(PhotoRepository):
    """SQLite implementation for photo record persistence."""

    connection: sqlite3.Connection
    dedupe_by_id: bool = True
    _closed: bool = field(default=False, init=False, repr=False)

    @classmethod
    def create(cls, db_path: Path, dedupe_by_id: bool = True) -> "SqlitePhotoRepository":
        """Open the database file and ensure the schema exists."""
        return cls(connection=connect(db_path), dedupe_by_id=dedupe_by_id)

    def insert(
        self,
        id: int,  # noqa: A002
        title: str,
        thumbnail_url: str,
        image_data: bytes | None,
    ) -> SaveResult:
        """Insert a record, or upsert by catalog id when dedupe is enabled."""
        try:
            with self.connection:
                existing = None
                if self.dedupe_by_id:
                    existing = self.connection.execute(
                        "SELECT row_id FROM photos WHERE photo_id = ? "
                        "ORDER BY row_id LIMIT 1",
                        (id,),
                    ).fetchone()
                if existing is not None:
                    row_id = int(existing["row_id"])
                    self.connection.execute(
                        "UPDATE photos SET title = ?, thumbnail_url = ?, "
                        "image_data = COALESCE(?, image_data) WHERE row_id = ?",
                        (title, thumbnail_url, image_data, row_id),
                    )
                    return SaveResult.saved(row_id)
                cursor = self.connection.execute(
                    "INSERT INTO photos (photo_id, title, thumbnail_url, image_data) "
                    "VALUES (?, ?, ?, ?)",
                    (id, title, thumbnail_url, image_data),
                )
                return SaveResult.saved(int(cursor.lastrowid))
        except sqlite3.Error as exc:
            logger.exception("Failed to save photo %s", id)
            return SaveResult.failed(str(exc))

    def fetch_all(self) -> list[PhotoRecord]:
        """Return all stored photos ordered by row id."""
        try:
            rows = self.connection.execute(
                "SELECT row_id, photo_id, title, thumbnail_url, image_data "
                "FROM photos ORDER BY row_id"
            ).fetchall()
        except sqlite3.Error:
            logger.exception("Failed to read stored photos")
            return []
        return [
            PhotoRecord(
                row_id=row["row_id"],
                id=row["photo_id"],
                title=row["title"],
                thumbnail_url=row["thumbnail_url"],
                image_data=bytes(row["image_data"])
                if row["image_data"] is not None
                else None,
            )
            for row in rows
        ]

    def close(self) -> None:
        """Close the underlying connection."""
        if not self._closed:
            self.connection.close()
            self._closed = True
