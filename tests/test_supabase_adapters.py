"""Tests for the Supabase photo repository."""

from dataclasses import dataclass, field

from photo_sync.adapters.supabase_photo_repository import SupabasePhotoRepository
from tests.conftest import PNG_BYTES


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    rows: list[dict[str, object]]
    fail: bool = False
    _action: str = "select"
    _payload: dict[str, object] | None = None
    _filters: list[tuple[str, object]] = field(default_factory=list)
    _limit: int | None = None
    _range: tuple[int, int] | None = None
    max_rows: int = 1000

    def select(self, *_args) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self._payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self._payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._filters.append((column, value))
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def limit(self, count: int) -> "FakeTable":
        self._limit = count
        return self

    def range(self, start: int, end: int) -> "FakeTable":
        self._range = (start, end)
        return self

    def execute(self) -> FakeResponse:
        if self.fail:
            raise RuntimeError("supabase unavailable")
        matched = [
            row
            for row in self.rows
            if all(row.get(column) == value for column, value in self._filters)
        ]
        if self._action == "insert":
            row = {"row_id": len(self.rows) + 1, **(self._payload or {})}
            self.rows.append(row)
            return FakeResponse(data=[row])
        if self._action == "update":
            for row in matched:
                row.update(self._payload or {})
            return FakeResponse(data=matched)
        if self._range is not None:
            start, end = self._range
            matched = matched[start : end + 1]
        if self._limit is not None:
            matched = matched[: self._limit]
        matched = matched[: self.max_rows]
        return FakeResponse(data=[dict(row) for row in matched])


@dataclass
class FakeSupabaseClient:
    rows: list[dict[str, object]] = field(default_factory=list)
    fail: bool = False
    tables: list[str] = field(default_factory=list)
    max_rows: int = 1000

    def table(self, name: str) -> FakeTable:
        self.tables.append(name)
        return FakeTable(rows=self.rows, fail=self.fail, max_rows=self.max_rows)


def test_supabase_insert_encodes_image_and_fetch_decodes_it() -> None:
    client = FakeSupabaseClient()
    repository = SupabasePhotoRepository(client)  # type: ignore[arg-type]

    result = repository.insert(1, "A", "http://x/a.jpg", PNG_BYTES)

    records = repository.fetch_all()
    assert result.ok is True
    assert client.tables[0] == "photos"
    assert isinstance(client.rows[0]["image_data_b64"], str)
    assert records[0].id == 1
    assert records[0].image_data == PNG_BYTES


def test_supabase_upsert_keeps_existing_image() -> None:
    client = FakeSupabaseClient()
    repository = SupabasePhotoRepository(client)  # type: ignore[arg-type]
    repository.insert(1, "A", "http://x/a.jpg", PNG_BYTES)

    repository.insert(1, "A2", "http://x/a.jpg", None)

    records = repository.fetch_all()
    assert len(records) == 1
    assert records[0].title == "A2"
    assert records[0].image_data == PNG_BYTES


def test_supabase_appends_without_dedupe() -> None:
    client = FakeSupabaseClient()
    repository = SupabasePhotoRepository(
        client,  # type: ignore[arg-type]
        dedupe_by_id=False,
    )

    repository.insert(1, "A", "http://x/a.jpg", PNG_BYTES)
    repository.insert(1, "A", "http://x/a.jpg", PNG_BYTES)

    assert len(repository.fetch_all()) == 2


def test_supabase_failures_are_reported() -> None:
    repository = SupabasePhotoRepository(
        FakeSupabaseClient(fail=True)  # type: ignore[arg-type]
    )

    result = repository.insert(1, "A", "http://x/a.jpg", PNG_BYTES)

    assert result.ok is False
    assert result.error == "supabase unavailable"
    assert repository.fetch_all() == []


def test_supabase_fetch_all_pages_past_max_rows() -> None:
    client = FakeSupabaseClient(max_rows=3)
    repository = SupabasePhotoRepository(
        client,  # type: ignore[arg-type]
        dedupe_by_id=False,
        page_size=5,
    )
    for photo_id in range(1, 11):
        repository.insert(photo_id, f"photo {photo_id}", "http://x/p.jpg", PNG_BYTES)

    records = repository.fetch_all()

    assert [record.id for record in records] == list(range(1, 11))
