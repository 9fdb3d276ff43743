"""Photo list and sync endpoints."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import HTMLResponse

from photo_sync.services.display import (
    InMemoryPhotoListView,
    detect_media_type,
    image_bytes_for,
)
from photo_sync.services.sync import SyncInProgressError

if TYPE_CHECKING:
    from photo_sync.containers import AppContainer
    from photo_sync.domain.photos import PhotoRecord

router = APIRouter(tags=["photos"])


def _displayed_records(container: AppContainer) -> list[PhotoRecord]:
    view = container.view
    if isinstance(view, InMemoryPhotoListView):
        return view.records
    return container.photo_repository.fetch_all()


@router.get("/photos")
async def list_photos(request: Request) -> dict[str, object]:
    """Return the currently displayed photo list."""
    container: AppContainer = request.app.state.container
    return {
        "state": container.sync_service.state.value,
        "photos": [
            {
                "row_id": record.row_id,
                "id": record.id,
                "title": record.title,
                "thumbnail_url": record.thumbnail_url,
                "has_image": record.has_image,
            }
            for record in _displayed_records(container)
        ],
    }


@router.get("/photos/{row_id}/thumbnail")
async def photo_thumbnail(row_id: int, request: Request) -> Response:
    """Return stored thumbnail bytes, or a placeholder image."""
    container: AppContainer = request.app.state.container
    record = next(
        (r for r in _displayed_records(container) if r.row_id == row_id), None
    )
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    content = image_bytes_for(record)
    return Response(content=content, media_type=detect_media_type(content))


@router.post("/sync")
async def run_sync(request: Request) -> dict[str, object]:
    """Run one sync cycle and return its report."""
    container: AppContainer = request.app.state.container
    try:
        report = await container.sync_service.sync()
    except SyncInProgressError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    return report.as_dict()


@router.get("/ui", response_class=HTMLResponse)
async def photos_ui(request: Request) -> HTMLResponse:
    """Minimal scrollable photo list."""
    container: AppContainer = request.app.state.container
    items = "\n".join(
        f'      <li><img src="/photos/{record.row_id}/thumbnail" alt="" />'
        f"<span>{escape(record.title)}</span></li>"
        for record in _displayed_records(container)
    )
    return HTMLResponse(_PHOTOS_UI_HTML.replace("{items}", items))


_PHOTOS_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Photos</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      ul { list-style: none; padding: 0; max-height: 80vh; overflow-y: auto; }
      li { display: flex; align-items: center; gap: 1rem; margin-bottom: 0.5rem; }
      img { width: 75px; height: 75px; object-fit: cover; background: #eee; }
      button { padding: 0.4rem 0.8rem; }
    </style>
  </head>
  <body>
    <h1>Photos</h1>
    <button onclick="runSync()">Sync</button>
    <ul>
{items}
    </ul>
    <script>
      async function runSync() {
        const res = await fetch('/sync', { method: 'POST' });
        if (res.ok) {
          window.location.reload();
        }
      }
    </script>
  </body>
</html>
"""
