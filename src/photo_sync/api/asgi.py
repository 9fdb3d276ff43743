"""ASGI entrypoint for the photo sync API."""

from photo_sync.api.app import create_app
from photo_sync.containers import build_container

app = create_app(build_container())
