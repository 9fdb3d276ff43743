"""Command line entrypoint: show stored photos, sync, show them again."""

import argparse
import asyncio
import sys
from collections.abc import Sequence

from photo_sync.app_logging import configure_logging
from photo_sync.config import Settings
from photo_sync.containers import AppContainer, build_container
from photo_sync.domain.photos import SyncReport
from photo_sync.services.display import ConsolePhotoListView


def format_report(report: SyncReport) -> str:
    """Render a one-line sync summary."""
    if not report.catalog_ok:
        return f"Catalog unavailable; showing {report.records} stored photos."
    return (
        f"Saved {report.saved} of {report.catalog_size} photos "
        f"({report.failed_downloads} downloads failed, "
        f"{report.failed_saves} saves failed); {report.records} stored."
    )


async def run(container: AppContainer, sync: bool = True) -> SyncReport | None:
    """Display local photos and optionally run one sync."""
    try:
        if not sync:
            container.sync_service.load_local()
            return None
        report = await container.sync_service.sync()
        print(format_report(report))
        return report
    finally:
        await container.close_resources()


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}") from exc
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def main(argv: Sequence[str] | None = None) -> int:
    """Run the photo sync CLI."""
    parser = argparse.ArgumentParser(prog="photo-sync", description=__doc__)
    parser.add_argument(
        "--no-sync", action="store_true", help="only list locally stored photos"
    )
    parser.add_argument("--catalog-url", help="override the catalog endpoint")
    parser.add_argument(
        "--limit", type=_non_negative_int, help="only sync the first N entries"
    )
    args = parser.parse_args(argv)

    configure_logging()
    overrides: dict[str, object] = {}
    if args.catalog_url:
        overrides["catalog_url"] = args.catalog_url
    if args.limit is not None:
        overrides["catalog_limit"] = args.limit
    settings = Settings(**overrides)
    container = build_container(settings, view=ConsolePhotoListView(sys.stdout))
    asyncio.run(run(container, sync=not args.no_sync))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
