"""Entry point for the catalog sweep job."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

import httpx

from .config import Settings, load_settings
from .errors import ConfigError, SweepError
from .models import CatalogTarget, ScanReport
from .services.library import LibraryClient
from .services.reconciler import CatalogReconciler
from .services.request_service import RequestServiceClient

logger = logging.getLogger(__name__)


async def sweep_target(
    target: CatalogTarget,
    library: LibraryClient,
    http_client: httpx.AsyncClient,
    settings: Settings,
) -> ScanReport | None:
    """Sweep a single request service, returning ``None`` when it aborted."""

    logger.info("%s processing started...", target.name)
    reconciler = CatalogReconciler(
        RequestServiceClient(target, http_client),
        library,
        page_size=settings.page_size,
        max_page_fetches=settings.max_page_fetches,
    )
    try:
        report = await reconciler.scan()
    except SweepError as exc:
        logger.error("%s processing aborted: %s", target.name, exc)
        return None

    logger.info(
        "%s processing finished. (%s pages, %s deleted, %s kept, %s failed)",
        target.name,
        report.pages_fetched,
        report.deleted,
        report.kept,
        report.delete_failed,
    )
    return report


async def run(
    settings: Settings,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> list[ScanReport | None]:
    """Sweep every configured request service in order."""

    targets: Sequence[CatalogTarget] = settings.catalog_targets
    if not targets:
        logger.warning("No request services configured; nothing to sweep")
        return []

    owns_client = http_client is None
    client = http_client or httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds, connect=10.0),
        follow_redirects=True,
    )
    try:
        library = LibraryClient(
            settings.library_targets,
            client,
            failure_policy=settings.existence_failure_policy,
        )
        reports: list[ScanReport | None] = []
        for target in targets:
            reports.append(await sweep_target(target, library, client, settings))
        return reports
    finally:
        if owns_client:
            await client.aclose()


def main() -> int:
    """Load configuration and run the sweep; returns the process exit code."""

    logging.basicConfig(level=logging.INFO)
    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("%s", exc)
        return 1

    logging.getLogger().setLevel(settings.log_level)
    asyncio.run(run(settings))
    return 0
