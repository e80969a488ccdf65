"""Reconcile a request-service catalog against the library services."""

from __future__ import annotations

import asyncio
import logging

from ..errors import ScanLimitError, SweepError
from ..models import CatalogEntry, Outcome, ScanReport
from .library import LibraryClient
from .request_service import DEFAULT_PAGE_SIZE, RequestServiceClient

logger = logging.getLogger(__name__)


class CatalogReconciler:
    """Sweeps one request service, deleting entries the libraries no longer hold."""

    def __init__(
        self,
        catalog: RequestServiceClient,
        library: LibraryClient,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_page_fetches: int = 10_000,
    ) -> None:
        self._catalog = catalog
        self._library = library
        self._page_size = page_size
        self._max_page_fetches = max_page_fetches

    async def should_delete(self, entry: CatalogEntry) -> bool:
        if entry.external_ref is None:
            return True
        return not await self._library.exists(entry.kind, entry.external_ref)

    async def reconcile_entry(self, entry: CatalogEntry) -> Outcome:
        """Decide whether ``entry`` is stale and delete it if so.

        Failures are reported through the returned outcome and never raised.
        """

        if not await self.should_delete(entry):
            return Outcome.KEPT

        try:
            await self._catalog.delete_media(entry.id)
        except SweepError as exc:
            logger.warning(
                "Failed to delete %s from %s: %s",
                entry.describe(),
                self._catalog.name,
                exc,
            )
            return Outcome.DELETE_FAILED

        logger.info("Deleted %s from %s", entry.describe(), self._catalog.name)
        return Outcome.DELETED

    async def reconcile_page(self, entries: list[CatalogEntry]) -> list[Outcome]:
        """Reconcile every entry concurrently and wait for all of them."""

        results = await asyncio.gather(
            *(self.reconcile_entry(entry) for entry in entries),
            return_exceptions=True,
        )
        outcomes: list[Outcome] = []
        for entry, result in zip(entries, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.error(
                    "Unexpected failure reconciling %s on %s",
                    entry.describe(),
                    self._catalog.name,
                    exc_info=result,
                )
                outcomes.append(Outcome.DELETE_FAILED)
                continue
            outcomes.append(result)
        return outcomes

    async def scan(self) -> ScanReport:
        """Walk the catalog page by page until the last page has been handled.

        A page that produced at least one deletion is fetched again at the
        same index, since the deletions shift later entries into its window.
        Page fetch errors propagate to the caller.
        """

        report = ScanReport(target=self._catalog.name)
        page_index = 1

        while True:
            if report.pages_fetched >= self._max_page_fetches:
                raise ScanLimitError(
                    f"{self._catalog.name} scan stopped after "
                    f"{report.pages_fetched} page fetches"
                )

            page = await self._catalog.fetch_page(page_index, page_size=self._page_size)
            outcomes = await self.reconcile_page(page.entries)
            report.record(page.entries, outcomes)

            if page.is_last:
                break
            if Outcome.DELETED not in outcomes:
                page_index += 1

        return report
