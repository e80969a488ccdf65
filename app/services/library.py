"""Existence checks against the Sonarr and Radarr library services."""

from __future__ import annotations

import logging
from typing import Literal

import httpx

from ..models import LibraryTargets, MediaKind
from .request_service import HEADER_API_KEY

logger = logging.getLogger(__name__)

FailurePolicy = Literal["delete", "keep"]


class LibraryClient:
    """Answers whether a library service still holds an item."""

    _PATHS: dict[str, str] = {"tv": "/series/{ref}", "movie": "/movie/{ref}"}

    def __init__(
        self,
        targets: LibraryTargets,
        http_client: httpx.AsyncClient,
        *,
        failure_policy: FailurePolicy = "delete",
    ) -> None:
        self._targets = targets
        self._client = http_client
        self._failure_policy = failure_policy

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._failure_policy

    async def exists(self, kind: MediaKind, external_ref: int) -> bool:
        """Return ``True`` only when the library answers with a success status.

        When the library cannot be reached the answer depends on the failure
        policy: ``"delete"`` reports the item as missing, ``"keep"`` reports it
        as present.
        """

        target = self._targets.for_kind(kind)
        url = f"{target.base_url}{self._PATHS[kind].format(ref=external_ref)}"
        try:
            response = await self._client.get(
                url,
                headers={HEADER_API_KEY: target.api_key},
                follow_redirects=True,
            )
        except httpx.HTTPError as exc:
            logger.warning(
                "Library lookup failed for %s %s via %s: %s",
                kind,
                external_ref,
                target.base_url,
                exc,
            )
            return self._failure_policy == "keep"

        if not response.is_success:
            logger.debug(
                "Library lookup for %s %s returned status %s",
                kind,
                external_ref,
                response.status_code,
            )
            return False
        return True
