"""Client for Overseerr/Jellyseerr-compatible request services."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from ..errors import ApiError, DecodeError, TransportError
from ..models import CatalogPage, CatalogTarget

logger = logging.getLogger(__name__)

HEADER_API_KEY = "x-api-key"
DEFAULT_PAGE_SIZE = 20


class RequestServiceClient:
    """Thin wrapper around the request service media endpoints."""

    def __init__(self, target: CatalogTarget, http_client: httpx.AsyncClient):
        self._target = target
        self._client = http_client

    @property
    def name(self) -> str:
        return self._target.name

    def _headers(self) -> dict[str, str]:
        return {HEADER_API_KEY: self._target.api_key}

    async def fetch_page(
        self, page_index: int, *, page_size: int = DEFAULT_PAGE_SIZE
    ) -> CatalogPage:
        """Fetch one page of the media listing.

        ``page_index`` is 1-based; the offset sent to the service is
        ``(page_index - 1) * page_size``.
        """

        url = f"{self._target.base_url}/media"
        params = {"take": page_size, "skip": (page_index - 1) * page_size}
        logger.debug("Fetching %s media page %s", self.name, page_index)
        try:
            response = await self._client.get(
                url, headers=self._headers(), params=params, follow_redirects=True
            )
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Could not reach {self.name} at {url}: {exc}"
            ) from exc

        if not response.is_success:
            raise ApiError(response.status_code, str(response.url))

        try:
            return CatalogPage.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise DecodeError(
                f"Unexpected media listing from {self.name} (page {page_index})"
            ) from exc

    async def delete_media(self, media_id: int) -> None:
        """Remove a media record; raises on any failure."""

        url = f"{self._target.base_url}/media/{media_id}"
        try:
            response = await self._client.delete(
                url, headers=self._headers(), follow_redirects=True
            )
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Could not reach {self.name} at {url}: {exc}"
            ) from exc
        if not response.is_success:
            raise ApiError(response.status_code, url)
