"""Pytest configuration and test helpers."""

from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import Any

import httpx
import pytest


# Ensure the application package is importable when running tests without an
# editable install. This mirrors the expected runtime layout where ``app`` sits
# at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

SERVICE_ENV: dict[str, str] = {
    "OVERSEERR_URL": "https://overseerr.test/api/v1",
    "OVERSEERR_KEY": "overseerr-key",
    "JELLYSEERR_URL": "https://jellyseerr.test/api/v1",
    "JELLYSEERR_KEY": "jellyseerr-key",
    "SONARR_URL": "https://sonarr.test/api/v3",
    "SONARR_KEY": "sonarr-key",
    "RADARR_URL": "https://radarr.test/api/v3",
    "RADARR_KEY": "radarr-key",
}


class FakeServices:
    """In-memory stand-in for the request and library services."""

    def __init__(self) -> None:
        self.catalogs: dict[str, list[dict[str, Any]]] = {
            "overseerr.test": [],
            "jellyseerr.test": [],
        }
        self.series: set[int] = set()
        self.movies: set[int] = set()
        self.requests: list[httpx.Request] = []
        self.listing_status: dict[str, int] = {}
        self.listing_body: dict[str, Any] = {}
        self.delete_status: dict[tuple[str, int], int] = {}
        self.library_unreachable = False
        self.sticky_deletes = False

    def add(
        self, host: str, media_id: int, ref: int | None = None, kind: str = "movie"
    ) -> None:
        """Append a media record to a catalog, shaped as it appears on the wire."""

        record: dict[str, Any] = {"id": media_id, "mediaType": kind, "status": 5}
        if ref is not None:
            record["externalServiceId"] = ref
        self.catalogs[host].append(record)

    def listing_skips(self, host: str) -> list[int]:
        return [
            int(request.url.params["skip"])
            for request in self.requests
            if request.url.host == host and request.method == "GET"
        ]

    def deleted_ids(self, host: str) -> list[int]:
        return [
            int(request.url.path.rsplit("/", 1)[-1])
            for request in self.requests
            if request.url.host == host and request.method == "DELETE"
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        if host in self.catalogs:
            return self._catalog(host, request)
        if host in {"sonarr.test", "radarr.test"}:
            if self.library_unreachable:
                raise httpx.ConnectError("library offline", request=request)
            held = self.series if host == "sonarr.test" else self.movies
            ref = int(request.url.path.rsplit("/", 1)[-1])
            if ref in held:
                return httpx.Response(200, json={"id": ref})
            return httpx.Response(404, json={"message": "NotFound"})
        return httpx.Response(404)

    def _catalog(self, host: str, request: httpx.Request) -> httpx.Response:
        entries = self.catalogs[host]
        if request.method == "GET":
            if host in self.listing_status:
                return httpx.Response(self.listing_status[host], json={"message": "boom"})
            if host in self.listing_body:
                return httpx.Response(200, json=self.listing_body[host])
            take = int(request.url.params["take"])
            skip = int(request.url.params["skip"])
            return httpx.Response(
                200,
                json={
                    "pageInfo": {
                        "pages": math.ceil(len(entries) / take),
                        "pageSize": take,
                        "results": len(entries),
                        "page": math.ceil(skip / take) + 1,
                    },
                    "results": entries[skip : skip + take],
                },
            )

        media_id = int(request.url.path.rsplit("/", 1)[-1])
        status = self.delete_status.get((host, media_id))
        if status is not None:
            return httpx.Response(status, json={"message": "failed"})
        if not self.sticky_deletes:
            entries[:] = [entry for entry in entries if entry["id"] != media_id]
        return httpx.Response(204)


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio without requiring trio."""

    return "asyncio"


@pytest.fixture
def services() -> FakeServices:
    return FakeServices()


@pytest.fixture
def service_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> dict[str, str]:
    """Export a complete service configuration and isolate from any ``.env``."""

    monkeypatch.chdir(tmp_path)
    for key, value in SERVICE_ENV.items():
        monkeypatch.setenv(key, value)
    return dict(SERVICE_ENV)
