"""Models describing request-service payloads and sweep targets."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MediaKind = Literal["tv", "movie"]


class CatalogEntry(BaseModel):
    """A single media record listed by a request service."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    external_ref: int | None = Field(default=None, alias="externalServiceId")
    kind: MediaKind = Field(alias="mediaType")

    def describe(self) -> str:
        """Return a short human-friendly label for log lines."""

        label = "series" if self.kind == "tv" else "movie"
        return f"{label} media {self.id}"


class PageInfo(BaseModel):
    page: int
    pages: int


class CatalogPage(BaseModel):
    """One page of a request-service media listing."""

    model_config = ConfigDict(populate_by_name=True)

    page_info: PageInfo = Field(alias="pageInfo")
    entries: list[CatalogEntry] = Field(default_factory=list, alias="results")

    @property
    def is_last(self) -> bool:
        return self.page_info.page >= self.page_info.pages


@dataclass(frozen=True, slots=True)
class CatalogTarget:
    """A request service instance whose catalog is swept."""

    name: str
    base_url: str
    api_key: str


@dataclass(frozen=True, slots=True)
class LibraryTarget:
    base_url: str
    api_key: str


@dataclass(frozen=True, slots=True)
class LibraryTargets:
    """The episodic (Sonarr) and film (Radarr) library services."""

    episodic: LibraryTarget
    film: LibraryTarget

    def for_kind(self, kind: MediaKind) -> LibraryTarget:
        return self.episodic if kind == "tv" else self.film


class Outcome(str, Enum):
    """Result of reconciling one catalog entry."""

    KEPT = "kept"
    DELETED = "deleted"
    DELETE_FAILED = "delete_failed"


@dataclass(slots=True)
class ScanReport:
    """Tallies gathered while sweeping a single request service.

    Refetching a page re-reconciles entries that were already seen, so each
    entry id is counted once, under its most recent outcome.
    """

    target: str
    pages_fetched: int = 0
    outcomes: dict[int, Outcome] = field(default_factory=dict)

    def record(self, entries: list[CatalogEntry], outcomes: list[Outcome]) -> None:
        self.pages_fetched += 1
        for entry, outcome in zip(entries, outcomes):
            self.outcomes[entry.id] = outcome

    def _count(self, outcome: Outcome) -> int:
        return sum(1 for value in self.outcomes.values() if value is outcome)

    @property
    def kept(self) -> int:
        return self._count(Outcome.KEPT)

    @property
    def deleted(self) -> int:
        return self._count(Outcome.DELETED)

    @property
    def delete_failed(self) -> int:
        return self._count(Outcome.DELETE_FAILED)
