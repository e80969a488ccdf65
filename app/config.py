"""Application configuration models."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .models import CatalogTarget, LibraryTarget, LibraryTargets

# Request services in the order they are swept.
REQUEST_SERVICE_NAMES: tuple[str, ...] = ("Overseerr", "Jellyseerr")


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    overseerr_url: str | None = Field(default=None, alias="OVERSEERR_URL")
    overseerr_key: str | None = Field(default=None, alias="OVERSEERR_KEY")
    jellyseerr_url: str | None = Field(default=None, alias="JELLYSEERR_URL")
    jellyseerr_key: str | None = Field(default=None, alias="JELLYSEERR_KEY")

    sonarr_url: str = Field(alias="SONARR_URL")
    sonarr_key: str = Field(alias="SONARR_KEY")
    radarr_url: str = Field(alias="RADARR_URL")
    radarr_key: str = Field(alias="RADARR_KEY")

    page_size: int = Field(default=20, alias="PAGE_SIZE", ge=1, le=500)
    max_page_fetches: int = Field(
        default=10_000, alias="MAX_PAGE_FETCHES", ge=1
    )
    existence_failure_policy: Literal["delete", "keep"] = Field(
        default="delete", alias="EXISTENCE_FAILURE_POLICY"
    )
    http_timeout_seconds: float = Field(default=20.0, alias="HTTP_TIMEOUT", gt=0)
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator(
        "overseerr_url",
        "overseerr_key",
        "jellyseerr_url",
        "jellyseerr_key",
        "sonarr_url",
        "sonarr_key",
        "radarr_url",
        "radarr_key",
        mode="before",
    )
    @classmethod
    def _strip_blank(cls, value: object) -> object:
        """Treat blank strings as missing values."""

        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("overseerr_url", "jellyseerr_url", "sonarr_url", "radarr_url")
    @classmethod
    def _normalize_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError("Service URLs must start with http:// or https://")
        return value.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_log_level(cls, value: object) -> str:
        level = str(value or "INFO").strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError("LOG_LEVEL must be a standard logging level name")
        return level

    @model_validator(mode="after")
    def _require_complete_pairs(self) -> "Settings":
        """A request service must be configured with both its URL and key."""

        for name in REQUEST_SERVICE_NAMES:
            prefix = name.lower()
            url = getattr(self, f"{prefix}_url")
            key = getattr(self, f"{prefix}_key")
            if (url is None) != (key is None):
                raise ValueError(
                    f"{name.upper()}_URL and {name.upper()}_KEY must be set together"
                )
        return self

    @property
    def catalog_targets(self) -> tuple[CatalogTarget, ...]:
        """Return the configured request services in sweep order."""

        targets: list[CatalogTarget] = []
        for name in REQUEST_SERVICE_NAMES:
            prefix = name.lower()
            url = getattr(self, f"{prefix}_url")
            key = getattr(self, f"{prefix}_key")
            if url and key:
                targets.append(CatalogTarget(name=name, base_url=url, api_key=key))
        return tuple(targets)

    @property
    def library_targets(self) -> LibraryTargets:
        return LibraryTargets(
            episodic=LibraryTarget(base_url=self.sonarr_url, api_key=self.sonarr_key),
            film=LibraryTarget(base_url=self.radarr_url, api_key=self.radarr_key),
        )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


def load_settings(**overrides: object) -> Settings:
    """Build settings, converting validation failures into ``ConfigError``."""

    try:
        return Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
