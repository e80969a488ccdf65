"""Error types raised while sweeping request catalogs."""

from __future__ import annotations


class SweepError(RuntimeError):
    """Base class for all SeerrSweep failures."""


class ConfigError(SweepError):
    """Raised when required configuration values are missing or malformed."""


class TransportError(SweepError):
    """Raised when a service could not be reached at all."""


class ApiError(SweepError):
    """Raised when a service answered with a non-success status."""

    def __init__(self, status: int, url: str) -> None:
        super().__init__(f"Request to {url} failed with status: {status}")
        self.status = status
        self.url = url


class DecodeError(SweepError):
    """Raised when a response body does not have the expected shape."""


class ScanLimitError(SweepError):
    """Raised when a catalog scan exceeds the configured page fetch budget."""
