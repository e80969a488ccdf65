"""Compatibility shim exposing the sweep entry points."""

from __future__ import annotations

from app.main import main, run

__all__ = ["main", "run"]
