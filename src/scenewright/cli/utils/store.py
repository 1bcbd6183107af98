"""Store access for CLI commands."""

from __future__ import annotations

from scenewright.config import ScenewrightSettings, get_settings
from scenewright.store import SQLiteScreenplayStore


def open_store(settings: ScenewrightSettings | None = None) -> SQLiteScreenplayStore:
    """SQLite store at the configured database path."""
    return SQLiteScreenplayStore(settings or get_settings())
