"""SQLite-backed document store.

Each screenplay aggregate is one row holding the whole document as JSON.
Blocking sqlite3 calls run in a worker thread.
"""

from __future__ import annotations

import asyncio
import sqlite3
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from scenewright.config import ScenewrightSettings, get_logger
from scenewright.exceptions import ScreenplayNotFoundError, StoreError
from scenewright.models import Screenplay
from scenewright.store.base import ScreenplayStore

logger = get_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS screenplays (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    current_state TEXT NOT NULL,
    document TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""


class SQLiteScreenplayStore(ScreenplayStore):
    """Persist screenplays in a single SQLite table."""

    def __init__(
        self,
        settings: ScenewrightSettings | None = None,
        db_path: Path | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            settings: Settings providing the database path and timeout
            db_path: Database path override (defaults to settings.database_path)
        """
        from scenewright.config import get_settings

        self.settings = settings or get_settings()
        self.db_path = Path(db_path or self.settings.database_path)
        self._lock = threading.Lock()
        self._conn: sqlite3.Connection | None = None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(
                    str(self.db_path),
                    timeout=self.settings.database_timeout,
                    check_same_thread=False,
                )
                conn.row_factory = sqlite3.Row
                conn.execute(SCHEMA)
                conn.commit()
            except (OSError, sqlite3.Error) as e:
                raise StoreError(
                    message=f"Failed to open database: {e}",
                    hint="Check database path and permissions",
                    details={"db_path": str(self.db_path)},
                ) from e
            logger.debug(f"Opened screenplay database at {self.db_path}")
            self._conn = conn
        return self._conn

    def _run(self, sql: str, params: tuple[Any, ...] = ()) -> sqlite3.Cursor:
        with self._lock:
            conn = self._connection()
            try:
                with conn:
                    return conn.execute(sql, params)
            except sqlite3.Error as e:
                raise StoreError(
                    message=f"Database operation failed: {e}",
                    details={"db_path": str(self.db_path)},
                ) from e

    def _insert_sync(self, fields: Mapping[str, Any]) -> Screenplay:
        with self._lock:
            conn = self._connection()
            try:
                with conn:
                    cursor = conn.execute(
                        "INSERT INTO screenplays "
                        "(title, current_state, document, updated_at) "
                        "VALUES (?, '', '{}', '')",
                        (fields.get("title", ""),),
                    )
                    screenplay = Screenplay.model_validate(
                        {**fields, "id": cursor.lastrowid}
                    )
                    conn.execute(
                        "UPDATE screenplays SET current_state = ?, document = ?, "
                        "updated_at = ? WHERE id = ?",
                        self._row_values(screenplay),
                    )
            except sqlite3.Error as e:
                raise StoreError(
                    message=f"Failed to insert screenplay: {e}",
                    details={"db_path": str(self.db_path)},
                ) from e
        return screenplay

    @staticmethod
    def _row_values(screenplay: Screenplay) -> tuple[Any, ...]:
        return (
            screenplay.current_state.value,
            screenplay.model_dump_json(),
            screenplay.updated_at.isoformat(),
            screenplay.id,
        )

    def _fetch(self, sql: str, params: tuple[Any, ...] = ()) -> list[sqlite3.Row]:
        with self._lock:
            conn = self._connection()
            try:
                return conn.execute(sql, params).fetchall()
            except sqlite3.Error as e:
                raise StoreError(
                    message=f"Database query failed: {e}",
                    details={"db_path": str(self.db_path)},
                ) from e

    async def _load(self, screenplay_id: int) -> Screenplay:
        rows = await asyncio.to_thread(
            self._fetch,
            "SELECT document FROM screenplays WHERE id = ?",
            (screenplay_id,),
        )
        if not rows:
            raise ScreenplayNotFoundError(screenplay_id)
        return Screenplay.model_validate_json(rows[0]["document"])

    async def _save(self, screenplay: Screenplay) -> None:
        cursor = await asyncio.to_thread(
            self._run,
            "UPDATE screenplays SET current_state = ?, document = ?, "
            "updated_at = ? WHERE id = ?",
            self._row_values(screenplay),
        )
        if cursor.rowcount == 0:
            raise ScreenplayNotFoundError(screenplay.id)

    async def _insert(self, fields: Mapping[str, Any]) -> Screenplay:
        return await asyncio.to_thread(self._insert_sync, fields)

    async def list_screenplays(self) -> list[Screenplay]:
        rows = await asyncio.to_thread(
            self._fetch, "SELECT document FROM screenplays ORDER BY id"
        )
        return [Screenplay.model_validate_json(row["document"]) for row in rows]

    async def close(self) -> None:
        """Close the underlying connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
