"""In-memory document store, one instance per session or test."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from scenewright.exceptions import ScreenplayNotFoundError
from scenewright.models import Screenplay
from scenewright.store.base import ScreenplayStore


class InMemoryScreenplayStore(ScreenplayStore):
    """Keep screenplays in a dict owned by the store instance."""

    def __init__(self) -> None:
        self._screenplays: dict[int, Screenplay] = {}

    async def _load(self, screenplay_id: int) -> Screenplay:
        try:
            return self._screenplays[screenplay_id].model_copy(deep=True)
        except KeyError:
            raise ScreenplayNotFoundError(screenplay_id) from None

    async def _save(self, screenplay: Screenplay) -> None:
        if screenplay.id not in self._screenplays:
            raise ScreenplayNotFoundError(screenplay.id)
        self._screenplays[screenplay.id] = screenplay.model_copy(deep=True)

    async def _insert(self, fields: Mapping[str, Any]) -> Screenplay:
        screenplay_id = max(self._screenplays, default=0) + 1
        screenplay = Screenplay.model_validate({**fields, "id": screenplay_id})
        self._screenplays[screenplay_id] = screenplay
        return screenplay.model_copy(deep=True)

    async def list_screenplays(self) -> list[Screenplay]:
        return [
            self._screenplays[key].model_copy(deep=True)
            for key in sorted(self._screenplays)
        ]
