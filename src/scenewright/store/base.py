"""Document store interface and the CRUD logic shared by every backend.

Backends implement three primitives (``_load``, ``_save``, ``_insert``) that
move whole screenplay aggregates. Everything else, including id assignment,
scene renumbering and cascade deletes, lives here so all backends behave
identically.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any, TypeVar

from scenewright.config import get_logger
from scenewright.exceptions import EntityNotFoundError, StoreError
from scenewright.models import (
    Character,
    Relationship,
    Scene,
    Screenplay,
    Subplot,
    utc_now,
)
from scenewright.utils.screenplay import ScreenplayUtils

logger = get_logger(__name__)

EntityT = TypeVar("EntityT", Character, Relationship, Subplot, Scene)

# Fields owned by the store, never patched by callers
PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at"})


class Direction(str, Enum):
    """Direction for moving a scene by one position."""

    UP = "UP"
    DOWN = "DOWN"


def _next_id(entities: Iterable[Any]) -> int:
    return max((entity.id for entity in entities), default=0) + 1


def _renumber(scenes: Iterable[Scene]) -> list[Scene]:
    return [
        scene.model_copy(update={"order": i})
        for i, scene in enumerate(scenes, start=1)
    ]


class ScreenplayStore(ABC):
    """Async document store holding screenplay aggregates.

    Every returned object is a copy. Mutating it never changes stored state;
    persist changes through ``update`` or the collection operations.
    """

    @abstractmethod
    async def _load(self, screenplay_id: int) -> Screenplay:
        """Load a stored aggregate.

        Raises:
            ScreenplayNotFoundError: If no screenplay has this id
        """

    @abstractmethod
    async def _save(self, screenplay: Screenplay) -> None:
        """Persist an existing aggregate, replacing the stored version."""

    @abstractmethod
    async def _insert(self, fields: Mapping[str, Any]) -> Screenplay:
        """Store a new aggregate and return it with its assigned id."""

    @abstractmethod
    async def list_screenplays(self) -> list[Screenplay]:
        """All stored screenplays ordered by id."""

    async def close(self) -> None:  # noqa: B027
        """Release backend resources."""

    async def __aenter__(self) -> ScreenplayStore:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def create(self, title: str, **fields: Any) -> Screenplay:
        """Create a screenplay at the first workflow stage.

        Args:
            title: Working title
            **fields: Any other screenplay fields

        Returns:
            The stored screenplay
        """
        screenplay = await self._insert({**fields, "title": title})
        logger.info("Created screenplay", screenplay_id=screenplay.id, title=title)
        return screenplay

    async def get(self, screenplay_id: int) -> Screenplay:
        """Fetch a screenplay by id.

        Raises:
            ScreenplayNotFoundError: If no screenplay has this id
        """
        return await self._load(screenplay_id)

    async def update(
        self, screenplay_id: int, changes: Mapping[str, Any]
    ) -> Screenplay:
        """Shallow-merge ``changes`` over the stored aggregate.

        Args:
            screenplay_id: Screenplay to patch
            changes: Top-level fields to replace

        Returns:
            The updated screenplay, with ``updated_at`` stamped

        Raises:
            ScreenplayNotFoundError: If no screenplay has this id
            StoreError: If ``changes`` names an unknown or store-owned field
        """
        invalid = sorted(
            key
            for key in changes
            if key in PROTECTED_FIELDS or key not in Screenplay.model_fields
        )
        if invalid:
            raise StoreError(
                message=f"Cannot update screenplay fields: {', '.join(invalid)}",
                hint="Only existing, caller-owned screenplay fields can be updated",
                details={"screenplay_id": screenplay_id, "fields": invalid},
            )

        current = await self._load(screenplay_id)
        merged = Screenplay.model_validate(
            {**current.model_dump(), **dict(changes), "updated_at": utc_now()}
        )
        await self._save(merged)
        logger.debug(
            "Updated screenplay",
            screenplay_id=screenplay_id,
            fields=sorted(changes),
        )
        return merged

    async def _mutate(
        self, screenplay_id: int, change: Callable[[Screenplay], None]
    ) -> Screenplay:
        screenplay = await self._load(screenplay_id)
        change(screenplay)
        screenplay.updated_at = utc_now()
        await self._save(screenplay)
        return screenplay

    async def _add(
        self,
        screenplay_id: int,
        collection: str,
        model: type[EntityT],
        fields: Mapping[str, Any],
        **overrides: Any,
    ) -> EntityT:
        created: list[EntityT] = []

        def change(screenplay: Screenplay) -> None:
            entities = getattr(screenplay, collection)
            data = {k: v for k, v in fields.items() if k != "id"}
            entity = model.model_validate(
                {**data, **overrides, "id": _next_id(entities)}
            )
            created.append(entity)
            setattr(screenplay, collection, [*entities, entity])

        await self._mutate(screenplay_id, change)
        logger.debug(
            f"Added {collection} entry",
            screenplay_id=screenplay_id,
            entity_id=created[0].id,
        )
        return created[0].model_copy(deep=True)

    async def _replace(
        self, screenplay_id: int, collection: str, entity: EntityT
    ) -> EntityT:
        def change(screenplay: Screenplay) -> None:
            entities = getattr(screenplay, collection)
            if not any(existing.id == entity.id for existing in entities):
                raise EntityNotFoundError(collection, entity.id, screenplay_id)
            replaced = [
                entity if existing.id == entity.id else existing
                for existing in entities
            ]
            setattr(screenplay, collection, replaced)

        await self._mutate(screenplay_id, change)
        return entity.model_copy(deep=True)

    async def _remove(
        self,
        screenplay_id: int,
        collection: str,
        entity_id: int,
        cascade: Callable[[Screenplay], None] | None = None,
    ) -> None:
        def change(screenplay: Screenplay) -> None:
            entities = getattr(screenplay, collection)
            kept = [entity for entity in entities if entity.id != entity_id]
            if len(kept) == len(entities):
                raise EntityNotFoundError(collection, entity_id, screenplay_id)
            setattr(screenplay, collection, kept)
            if cascade is not None:
                cascade(screenplay)

        await self._mutate(screenplay_id, change)
        logger.debug(
            f"Removed {collection} entry",
            screenplay_id=screenplay_id,
            entity_id=entity_id,
        )

    # Characters

    async def add_character(
        self, screenplay_id: int, fields: Mapping[str, Any]
    ) -> Character:
        return await self._add(screenplay_id, "characters", Character, fields)

    async def update_character(
        self, screenplay_id: int, character: Character
    ) -> Character:
        return await self._replace(screenplay_id, "characters", character)

    async def remove_character(self, screenplay_id: int, character_id: int) -> None:
        """Remove a character and every reference to it.

        Relationships touching the character are deleted and the id is dropped
        from each subplot's ``characters_involved``.
        """

        def cascade(screenplay: Screenplay) -> None:
            screenplay.relationships = [
                r
                for r in screenplay.relationships
                if character_id not in (r.a_id, r.b_id)
            ]
            screenplay.subplots = [
                s.model_copy(
                    update={
                        "characters_involved": [
                            cid for cid in s.characters_involved if cid != character_id
                        ]
                    }
                )
                for s in screenplay.subplots
            ]

        await self._remove(screenplay_id, "characters", character_id, cascade)

    # Relationships

    async def add_relationship(
        self, screenplay_id: int, fields: Mapping[str, Any]
    ) -> Relationship:
        return await self._add(screenplay_id, "relationships", Relationship, fields)

    async def update_relationship(
        self, screenplay_id: int, relationship: Relationship
    ) -> Relationship:
        return await self._replace(screenplay_id, "relationships", relationship)

    async def remove_relationship(
        self, screenplay_id: int, relationship_id: int
    ) -> None:
        await self._remove(screenplay_id, "relationships", relationship_id)

    # Subplots

    async def add_subplot(
        self, screenplay_id: int, fields: Mapping[str, Any]
    ) -> Subplot:
        return await self._add(screenplay_id, "subplots", Subplot, fields)

    async def update_subplot(self, screenplay_id: int, subplot: Subplot) -> Subplot:
        return await self._replace(screenplay_id, "subplots", subplot)

    async def remove_subplot(self, screenplay_id: int, subplot_id: int) -> None:
        await self._remove(screenplay_id, "subplots", subplot_id)

    # Scenes

    async def add_scene(self, screenplay_id: int, fields: Mapping[str, Any]) -> Scene:
        """Append a scene; its ``order`` is always the new scene count."""
        screenplay = await self._load(screenplay_id)
        return await self._add(
            screenplay_id,
            "scenes",
            Scene,
            fields,
            order=len(screenplay.scenes) + 1,
        )

    async def update_scene(self, screenplay_id: int, scene: Scene) -> Scene:
        return await self._replace(screenplay_id, "scenes", scene)

    async def remove_scene(self, screenplay_id: int, scene_id: int) -> None:
        """Remove a scene and renumber the rest contiguously from 1."""

        def cascade(screenplay: Screenplay) -> None:
            screenplay.scenes = _renumber(
                ScreenplayUtils.sorted_scenes(screenplay.scenes)
            )

        await self._remove(screenplay_id, "scenes", scene_id, cascade)

    async def reorder_scenes(
        self, screenplay_id: int, ordered_ids: Iterable[int]
    ) -> list[Scene]:
        """Reorder scenes by id and renumber them contiguously.

        Listed scenes take the position of their index in ``ordered_ids``;
        unlisted scenes keep their previous ``order`` as the sort key.

        Returns:
            Scenes in their new order
        """
        positions = {scene_id: i for i, scene_id in enumerate(ordered_ids, start=1)}

        def change(screenplay: Screenplay) -> None:
            ranked = sorted(
                screenplay.scenes,
                key=lambda scene: positions.get(scene.id, scene.order),
            )
            screenplay.scenes = _renumber(ranked)

        screenplay = await self._mutate(screenplay_id, change)
        return [scene.model_copy(deep=True) for scene in screenplay.scenes]

    async def move_scene(
        self, screenplay_id: int, scene_id: int, direction: Direction | str
    ) -> list[Scene]:
        """Swap a scene with its neighbour and renumber.

        Moving past either end, or an unknown ``scene_id``, leaves the scenes
        untouched.

        Returns:
            Scenes sorted by ``order``
        """
        step = -1 if Direction(direction) is Direction.UP else 1
        screenplay = await self._load(screenplay_id)
        scenes = ScreenplayUtils.sorted_scenes(screenplay.scenes)
        index = next((i for i, s in enumerate(scenes) if s.id == scene_id), None)
        if index is None or not 0 <= index + step < len(scenes):
            return scenes

        scenes[index], scenes[index + step] = scenes[index + step], scenes[index]
        screenplay.scenes = _renumber(scenes)
        screenplay.updated_at = utc_now()
        await self._save(screenplay)
        return [scene.model_copy(deep=True) for scene in screenplay.scenes]
