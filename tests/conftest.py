"""Pytest configuration and fixtures."""

from collections.abc import Callable
from typing import Any

import pytest

from scenewright.config import ScenewrightSettings, reset_logging, set_settings
from scenewright.models import (
    Archetype,
    ArchetypeBeat,
    Character,
    JourneyPhase,
    Scene,
    SceneHeadingType,
    Screenplay,
    Stage,
    StructuralRole,
    Subplot,
    SubplotBeat,
    SubplotType,
    TimeOfDay,
    Treatment,
    TurningPoint,
    TurningPointType,
)
from scenewright.store import InMemoryScreenplayStore
from tests.builders import SYNOPSIS, words

# Import CLI fixtures to make them available globally
from tests.cli_fixtures import clean_runner, cli_invoke  # noqa: F401


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point every test at a private database and disable font downloads."""
    for var in ("SCENEWRIGHT_LOG_LEVEL", "SCENEWRIGHT_DEBUG", "SCENEWRIGHT_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    db_path = tmp_path / "test_scenewright.db"
    monkeypatch.setenv("SCENEWRIGHT_DATABASE_PATH", str(db_path))
    monkeypatch.setenv("SCENEWRIGHT_EMBED_FONTS", "false")
    monkeypatch.chdir(tmp_path)

    settings = ScenewrightSettings(database_path=db_path, embed_fonts=False)
    set_settings(settings)

    yield settings

    reset_logging()


@pytest.fixture
def store() -> InMemoryScreenplayStore:
    """Fresh in-memory store."""
    return InMemoryScreenplayStore()


@pytest.fixture
def make_scene() -> Callable[..., Scene]:
    """Factory for scenes with complete metadata."""

    def factory(scene_id: int, order: int | None = None, **fields: Any) -> Scene:
        data: dict[str, Any] = {
            "id": scene_id,
            "order": order if order is not None else scene_id,
            "heading": SceneHeadingType.INT,
            "location": "WAREHOUSE",
            "time_of_day": TimeOfDay.NIGHT,
            "synopsis": "The crew cases the vault while the guard sleeps.",
        }
        data.update(fields)
        return Scene(**data)

    return factory


def turning_points() -> list[TurningPoint]:
    return [
        TurningPoint(
            id=i,
            type=tp_type,
            order=i,
            summary=f"Turning point {i} changes everything for the crew.",
        )
        for i, tp_type in enumerate(TurningPointType, start=1)
    ]


def cast() -> list[Character]:
    return [
        Character(
            id=1,
            name="Rosa",
            structural_role=StructuralRole.PROTAGONIST,
            goal="Pay off her brother's debt",
            need="Trust someone again",
            flaw="Works alone",
            archetype_timeline=[
                ArchetypeBeat(phase=JourneyPhase.ACT_I, archetype=Archetype.HERO)
            ],
        ),
        Character(
            id=2,
            name="Vance",
            structural_role=StructuralRole.ANTAGONIST,
            archetype_timeline=[
                ArchetypeBeat(phase=JourneyPhase.ACT_III, archetype=Archetype.SHADOW)
            ],
        ),
        Character(
            id=3,
            name="Teo",
            structural_role=StructuralRole.SUPPORTING,
            archetype_timeline=[
                ArchetypeBeat(phase=JourneyPhase.ACT_II, archetype=Archetype.MENTOR)
            ],
        ),
    ]


def subplots() -> list[Subplot]:
    return [
        Subplot(
            id=1,
            title="Rosa and Teo",
            type=SubplotType.RELATIONSHIP,
            characters_involved=[1, 3],
            linked_turning_points=[1],
            beats=[SubplotBeat(order=1, summary="Teo asks Rosa to let him in.")],
        )
    ]


def drafted_scenes() -> list[Scene]:
    scenes = []
    for i in range(1, 6):
        scenes.append(
            Scene(
                id=i,
                order=i,
                is_key=True,
                linked_turning_point=i,
                heading=SceneHeadingType.INT,
                location="WAREHOUSE",
                time_of_day=TimeOfDay.NIGHT,
                synopsis=(
                    f"Key scene {i}: the crew faces a decision that moves the heist."
                ),
                formatted_text=(
                    f"INT. WAREHOUSE - NIGHT\n\nRosa studies the vault door "
                    f"for the {i} time, counting the tumblers under her breath."
                ),
            )
        )
    return scenes


@pytest.fixture
def complete_screenplay() -> Screenplay:
    """A screenplay whose content satisfies every workflow guard."""
    return Screenplay(
        id=1,
        title="The Last Job",
        synopsis=SYNOPSIS,
        treatment=Treatment(act1=words(60), act2=words(80), act3=words(60)),
        turning_points=turning_points(),
        characters=cast(),
        subplots=subplots(),
        scenes=drafted_scenes(),
        current_state=Stage.S1_SYNOPSIS,
    )
