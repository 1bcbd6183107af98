"""Content guards gating each forward workflow transition.

Every guard is a pure predicate over a screenplay snapshot plus a fixed hint
shown when it fails. Thresholds are inclusive. Lengths are measured on
trimmed text and word counts split on whitespace.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from scenewright.models import (
    Archetype,
    Scene,
    Screenplay,
    Stage,
    StructuralRole,
    SubplotType,
)
from scenewright.utils.screenplay import ScreenplayUtils

SYNOPSIS_MIN_CHARS = 40
ACT_MIN_WORDS = (60, 80, 60)
TURNING_POINT_COUNT = 5
TURNING_POINT_SUMMARY_MIN_CHARS = 15
KEY_SCENE_SYNOPSIS_MIN_CHARS = 40
SCENE_SYNOPSIS_MIN_CHARS = 30
SCENE_LOCATION_MIN_CHARS = 3
KEY_DRAFT_MIN_CHARS = 60
DRAFT_MIN_CHARS = 40
DRAFTED_RATIO = 0.6

ANTAGONIST_ROLES = frozenset(
    {StructuralRole.ANTAGONIST, StructuralRole.ANTAGONIST_LIEUTENANT}
)
ANCHOR_SUBPLOT_TYPES = frozenset(
    {
        SubplotType.RELATIONSHIP,
        SubplotType.INTERNAL_CONFLICT,
        SubplotType.ANTAGONIST_POV,
    }
)

_length = ScreenplayUtils.trimmed_length
_words = ScreenplayUtils.word_count


@dataclass(frozen=True)
class Guard:
    """Predicate for one forward edge and the hint shown when it fails."""

    check: Callable[[Screenplay], bool]
    hint: str

    def __call__(self, screenplay: Screenplay) -> bool:
        return self.check(screenplay)


def synopsis_ready(screenplay: Screenplay) -> bool:
    return _length(screenplay.synopsis) >= SYNOPSIS_MIN_CHARS


def treatment_ready(screenplay: Screenplay) -> bool:
    treatment = screenplay.treatment
    acts = (treatment.act1, treatment.act2, treatment.act3)
    return all(
        _words(text) >= minimum
        for text, minimum in zip(acts, ACT_MIN_WORDS, strict=True)
    )


def turning_points_ready(screenplay: Screenplay) -> bool:
    """Exactly five turning points of distinct types ordered 1..5."""
    tps = screenplay.turning_points
    if len(tps) != TURNING_POINT_COUNT:
        return False
    if len({tp.type for tp in tps}) != TURNING_POINT_COUNT:
        return False
    if {tp.order for tp in tps} != set(range(1, TURNING_POINT_COUNT + 1)):
        return False
    return all(
        _length(tp.summary) >= TURNING_POINT_SUMMARY_MIN_CHARS for tp in tps
    )


def characters_ready(screenplay: Screenplay) -> bool:
    """A protagonist, an antagonist and a HERO/SHADOW/ALLY-or-MENTOR cast."""
    characters = screenplay.characters
    if len(characters) < 2:
        return False

    roles = {c.structural_role for c in characters}
    if StructuralRole.PROTAGONIST not in roles or not roles & ANTAGONIST_ROLES:
        return False

    archetypes = {
        beat.archetype for c in characters for beat in c.archetype_timeline
    }
    return (
        Archetype.HERO in archetypes
        and Archetype.SHADOW in archetypes
        and (Archetype.ALLY in archetypes or Archetype.MENTOR in archetypes)
    )


def subplots_ready(screenplay: Screenplay) -> bool:
    subplots = screenplay.subplots
    if not subplots:
        return False
    if not all(s.beats and s.characters_involved for s in subplots):
        return False
    # Linking only applies once turning points exist
    if screenplay.turning_points and not any(
        s.linked_turning_points for s in subplots
    ):
        return False
    return any(s.type in ANCHOR_SUBPLOT_TYPES for s in subplots)


def _covers_turning_points(screenplay: Screenplay, key_scenes: list[Scene]) -> bool:
    covered = {
        s.linked_turning_point
        for s in key_scenes
        if s.linked_turning_point is not None
    }
    if not screenplay.turning_points:
        return len(key_scenes) >= 1
    return all(tp.order in covered for tp in screenplay.turning_points)


def key_scenes_ready(screenplay: Screenplay) -> bool:
    """Every turning point has a key scene, and key synopses are substantial."""
    key_scenes = [s for s in screenplay.scenes if s.is_key]
    if not _covers_turning_points(screenplay, key_scenes):
        return False
    return all(
        _length(s.synopsis) >= KEY_SCENE_SYNOPSIS_MIN_CHARS for s in key_scenes
    )


def _scene_meta_filled(scene: Scene) -> bool:
    return (
        scene.heading is not None
        and _length(scene.location) >= SCENE_LOCATION_MIN_CHARS
        and scene.time_of_day is not None
        and _length(scene.synopsis) >= SCENE_SYNOPSIS_MIN_CHARS
    )


def all_scenes_ready(screenplay: Screenplay) -> bool:
    """Contiguous 1..n scene numbering, full metadata, turning points covered."""
    scenes = ScreenplayUtils.sorted_scenes(screenplay.scenes)
    if not scenes:
        return False
    if any(scene.order != i for i, scene in enumerate(scenes, start=1)):
        return False
    if not all(_scene_meta_filled(scene) for scene in scenes):
        return False
    return _covers_turning_points(screenplay, [s for s in scenes if s.is_key])


def draft_ready(screenplay: Screenplay) -> bool:
    """Key scenes drafted and at least 60% of all scenes carrying a draft."""
    scenes = screenplay.scenes
    if not scenes:
        return False

    key_scenes = [s for s in scenes if s.is_key]
    drafted = sum(
        1 for s in scenes if _length(s.formatted_text) >= DRAFT_MIN_CHARS
    )
    if key_scenes:
        keys_drafted = all(
            _length(s.formatted_text) >= KEY_DRAFT_MIN_CHARS for s in key_scenes
        )
    else:
        keys_drafted = drafted > 0
    return keys_drafted and drafted / len(scenes) >= DRAFTED_RATIO


GUARDS: dict[tuple[Stage, Stage], Guard] = {
    (Stage.S1_SYNOPSIS, Stage.S2_TREATMENT): Guard(
        synopsis_ready,
        "Guard fails: ensure the synopsis has enough content (>= ~40 chars).",
    ),
    (Stage.S2_TREATMENT, Stage.S3_TURNING_POINTS): Guard(
        treatment_ready,
        "Guard fails: need minimum length per act (A1≥60, A2≥80, A3≥60 words)",
    ),
    (Stage.S3_TURNING_POINTS, Stage.S4_CHARACTERS): Guard(
        turning_points_ready,
        "Guard fails: need 5 unique types, unique orders 1..5 and non-empty "
        "summaries (≥15 chars)",
    ),
    (Stage.S4_CHARACTERS, Stage.S5_SUBPLOTS): Guard(
        characters_ready,
        "Guard fails: need PROTAGONIST + ANTAGONIST, archetypes including HERO "
        "and SHADOW, and at least one ALLY or MENTOR",
    ),
    (Stage.S5_SUBPLOTS, Stage.S6_KEY_SCENES): Guard(
        subplots_ready,
        "Guard fails: need >=1 subplot with beats & characters; and at least "
        "one subplot linked to a Turning Point",
    ),
    (Stage.S6_KEY_SCENES, Stage.S7_ALL_SCENES): Guard(
        key_scenes_ready,
        "Guard fails: need coverage (≥1 key scene per TP) and synopsis ≥ 40 "
        "characters",
    ),
    (Stage.S7_ALL_SCENES, Stage.S8_FORMATTED_DRAFT): Guard(
        all_scenes_ready,
        "Guard fails: ensure contiguous numbering, meta filled "
        "(heading/location/time) and all key TPs covered with ≥30-char synopsis",
    ),
    (Stage.S8_FORMATTED_DRAFT, Stage.S9_REVIEW): Guard(
        draft_ready,
        "Guard fails: key scenes need proper drafts (≥60 chars), and most "
        "scenes (≥60%) should have ≥40 chars",
    ),
}


def guard_for(source: Stage, target: Stage) -> Guard | None:
    """Guard for the forward edge ``source -> target``; None when unguarded."""
    return GUARDS.get((source, target))
