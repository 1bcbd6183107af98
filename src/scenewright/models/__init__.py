"""Scenewright data models.

The screenplay aggregate and everything it owns: treatment, turning points,
characters, relationships, subplots and scenes. Models are plain pydantic
documents; the store persists them as a single JSON document per screenplay.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


class Stage(str, Enum):
    """Workflow stages in progression order, preceded by the INIT sentinel."""

    INIT = "INIT"
    S1_SYNOPSIS = "S1_SYNOPSIS"
    S2_TREATMENT = "S2_TREATMENT"
    S3_TURNING_POINTS = "S3_TURNING_POINTS"
    S4_CHARACTERS = "S4_CHARACTERS"
    S5_SUBPLOTS = "S5_SUBPLOTS"
    S6_KEY_SCENES = "S6_KEY_SCENES"
    S7_ALL_SCENES = "S7_ALL_SCENES"
    S8_FORMATTED_DRAFT = "S8_FORMATTED_DRAFT"
    S9_REVIEW = "S9_REVIEW"
    S10_EXPORTS = "S10_EXPORTS"


class SceneHeadingType(str, Enum):
    """Interior/exterior prefix of a slugline."""

    INT = "INT"
    EXT = "EXT"
    INT_EXT = "INT/EXT"


class TimeOfDay(str, Enum):
    """Time-of-day suffix of a slugline."""

    DAY = "DAY"
    NIGHT = "NIGHT"
    DAWN = "DAWN"
    DUSK = "DUSK"


class SceneStatus(str, Enum):
    """Drafting progress of a scene."""

    PLANNED = "PLANNED"
    OUTLINED = "OUTLINED"
    DRAFTED = "DRAFTED"
    APPROVED = "APPROVED"


class TurningPointType(str, Enum):
    """The five structural turning points."""

    INCITING_INCIDENT = "INCITING_INCIDENT"
    PLOT_POINT_1 = "PLOT_POINT_1"
    MIDPOINT = "MIDPOINT"
    PLOT_POINT_2 = "PLOT_POINT_2"
    CLIMAX = "CLIMAX"


class StructuralRole(str, Enum):
    """Dramatic function of a character in the story."""

    PROTAGONIST = "PROTAGONIST"
    DEUTERAGONIST = "DEUTERAGONIST"
    TRITAGONIST = "TRITAGONIST"
    ANTAGONIST = "ANTAGONIST"
    ANTAGONIST_LIEUTENANT = "ANTAGONIST_LIEUTENANT"
    SUPPORTING = "SUPPORTING"
    CAMEO = "CAMEO"


class Archetype(str, Enum):
    """Mask a character wears during a phase of the journey."""

    HERO = "HERO"
    MENTOR = "MENTOR"
    HERALD = "HERALD"
    THRESHOLD_GUARDIAN = "THRESHOLD_GUARDIAN"
    ALLY = "ALLY"
    TRICKSTER = "TRICKSTER"
    SHAPESHIFTER = "SHAPESHIFTER"
    SHADOW = "SHADOW"
    SEER = "SEER"
    TEMPTER = "TEMPTER"
    CONFIDANT = "CONFIDANT"
    REASON = "REASON"
    EMOTION = "EMOTION"
    IMPACT_CHARACTER = "IMPACT_CHARACTER"


class JourneyPhase(str, Enum):
    """Act in which an archetype beat applies."""

    ACT_I = "ACT_I"
    ACT_II = "ACT_II"
    ACT_III = "ACT_III"


class RelationKind(str, Enum):
    """Directed relationship between two characters."""

    ALLY_OF = "ALLY_OF"
    RIVAL_OF = "RIVAL_OF"
    NEMESIS_OF = "NEMESIS_OF"
    MENTOR_OF = "MENTOR_OF"
    MENTEE_OF = "MENTEE_OF"
    PROTECTOR_OF = "PROTECTOR_OF"
    WARD_OF = "WARD_OF"
    BOSS_OF = "BOSS_OF"
    REPORT_OF = "REPORT_OF"
    COMMANDER_OF = "COMMANDER_OF"
    SUBORDINATE_OF = "SUBORDINATE_OF"
    TEAMMATE_OF = "TEAMMATE_OF"
    CO_CONSPIRATOR_OF = "CO_CONSPIRATOR_OF"
    ROMANTIC_PARTNER_OF = "ROMANTIC_PARTNER_OF"
    EX_PARTNER_OF = "EX_PARTNER_OF"
    CRUSH_ON = "CRUSH_ON"
    SPOUSE_OF = "SPOUSE_OF"
    PARENT_OF = "PARENT_OF"
    CHILD_OF = "CHILD_OF"
    SIBLING_OF = "SIBLING_OF"
    INFORMANT_OF = "INFORMANT_OF"
    SABOTEUR_OF = "SABOTEUR_OF"
    FOIL_TO = "FOIL_TO"


class SubplotType(str, Enum):
    """Kind of secondary storyline."""

    RELATIONSHIP = "RELATIONSHIP"
    ANTAGONIST_POV = "ANTAGONIST_POV"
    INTERNAL_CONFLICT = "INTERNAL_CONFLICT"
    PROFESSIONAL_MISSION = "PROFESSIONAL_MISSION"
    INVESTIGATION = "INVESTIGATION"
    FAMILY = "FAMILY"
    RIVALRY = "RIVALRY"
    REDEMPTION_OR_REVENGE = "REDEMPTION_OR_REVENGE"
    THEMATIC_DEBATE = "THEMATIC_DEBATE"
    COMIC_RUNNER = "COMIC_RUNNER"
    BACKSTORY = "BACKSTORY"
    WORLD_OR_INSTITUTION = "WORLD_OR_INSTITUTION"
    SIDE_QUEST = "SIDE_QUEST"


class Treatment(BaseModel):
    """Three-act prose treatment."""

    act1: str = ""
    act2: str = ""
    act3: str = ""


class TurningPoint(BaseModel):
    """One of the five structural turning points."""

    id: int
    type: TurningPointType
    order: int
    summary: str = ""
    candidate_scene_id: int | None = None


class ArchetypeBeat(BaseModel):
    """Archetype a character embodies during one act."""

    phase: JourneyPhase
    archetype: Archetype
    notes: str | None = None


class Character(BaseModel):
    """A character in the screenplay."""

    id: int
    name: str
    structural_role: StructuralRole
    goal: str | None = None
    need: str | None = None
    flaw: str | None = None
    arc_summary: str | None = None
    bio: str | None = None
    tags: list[str] = Field(default_factory=list)
    archetype_timeline: list[ArchetypeBeat] = Field(default_factory=list)


class Relationship(BaseModel):
    """Directed edge from character ``a_id`` to character ``b_id``."""

    id: int
    a_id: int
    b_id: int
    kind: RelationKind
    strength: float | None = Field(default=None, ge=0.0, le=1.0)
    trust: float | None = Field(default=None, ge=0.0, le=1.0)
    secrecy: float | None = Field(default=None, ge=0.0, le=1.0)
    notes: str | None = None


class SubplotBeat(BaseModel):
    """Single step of a subplot."""

    order: int
    summary: str
    out_change: str | None = None


class Subplot(BaseModel):
    """Secondary storyline woven through the acts."""

    id: int
    title: str
    type: SubplotType
    purpose: str | None = None
    dominant_acts: list[JourneyPhase] = Field(default_factory=list)
    characters_involved: list[int] = Field(default_factory=list)
    linked_turning_points: list[int] = Field(default_factory=list)  # turning point ids
    beats: list[SubplotBeat] = Field(default_factory=list)


class Scene(BaseModel):
    """A scene: planning metadata plus the authored Fountain text."""

    id: int
    order: int
    title: str | None = None
    is_key: bool = False
    linked_turning_point: int | None = Field(default=None, ge=1, le=5)
    heading: SceneHeadingType | None = None
    location: str | None = None
    time_of_day: TimeOfDay | None = None
    synopsis: str | None = None
    goal: str | None = None
    conflict: str | None = None
    outcome: str | None = None
    characters: list[int] = Field(default_factory=list)
    status: SceneStatus = SceneStatus.PLANNED
    formatted_text: str | None = None


class Screenplay(BaseModel):
    """Aggregate root: one screenplay project and everything it owns."""

    model_config = ConfigDict(validate_assignment=True)

    id: int
    project_id: int | None = None
    title: str
    logline: str | None = None
    genre: str | None = None
    tone: str | None = None
    synopsis: str | None = None
    treatment: Treatment = Field(default_factory=Treatment)
    turning_points: list[TurningPoint] = Field(default_factory=list)
    characters: list[Character] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)
    subplots: list[Subplot] = Field(default_factory=list)
    scenes: list[Scene] = Field(default_factory=list)
    status: Stage = Stage.S1_SYNOPSIS
    current_state: Stage = Stage.S1_SYNOPSIS
    style_guide_id: int | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


__all__ = [
    "Archetype",
    "ArchetypeBeat",
    "Character",
    "JourneyPhase",
    "RelationKind",
    "Relationship",
    "Scene",
    "SceneHeadingType",
    "SceneStatus",
    "Screenplay",
    "Stage",
    "StructuralRole",
    "Subplot",
    "SubplotBeat",
    "SubplotType",
    "TimeOfDay",
    "Treatment",
    "TurningPoint",
    "TurningPointType",
    "utc_now",
]
