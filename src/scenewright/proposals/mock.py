"""Deterministic offline proposal client."""

from __future__ import annotations

import re
from typing import Any, assert_never

from scenewright.config import get_logger
from scenewright.models import Archetype, JourneyPhase
from scenewright.proposals.base import (
    ProposalClient,
    ProposalRequest,
    ProposalTemplate,
)
from scenewright.utils.screenplay import ScreenplayUtils

logger = get_logger(__name__)

DEFAULT_IDEA = "A character faces a life-changing decision"
PHASES = tuple(JourneyPhase)
TREATMENT_ACTS = ("act1", "act2", "act3")

TURNING_POINT_BEATS = (
    (
        "INCITING_INCIDENT",
        "act1",
        "A disruptive event pushes the hero out of normalcy.",
    ),
    ("PLOT_POINT_1", "act1", "Door closes behind the hero; no turning back."),
    ("MIDPOINT", "act2", "False victory/defeat that raises the stakes."),
    ("PLOT_POINT_2", "act2", "All seems lost; hero reframes the goal."),
    ("CLIMAX", "act3", "Final confrontation resolves the central conflict."),
)

# Negative ids are 1-based positions in the proposed cast (-1 is the first
# character) for the caller to map onto stored ids.
MOCK_RELATIONSHIPS = (
    {
        "a_id": -1,
        "b_id": -2,
        "kind": "NEMESIS_OF",
        "strength": 0.9,
        "trust": 0.1,
        "secrecy": 0.0,
    },
    {
        "a_id": -3,
        "b_id": -1,
        "kind": "MENTOR_OF",
        "strength": 0.7,
        "trust": 0.8,
        "secrecy": 0.0,
    },
    {
        "a_id": -1,
        "b_id": -3,
        "kind": "ALLY_OF",
        "strength": 0.8,
        "trust": 0.85,
        "secrecy": 0.0,
    },
)

RELATIONSHIP_BEATS = (
    ("Diego challenges Alex to open up.", "Alex agrees to try."),
    ("They clash over risk-taking during the investigation.", "Trust is damaged."),
    ("Reconciliation catalyzes Alex's final choice.", "Trust restored; Alex commits."),
)
ANTAGONIST_BEATS = (
    ("Mara secures surveillance on Alex.", "Stakes rise."),
    ("Mara learns a personal weakness.", "Targets Alex's flaw."),
)
SUBPLOT_BEATS = (
    ("Setup the tension inside the subplot.", "Goal clarified."),
    ("Complication forces a compromise.", "Stakes increase."),
    ("Reversal ties back to a Turning Point.", "Path redefined."),
)

BRIDGE_LOCATIONS = (
    "APARTMENT - KITCHEN",
    "CITY STREET",
    "COURTHOUSE HALL",
    "OFFICE",
    "ROOFTOP",
    "BAR",
)
BRIDGE_SCENE_COUNT = 6


def _squash(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def _timeline(archetypes: list[Archetype]) -> list[dict[str, str]]:
    return [
        {"phase": phase.value, "archetype": archetype.value}
        for phase, archetype in zip(PHASES, archetypes, strict=True)
    ]


class MockProposalClient(ProposalClient):
    """Return canned proposals built from the request payload.

    Used when no proposal endpoint is configured and in tests.
    """

    def __init__(self) -> None:
        self.requests: list[ProposalRequest] = []

    async def propose(self, request: ProposalRequest) -> dict[str, Any]:
        self.requests.append(request)
        payload = request.payload
        logger.debug(
            "Mock proposal",
            screenplay_id=request.screenplay_id,
            template=request.template_id.name,
        )
        match request.template_id:
            case ProposalTemplate.SYNOPSIS:
                return {"proposal": self._synopsis(payload)}
            case ProposalTemplate.TREATMENT_SECTION:
                section = payload.get("section", "act1")
                return {"section": section, "proposal": self._treatment(payload)}
            case ProposalTemplate.TURNING_POINTS:
                return {"items": self._turning_points(payload)}
            case ProposalTemplate.CHARACTERS:
                return {"characters": self._characters()}
            case ProposalTemplate.RELATIONSHIPS:
                return {"relationships": [dict(r) for r in MOCK_RELATIONSHIPS]}
            case ProposalTemplate.SUBPLOTS:
                return {"subplots": self._subplots()}
            case ProposalTemplate.SUBPLOT_BEATS:
                return {"beats": self._beats(SUBPLOT_BEATS)}
            case ProposalTemplate.KEY_SCENES:
                return {"scenes": self._key_scenes(payload)}
            case ProposalTemplate.SCENE_FOR_TURNING_POINT:
                return {"scene": self._scene_for_turning_point(payload)}
            case ProposalTemplate.NON_KEY_SCENES:
                return {"scenes": self._non_key_scenes()}
            case ProposalTemplate.SCENE_DRAFT:
                return {"fountain": self._scene_draft(payload)}
            case _:
                assert_never(request.template_id)

    @staticmethod
    def _synopsis(payload: dict[str, Any]) -> str:
        seed = (payload.get("idea") or DEFAULT_IDEA)[:160]
        genre = f" ({payload['genre']})" if payload.get("genre") else ""
        tone = f" with a {payload['tone']} tone" if payload.get("tone") else ""
        return (
            f"A concise synopsis{genre}{tone}: {seed}. When pressure mounts, "
            "their relationships fracture, forcing a risky plan that backfires. "
            "In the end, the protagonist must sacrifice a part of themselves "
            "to earn a second chance."
        )

    @staticmethod
    def _treatment(payload: dict[str, Any]) -> str:
        section = str(payload.get("section", "act1"))
        hints = [p.strip() for p in payload.get("pointers", [])[:5] if p.strip()]
        lines = [
            f"Treatment {section.upper()} draft:",
            "- Setup protagonist under pressure.",
            *(f"- {hint}" for hint in hints),
            "- Escalate stakes and force a hard choice.",
            "- End with a turning beat that propels the next act.",
        ]
        return "\n".join(lines)

    @staticmethod
    def _turning_points(payload: dict[str, Any]) -> list[dict[str, Any]]:
        treatment = payload.get("treatment") or {}
        hints = {act: (treatment.get(act) or "")[:80] for act in TREATMENT_ACTS}
        return [
            {"order": i, "type": kind, "summary": f"{summary} Hint: {hints[act]}"}
            for i, (kind, act, summary) in enumerate(TURNING_POINT_BEATS, start=1)
        ]

    @staticmethod
    def _characters() -> list[dict[str, Any]]:
        hero = [Archetype.ALLY, Archetype.HERO, Archetype.ALLY]
        shadow = [Archetype.TRICKSTER, Archetype.TRICKSTER, Archetype.SHADOW]
        mentor = [Archetype.MENTOR, Archetype.ALLY, Archetype.ALLY]
        return [
            {
                "name": "Alex",
                "structural_role": "PROTAGONIST",
                "goal": "Win back custody of their child",
                "need": "Accept vulnerability and ask for help",
                "flaw": "Pride and control",
                "arc_summary": "From control to trust",
                "tags": ["parent", "engineer"],
                "archetype_timeline": _timeline(hero),
            },
            {
                "name": "Mara",
                "structural_role": "ANTAGONIST",
                "goal": "Secure a promotion by exposing Alex",
                "need": "Find integrity",
                "flaw": "Manipulative",
                "arc_summary": "Power at any cost",
                "tags": ["lawyer"],
                "archetype_timeline": _timeline(shadow),
            },
            {
                "name": "Diego",
                "structural_role": "SUPPORTING",
                "goal": "Keep the team together",
                "need": "Set boundaries",
                "flaw": "Avoidant",
                "arc_summary": "Learns to confront",
                "tags": ["friend"],
                "archetype_timeline": _timeline(mentor),
            },
        ]

    @staticmethod
    def _beats(beats: tuple[tuple[str, str], ...]) -> list[dict[str, Any]]:
        return [
            {"order": i, "summary": summary, "out_change": out_change}
            for i, (summary, out_change) in enumerate(beats, start=1)
        ]

    @classmethod
    def _subplots(cls) -> list[dict[str, Any]]:
        return [
            {
                "title": "B-Story: Alex & Diego",
                "type": "RELATIONSHIP",
                "purpose": "Carry the theme of trust; provide emotional stakes "
                "and midpoint support.",
                "dominant_acts": [phase.value for phase in PHASES],
                "characters_involved": [],
                "linked_turning_points": [1, 3, 5],
                "beats": cls._beats(RELATIONSHIP_BEATS),
            },
            {
                "title": "Antagonist POV: Mara",
                "type": "ANTAGONIST_POV",
                "purpose": "Escalate external pressure and clarify stakes.",
                "dominant_acts": [JourneyPhase.ACT_II.value],
                "characters_involved": [],
                "linked_turning_points": [4],
                "beats": cls._beats(ANTAGONIST_BEATS),
            },
        ]

    @staticmethod
    def _key_scenes(payload: dict[str, Any]) -> list[dict[str, Any]]:
        """One key scene per turning point in the payload.

        ``characters`` holds 0-based positions in the payload cast.
        """
        cast_size = min(len(payload.get("characters") or []), 2)
        scenes = []
        for tp in payload.get("turning_points") or []:
            order = int(tp.get("order", 1))
            summary = str(tp.get("summary") or "")[:90]
            scenes.append(
                {
                    "title": f"Key scene for {tp.get('type', '')}",
                    "is_key": True,
                    "linked_turning_point": order,
                    "heading": "INT" if order <= 2 else "EXT",
                    "location": (
                        "APARTMENT - LIVING ROOM" if order <= 3 else "CITY STREET"
                    ),
                    "time_of_day": "NIGHT" if order % 2 else "DAY",
                    "synopsis": f"A scene that expresses: {summary}...",
                    "goal": "Advance the plot toward/away from the TP.",
                    "conflict": "Opposition pushes back; cost is introduced.",
                    "outcome": "Change of state aligning with the TP beat.",
                    "characters": list(range(cast_size)),
                }
            )
        return scenes

    @staticmethod
    def _scene_for_turning_point(payload: dict[str, Any]) -> dict[str, Any]:
        order = int(payload.get("tp_order", 1))
        summary = str(payload.get("tp_summary") or "")[:90]
        return {
            "title": f"Key scene TP#{order}",
            "is_key": True,
            "linked_turning_point": order,
            "heading": "INT" if order <= 2 else "EXT",
            "location": "WAREHOUSE",
            "time_of_day": "NIGHT",
            "synopsis": f"A focused confrontation reflecting: {summary}...",
            "goal": "Force the hero to commit.",
            "conflict": "Antagonistic pressure escalates.",
            "outcome": "Irreversible shift toward the next act.",
            "characters": [],
        }

    @staticmethod
    def _non_key_scenes() -> list[dict[str, Any]]:
        return [
            {
                "title": f"Bridge {i + 1}",
                "is_key": False,
                "linked_turning_point": None,
                "heading": "EXT" if i % 2 else "INT",
                "location": BRIDGE_LOCATIONS[i % len(BRIDGE_LOCATIONS)],
                "time_of_day": "DAY" if i % 2 else "NIGHT",
                "synopsis": "A connective beat that escalates pressure and "
                "delivers a reveal tying subplots to the main goal.",
                "goal": "Advance toward the next key beat.",
                "conflict": "Obstacle complicates resources or relationships.",
                "outcome": "New information or cost changes the approach.",
                "characters": [],
            }
            for i in range(BRIDGE_SCENE_COUNT)
        ]

    @staticmethod
    def _scene_draft(payload: dict[str, Any]) -> str:
        slug = ScreenplayUtils.make_slugline(
            payload.get("heading"), payload.get("location"), payload.get("time_of_day")
        )
        names = [name.upper() for name in payload.get("character_names") or []]
        speaker_a = names[0] if names else "ALEX"
        speaker_b = names[1] if len(names) > 1 else "OTHER"
        goal = _squash(payload.get("goal") or "Advance toward objective.")
        conflict = _squash(payload.get("conflict") or "Opposition escalates.")
        outcome = _squash(payload.get("outcome") or "State changes.")
        return (
            f"{slug}\n\n"
            f"{_squash(payload.get('synopsis') or '')}\n\n"
            f"> GOAL: {goal}\n"
            f"> CONFLICT: {conflict}\n"
            f"> OUTCOME: {outcome}\n\n"
            f"{speaker_a}\n"
            "We can't keep doing this the old way. It will break us.\n\n"
            f"{speaker_b}\n"
            "Then change it. Prove it costs you something.\n\n"
            "Action line pushing into the next beat.\n"
        )
