"""AI proposal boundary: request model and client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field

from scenewright.models import Stage


class ProposalTemplate(IntEnum):
    """Prompt templates known to the proposal service."""

    SYNOPSIS = 1
    TREATMENT_SECTION = 2
    TURNING_POINTS = 3
    CHARACTERS = 4
    RELATIONSHIPS = 5
    SUBPLOTS = 6
    SUBPLOT_BEATS = 7
    KEY_SCENES = 8
    SCENE_FOR_TURNING_POINT = 9
    NON_KEY_SCENES = 10
    SCENE_DRAFT = 11


TEMPLATE_STAGES: dict[ProposalTemplate, Stage] = {
    ProposalTemplate.SYNOPSIS: Stage.S1_SYNOPSIS,
    ProposalTemplate.TREATMENT_SECTION: Stage.S2_TREATMENT,
    ProposalTemplate.TURNING_POINTS: Stage.S3_TURNING_POINTS,
    ProposalTemplate.CHARACTERS: Stage.S4_CHARACTERS,
    ProposalTemplate.RELATIONSHIPS: Stage.S4_CHARACTERS,
    ProposalTemplate.SUBPLOTS: Stage.S5_SUBPLOTS,
    ProposalTemplate.SUBPLOT_BEATS: Stage.S5_SUBPLOTS,
    ProposalTemplate.KEY_SCENES: Stage.S6_KEY_SCENES,
    ProposalTemplate.SCENE_FOR_TURNING_POINT: Stage.S6_KEY_SCENES,
    ProposalTemplate.NON_KEY_SCENES: Stage.S7_ALL_SCENES,
    ProposalTemplate.SCENE_DRAFT: Stage.S8_FORMATTED_DRAFT,
}


class ProposalRequest(BaseModel):
    """A single proposal job."""

    screenplay_id: int
    stage: Stage
    template_id: ProposalTemplate
    payload: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def for_template(
        cls,
        screenplay_id: int,
        template: ProposalTemplate,
        payload: dict[str, Any] | None = None,
    ) -> ProposalRequest:
        """Build a request with the stage implied by ``template``."""
        return cls(
            screenplay_id=screenplay_id,
            stage=TEMPLATE_STAGES[template],
            template_id=template,
            payload=payload or {},
        )


class ProposalClient(ABC):
    """Source of proposed content. Its output is untrusted text."""

    @abstractmethod
    async def propose(self, request: ProposalRequest) -> dict[str, Any]:
        """Run a proposal job and return its output payload."""
        pass

    async def aclose(self) -> None:  # noqa: B027
        """Release client resources."""
