"""Scene drafting through the proposal boundary."""

from __future__ import annotations

from dataclasses import dataclass

from scenewright.config import get_logger
from scenewright.models import Scene, Screenplay
from scenewright.parser import Paragraph, parse_fountain
from scenewright.proposals.base import (
    ProposalClient,
    ProposalRequest,
    ProposalTemplate,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class SceneDraft:
    """Proposed Fountain text and its parsed paragraphs."""

    text: str
    paragraphs: list[Paragraph]


def scene_draft_payload(screenplay: Screenplay, scene: Scene) -> dict[str, object]:
    """Input payload describing ``scene`` for a draft proposal."""
    names = {c.id: c.name for c in screenplay.characters}
    return {
        "scene_id": scene.id,
        "heading": scene.heading.value if scene.heading else None,
        "location": scene.location,
        "time_of_day": scene.time_of_day.value if scene.time_of_day else None,
        "title": scene.title,
        "synopsis": scene.synopsis or "",
        "goal": scene.goal,
        "conflict": scene.conflict,
        "outcome": scene.outcome,
        "character_names": [names[cid] for cid in scene.characters if cid in names],
    }


async def draft_scene(
    client: ProposalClient, screenplay: Screenplay, scene: Scene
) -> SceneDraft:
    """Ask the proposal service for a Fountain draft of ``scene``.

    The proposal is untrusted text and goes through the regular parser.

    Args:
        client: Proposal client
        screenplay: Screenplay owning the scene
        scene: Scene to draft

    Returns:
        Draft text with its paragraphs

    Raises:
        ProposalError: If the proposal service fails
    """
    request = ProposalRequest.for_template(
        screenplay.id,
        ProposalTemplate.SCENE_DRAFT,
        scene_draft_payload(screenplay, scene),
    )
    output = await client.propose(request)
    text = str(output.get("fountain") or "")
    paragraphs = parse_fountain(text)
    logger.info(
        "Drafted scene",
        screenplay_id=screenplay.id,
        scene_id=scene.id,
        paragraphs=len(paragraphs),
    )
    return SceneDraft(text=text, paragraphs=paragraphs)
