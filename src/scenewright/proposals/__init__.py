"""AI proposal clients and helpers."""

from __future__ import annotations

from scenewright.config import ScenewrightSettings, get_settings
from scenewright.proposals.base import (
    ProposalClient,
    ProposalRequest,
    ProposalTemplate,
)
from scenewright.proposals.drafting import SceneDraft, draft_scene
from scenewright.proposals.http_client import HttpProposalClient
from scenewright.proposals.mock import MockProposalClient

__all__ = [
    "HttpProposalClient",
    "MockProposalClient",
    "ProposalClient",
    "ProposalRequest",
    "ProposalTemplate",
    "SceneDraft",
    "create_proposal_client",
    "draft_scene",
]


def create_proposal_client(
    settings: ScenewrightSettings | None = None,
) -> ProposalClient:
    """Remote client when an endpoint is configured, mock client otherwise."""
    settings = settings or get_settings()
    if settings.proposal_endpoint:
        return HttpProposalClient(
            settings.proposal_endpoint,
            api_key=settings.proposal_api_key,
            timeout=settings.proposal_timeout,
        )
    return MockProposalClient()
