"""Screenplay workflow: stages, guards and the state machine."""

from scenewright.models import Stage
from scenewright.workflow.guards import GUARDS, Guard, guard_for
from scenewright.workflow.stages import (
    STAGE_ORDER,
    next_stage,
    parse_stage,
    stage_index,
)
from scenewright.workflow.state_machine import TransitionResult, WorkflowStateMachine

__all__ = [
    "GUARDS",
    "STAGE_ORDER",
    "Guard",
    "Stage",
    "TransitionResult",
    "WorkflowStateMachine",
    "guard_for",
    "next_stage",
    "parse_stage",
    "stage_index",
]
