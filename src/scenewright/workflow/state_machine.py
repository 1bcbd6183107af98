"""Workflow state machine gating progression through the screenplay stages."""

from __future__ import annotations

from dataclasses import dataclass

from scenewright.config import get_logger
from scenewright.models import Stage
from scenewright.store.base import ScreenplayStore
from scenewright.workflow.guards import guard_for
from scenewright.workflow.stages import stage_index

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a transition request. Truthy only on success."""

    success: bool
    source: Stage
    target: Stage
    hint: str | None = None

    def __bool__(self) -> bool:
        return self.success


class WorkflowStateMachine:
    """Track the current stage of one screenplay and authorize moves.

    Forward moves go one stage at a time and must pass the guard for that
    edge. Moving backward or staying put is always allowed. The store is the
    source of truth: guards read a fresh copy of the document and accepted
    transitions are persisted before the local stage changes.
    """

    def __init__(
        self, store: ScreenplayStore, screenplay_id: int, current: Stage
    ) -> None:
        """Initialize the state machine.

        Args:
            store: Document store holding the screenplay
            screenplay_id: Screenplay this machine drives
            current: Stage the screenplay is currently in
        """
        self.store = store
        self.screenplay_id = screenplay_id
        self.current = current

    @classmethod
    async def load(
        cls, store: ScreenplayStore, screenplay_id: int
    ) -> WorkflowStateMachine:
        """Create a machine positioned at the screenplay's stored stage."""
        screenplay = await store.get(screenplay_id)
        return cls(store, screenplay_id, screenplay.current_state)

    def can_enter(self, target: Stage) -> bool:
        """Whether ``target`` is reachable without skipping a stage."""
        return stage_index(target) <= stage_index(self.current) + 1

    async def request_transition(self, target: Stage) -> TransitionResult:
        """Try to move to ``target``.

        Args:
            target: Stage to enter

        Returns:
            Result carrying a hint when the move was refused

        Raises:
            StoreError: Store failures propagate unchanged
        """
        source = self.current
        if not self.can_enter(target):
            logger.info(
                "Transition refused: stage skip",
                screenplay_id=self.screenplay_id,
                source=source.value,
                target=target.value,
            )
            return TransitionResult(
                False,
                source,
                target,
                f"Cannot skip from {source.value} to {target.value}; "
                "complete the stages in between first.",
            )

        if stage_index(target) > stage_index(source):
            guard = guard_for(source, target)
            if guard is not None:
                screenplay = await self.store.get(self.screenplay_id)
                if not guard(screenplay):
                    logger.warning(
                        "Transition guard failed",
                        screenplay_id=self.screenplay_id,
                        source=source.value,
                        target=target.value,
                    )
                    return TransitionResult(False, source, target, guard.hint)

        await self.store.update(
            self.screenplay_id, {"current_state": target, "status": target}
        )
        self.current = target
        logger.info(
            "Workflow transition",
            screenplay_id=self.screenplay_id,
            source=source.value,
            target=target.value,
        )
        return TransitionResult(True, source, target)
