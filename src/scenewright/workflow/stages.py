"""Stage ordering helpers for the screenplay workflow."""

from __future__ import annotations

from scenewright.models import Stage

STAGE_ORDER: tuple[Stage, ...] = tuple(Stage)


def stage_index(stage: Stage) -> int:
    """Position of ``stage`` in the workflow; ``INIT`` is 0, S10 is 10."""
    return STAGE_ORDER.index(stage)


def next_stage(stage: Stage) -> Stage | None:
    """Stage directly after ``stage``, or None at the end of the workflow."""
    index = stage_index(stage) + 1
    return STAGE_ORDER[index] if index < len(STAGE_ORDER) else None


def parse_stage(value: str) -> Stage:
    """Resolve a stage from its full name or its short ``S<n>`` prefix.

    Args:
        value: ``"S3_TURNING_POINTS"``, ``"s3"`` or ``"INIT"``

    Returns:
        Matching stage

    Raises:
        ValueError: If nothing matches
    """
    key = value.strip().upper()
    for stage in STAGE_ORDER:
        if key == stage.value or stage.value.split("_", 1)[0] == key:
            return stage
    valid = ", ".join(stage.value for stage in STAGE_ORDER)
    raise ValueError(f"Unknown stage '{value}'. Valid stages: {valid}")
