"""Tests for the screenplay data models."""

from datetime import UTC

import pytest
from pydantic import ValidationError

from scenewright.models import (
    Relationship,
    RelationKind,
    Scene,
    SceneStatus,
    Screenplay,
    Stage,
    TurningPointType,
    utc_now,
)


class TestScreenplay:
    """Test the screenplay aggregate."""

    def test_defaults(self):
        """Test that a new screenplay starts empty at the synopsis stage."""
        screenplay = Screenplay(id=1, title="Heist")

        assert screenplay.current_state is Stage.S1_SYNOPSIS
        assert screenplay.status is Stage.S1_SYNOPSIS
        assert screenplay.treatment.act1 == ""
        assert screenplay.scenes == []
        assert screenplay.created_at.tzinfo is not None

    def test_json_round_trip(self, complete_screenplay):
        """Test that the document survives JSON serialization."""
        data = complete_screenplay.model_dump_json()

        restored = Screenplay.model_validate_json(data)

        assert restored == complete_screenplay

    def test_assignment_is_validated(self):
        """Test that assigning an unknown stage is rejected."""
        screenplay = Screenplay(id=1, title="Heist")

        screenplay.current_state = "S2_TREATMENT"
        assert screenplay.current_state is Stage.S2_TREATMENT

        with pytest.raises(ValidationError):
            screenplay.current_state = "S11_SEQUEL"

    def test_stage_order_starts_with_init(self):
        """Test that INIT precedes the ten workflow stages."""
        stages = list(Stage)
        assert stages[0] is Stage.INIT
        assert stages[-1] is Stage.S10_EXPORTS
        assert len(stages) == 11


class TestSceneAndRelationship:
    """Test validation of nested entities."""

    def test_scene_defaults(self):
        """Test scene defaults."""
        scene = Scene(id=1, order=1)
        assert scene.status is SceneStatus.PLANNED
        assert scene.is_key is False
        assert scene.characters == []

    @pytest.mark.parametrize("value", [0, 6])
    def test_linked_turning_point_range(self, value):
        """Test that key scenes link to turning points 1 to 5 only."""
        with pytest.raises(ValidationError):
            Scene(id=1, order=1, linked_turning_point=value)

    def test_relationship_weights_are_bounded(self):
        """Test that strength, trust and secrecy stay within 0..1."""
        Relationship(id=1, a_id=1, b_id=2, kind=RelationKind.ALLY_OF, trust=1.0)
        with pytest.raises(ValidationError):
            Relationship(id=1, a_id=1, b_id=2, kind=RelationKind.ALLY_OF, trust=1.5)

    def test_turning_point_types(self):
        """Test the five structural turning points."""
        assert len(TurningPointType) == 5


def test_utc_now_is_aware():
    """Test that timestamps are UTC-aware."""
    assert utc_now().tzinfo is UTC
