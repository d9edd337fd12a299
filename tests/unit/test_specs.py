"""Tests for ObservationSpec, BehaviorSpec and BehaviorMapping."""

from dataclasses import FrozenInstanceError

import pytest

from agentenv.core.actions import ActionSpec
from agentenv.core.types import (
    BehaviorMapping,
    BehaviorSpec,
    DimensionProperty,
    ObservationSpec,
    ObservationType,
)


class TestObservationSpec:
    def test_defaults(self):
        spec = ObservationSpec(shape=(84, 84, 3))
        assert spec.shape == (84, 84, 3)
        assert spec.dimension_property == (DimensionProperty.UNSPECIFIED,) * 3
        assert spec.observation_type == ObservationType.DEFAULT
        assert spec.name is None

    def test_list_shape_becomes_tuple(self):
        spec = ObservationSpec(shape=[4, 2])  # type: ignore[arg-type]
        assert spec.shape == (4, 2)

    def test_goal_signal(self):
        spec = ObservationSpec(
            shape=(2,),
            observation_type=ObservationType.GOAL_SIGNAL,
            name="GoalSensor",
        )
        assert spec.observation_type is ObservationType.GOAL_SIGNAL
        assert spec.name == "GoalSensor"

    def test_dimension_property_flags(self):
        spec = ObservationSpec(
            shape=(20, 6),
            dimension_property=(
                DimensionProperty.VARIABLE_SIZE,
                DimensionProperty.NONE,
            ),
        )
        assert DimensionProperty.VARIABLE_SIZE in spec.dimension_property

    @pytest.mark.parametrize("shape", [(), (0,), (3, -1), (2.5,)])
    def test_invalid_shapes_rejected(self, shape):
        with pytest.raises(ValueError):
            ObservationSpec(shape=shape)

    def test_property_count_must_match(self):
        with pytest.raises(ValueError, match="dimension_property"):
            ObservationSpec(shape=(3, 3), dimension_property=(DimensionProperty.NONE,))

    def test_observation_type_checked(self):
        with pytest.raises(ValueError, match="observation_type"):
            ObservationSpec(shape=(3,), observation_type="default")  # type: ignore[arg-type]

    def test_frozen(self):
        spec = ObservationSpec(shape=(3,))
        with pytest.raises(FrozenInstanceError):
            spec.shape = (4,)  # type: ignore[misc]


class TestBehaviorSpec:
    def test_keeps_observation_order(self):
        first = ObservationSpec(shape=(3,), name="a")
        second = ObservationSpec(shape=(5,), name="b")
        spec = BehaviorSpec(observation_specs=[first, second])  # type: ignore[arg-type]
        assert spec.observation_specs == (first, second)

    def test_default_action_spec_is_empty(self):
        spec = BehaviorSpec(observation_specs=())
        assert spec.action_spec == ActionSpec()

    def test_rejects_non_observation_spec(self):
        with pytest.raises(ValueError):
            BehaviorSpec(observation_specs=((3,),))  # type: ignore[arg-type]


class TestBehaviorMapping:
    def test_mapping_protocol(self):
        spec = BehaviorSpec(observation_specs=(ObservationSpec(shape=(1,)),))
        mapping = BehaviorMapping({"Ball?team=0": spec})
        assert len(mapping) == 1
        assert list(mapping) == ["Ball?team=0"]
        assert mapping["Ball?team=0"] is spec
        assert "Ball?team=0" in mapping

    def test_unknown_behavior(self):
        mapping = BehaviorMapping({})
        with pytest.raises(KeyError, match="Missing"):
            mapping["Missing"]

    def test_source_dict_copied(self):
        source = {"a": BehaviorSpec(observation_specs=())}
        mapping = BehaviorMapping(source)
        source["b"] = BehaviorSpec(observation_specs=())
        assert "b" not in mapping
