"""Tests for ActionSpec and ActionTuple."""

import numpy as np
import pytest

from agentenv.core.actions import ActionSpec, ActionTuple


class TestActionSpec:
    def test_continuous(self):
        spec = ActionSpec.create_continuous(3)
        assert spec.is_continuous()
        assert not spec.is_discrete()
        assert spec.discrete_size == 0

    def test_discrete(self):
        spec = ActionSpec.create_discrete((3, 2))
        assert spec.is_discrete()
        assert not spec.is_continuous()
        assert spec.discrete_size == 2
        assert spec.discrete_branches == (3, 2)

    def test_hybrid_is_neither(self):
        spec = ActionSpec(continuous_size=2, discrete_branches=(4,))
        assert not spec.is_continuous()
        assert not spec.is_discrete()

    def test_invalid_sizes_rejected(self):
        with pytest.raises(ValueError):
            ActionSpec(continuous_size=-1)
        with pytest.raises(ValueError):
            ActionSpec(discrete_branches=(3, 0))

    def test_non_integer_sizes_rejected(self):
        with pytest.raises(ValueError, match="continuous_size"):
            ActionSpec(continuous_size=1.5)  # type: ignore[arg-type]
        with pytest.raises(ValueError):
            ActionSpec(discrete_branches=(2.5,))  # type: ignore[arg-type]

    def test_numpy_sizes_normalised(self):
        spec = ActionSpec(continuous_size=np.int64(2), discrete_branches=(np.int32(3),))
        assert type(spec.continuous_size) is int
        assert spec.discrete_branches == (3,)

    def test_empty_action(self):
        spec = ActionSpec(continuous_size=2, discrete_branches=(3, 3))
        action = spec.empty_action(4)
        assert action.continuous.shape == (4, 2)
        assert action.discrete.shape == (4, 2)
        assert not action.continuous.any()
        assert not action.discrete.any()

    def test_random_action_bounds(self):
        spec = ActionSpec(continuous_size=5, discrete_branches=(2, 7))
        action = spec.random_action(50, seed=3)
        assert action.continuous.dtype == np.float32
        assert (action.continuous >= -1.0).all()
        assert (action.continuous <= 1.0).all()
        assert (action.discrete[:, 0] < 2).all()
        assert (action.discrete[:, 1] < 7).all()
        assert (action.discrete >= 0).all()

    def test_random_action_deterministic(self):
        spec = ActionSpec(continuous_size=2, discrete_branches=(5,))
        a = spec.random_action(10, seed=11)
        b = spec.random_action(10, seed=11)
        np.testing.assert_array_equal(a.continuous, b.continuous)
        np.testing.assert_array_equal(a.discrete, b.discrete)

    def test_random_action_accepts_generator(self):
        spec = ActionSpec.create_continuous(1)
        rng = np.random.default_rng(0)
        a = spec.random_action(3, seed=rng)
        b = spec.random_action(3, seed=rng)
        assert not np.array_equal(a.continuous, b.continuous)

    def test_validate_action_accepts_matching_shape(self):
        spec = ActionSpec(continuous_size=2, discrete_branches=(3,))
        action = spec.random_action(4, seed=0)
        assert spec.validate_action(action, 4) is action

    def test_validate_action_rejects_wrong_continuous_shape(self):
        spec = ActionSpec.create_continuous(2)
        action = ActionTuple(continuous=np.zeros((4, 3)))
        with pytest.raises(ValueError, match="continuous"):
            spec.validate_action(action, 4)

    def test_validate_action_rejects_wrong_batch(self):
        spec = ActionSpec.create_discrete((3,))
        action = ActionTuple(discrete=np.zeros((2, 1), dtype=np.int32))
        with pytest.raises(ValueError, match="discrete"):
            spec.validate_action(action, 4)

    def test_validate_action_rejects_wrong_continuous_batch(self):
        spec = ActionSpec.create_continuous(2)
        action = ActionTuple(continuous=np.zeros((2, 2)))
        with pytest.raises(ValueError, match="continuous action has invalid shape"):
            spec.validate_action(action, 4)

    def test_validate_action_rejects_undeclared_part(self):
        spec = ActionSpec.create_discrete((3,))
        action = ActionTuple(
            continuous=np.zeros((4, 1)), discrete=np.zeros((4, 1), dtype=np.int32)
        )
        with pytest.raises(ValueError, match="declares none"):
            spec.validate_action(action, 4)

    def test_validate_action_rejects_out_of_range_branch(self):
        spec = ActionSpec.create_discrete((3,))
        action = ActionTuple(discrete=np.array([[0], [3]]))
        with pytest.raises(ValueError, match="branch 0"):
            spec.validate_action(action, 2)


class TestActionTuple:
    def test_missing_part_defaults_to_empty(self):
        action = ActionTuple(continuous=[[0.1, 0.2], [0.3, 0.4]])
        assert action.discrete.shape == (2, 0)
        assert action.discrete.dtype == np.int32
        assert action.continuous.dtype == np.float32

    def test_no_parts(self):
        action = ActionTuple()
        assert action.continuous.shape == (0, 0)
        assert action.discrete.shape == (0, 0)

    def test_one_dimensional_rejected(self):
        with pytest.raises(ValueError, match="2-D"):
            ActionTuple(continuous=[0.1, 0.2])
        with pytest.raises(ValueError, match="2-D"):
            ActionTuple(discrete=[1, 2])

    def test_float_discrete_rejected(self):
        with pytest.raises(ValueError, match="integers"):
            ActionTuple(discrete=[[0.5]])
