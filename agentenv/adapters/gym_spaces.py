"""gymnasium space adapter for behavior specs.

Thin translation from our ObservationSpec / ActionSpec descriptors to
gymnasium spaces, so trainers built on gymnasium can size their models
from a BehaviorSpec.
"""

from __future__ import annotations

import numpy as np
from gymnasium import spaces

from agentenv.core.actions import ActionSpec
from agentenv.core.types import BehaviorSpec, ObservationSpec


# ------------------------------------------------------------------
# Observations
# ------------------------------------------------------------------

def observation_space(obs_spec: ObservationSpec) -> spaces.Box:
    """Unbounded float32 Box shaped like one observation."""
    return spaces.Box(
        low=-np.inf, high=np.inf, shape=obs_spec.shape, dtype=np.float32
    )


def observation_spaces(behavior_spec: BehaviorSpec) -> spaces.Tuple:
    """One Box per observation, in spec order."""
    return spaces.Tuple(
        tuple(observation_space(o) for o in behavior_spec.observation_specs)
    )


# ------------------------------------------------------------------
# Actions
# ------------------------------------------------------------------

def _continuous_space(size: int) -> spaces.Box:
    return spaces.Box(low=-1.0, high=1.0, shape=(size,), dtype=np.float32)


def _discrete_space(branches: tuple[int, ...]) -> spaces.MultiDiscrete:
    return spaces.MultiDiscrete(np.array(branches, dtype=np.int64))


def action_space(action_spec: ActionSpec) -> spaces.Space:
    """Box for continuous, MultiDiscrete for discrete, Tuple of both for hybrid."""
    if action_spec.is_continuous():
        return _continuous_space(action_spec.continuous_size)
    if action_spec.is_discrete():
        return _discrete_space(action_spec.discrete_branches)
    if action_spec.continuous_size and action_spec.discrete_size:
        return spaces.Tuple(
            (
                _continuous_space(action_spec.continuous_size),
                _discrete_space(action_spec.discrete_branches),
            )
        )
    raise ValueError("ActionSpec declares no actions; cannot build an action space.")
