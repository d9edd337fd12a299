"""Configuration schema for behavior declarations — single source of truth.

These Pydantic models describe the behaviors an environment exposes so
that specs can be declared in JSON and checked before any batch is built.
Each model converts into the frozen core dataclasses.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from agentenv.core.actions import ActionSpec
from agentenv.core.types import (
    BehaviorMapping,
    BehaviorSpec,
    DimensionProperty,
    ObservationSpec,
    ObservationType,
)

_OBSERVATION_TYPES = {
    "default": ObservationType.DEFAULT,
    "goal_signal": ObservationType.GOAL_SIGNAL,
}


# ---------------------------------------------------------------------------
# Section 1: Observations
# ---------------------------------------------------------------------------

class ObservationSpecConfig(BaseModel):
    """One observation channel."""

    shape: list[int] = Field(
        min_length=1,
        description="Size of each dimension, batch axis excluded.",
    )
    dimension_property: list[int] | None = Field(
        default=None,
        description="DimensionProperty flags, one per dimension. Omit for UNSPECIFIED.",
    )
    observation_type: Literal["default", "goal_signal"] = Field(
        default="default",
        description="Kind of information carried by the observation.",
    )
    name: str | None = Field(
        default=None,
        description="Optional sensor name.",
    )

    @model_validator(mode="after")
    def positive_dimensions(self) -> ObservationSpecConfig:
        if any(dim < 1 for dim in self.shape):
            raise ValueError(f"shape entries must be >= 1 (got {self.shape}).")
        return self

    @model_validator(mode="after")
    def one_property_per_dimension(self) -> ObservationSpecConfig:
        if self.dimension_property is not None and len(self.dimension_property) != len(self.shape):
            raise ValueError(
                "dimension_property must have one entry per dimension "
                f"({len(self.dimension_property)} != {len(self.shape)})."
            )
        return self

    def to_spec(self) -> ObservationSpec:
        props = tuple(DimensionProperty(p) for p in self.dimension_property or ())
        return ObservationSpec(
            shape=tuple(self.shape),
            dimension_property=props,
            observation_type=_OBSERVATION_TYPES[self.observation_type],
            name=self.name,
        )


# ---------------------------------------------------------------------------
# Section 2: Actions
# ---------------------------------------------------------------------------

class ActionSpecConfig(BaseModel):
    """Continuous size and discrete branches of a behavior."""

    continuous_size: int = Field(
        default=0, ge=0,
        description="Number of continuous actions.",
    )
    discrete_branches: list[int] = Field(
        default_factory=list,
        description="Number of choices of each discrete branch.",
    )

    @model_validator(mode="after")
    def branches_not_empty(self) -> ActionSpecConfig:
        if any(b < 1 for b in self.discrete_branches):
            raise ValueError(
                f"discrete_branches entries must be >= 1 (got {self.discrete_branches})."
            )
        return self

    @model_validator(mode="after")
    def at_least_one_action(self) -> ActionSpecConfig:
        if self.continuous_size == 0 and not self.discrete_branches:
            raise ValueError("An action spec must declare at least one action.")
        return self

    def to_spec(self) -> ActionSpec:
        return ActionSpec(
            continuous_size=self.continuous_size,
            discrete_branches=tuple(self.discrete_branches),
        )


# ---------------------------------------------------------------------------
# Section 3: Behaviors
# ---------------------------------------------------------------------------

class BehaviorSpecConfig(BaseModel):
    """Observation and action spaces of one behavior."""

    observation_specs: list[ObservationSpecConfig] = Field(
        min_length=1,
        description="Observation channels, in the order agents send them.",
    )
    action_spec: ActionSpecConfig

    def to_spec(self) -> BehaviorSpec:
        return BehaviorSpec(
            observation_specs=tuple(o.to_spec() for o in self.observation_specs),
            action_spec=self.action_spec.to_spec(),
        )


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------

class EnvironmentSpecConfig(BaseModel):
    """Every behavior exposed by one environment.

    Behavior names follow the engine convention ``Name?team=0``.
    """

    behaviors: dict[str, BehaviorSpecConfig] = Field(
        min_length=1,
        description="Behavior name to spec.",
    )
    seed: int = Field(
        default=0, ge=0,
        description="Seed used for random actions.",
    )

    @model_validator(mode="after")
    def valid_behavior_names(self) -> EnvironmentSpecConfig:
        for name in self.behaviors:
            if not re.fullmatch(r"[\w.\-?=]+", name):
                raise ValueError(f"Invalid behavior name {name!r}.")
        return self

    def to_mapping(self) -> BehaviorMapping:
        return BehaviorMapping(
            {name: cfg.to_spec() for name, cfg in self.behaviors.items()}
        )
