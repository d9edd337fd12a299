"""Framework-level types shared by every behavior.

These are the shared vocabulary of the environment API: identifiers,
observation descriptors and the per-behavior spec that sizes the
batches exchanged with the simulation.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum, IntFlag

from agentenv.core.actions import ActionSpec


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

AgentId = int  # unique within one simulation step
BehaviorName = str  # groups agents sharing specs and policy


# ---------------------------------------------------------------------------
# Observation descriptors
# ---------------------------------------------------------------------------

class ObservationType(Enum):
    """Kind of information carried by an observation."""

    DEFAULT = 0  # generic information
    GOAL_SIGNAL = 1  # goal of the current task


class DimensionProperty(IntFlag):
    """Per-dimension flags of an observation."""

    UNSPECIFIED = 0
    # No special property (e.g. a flat vector)
    NONE = 1
    # Translational equivariance (e.g. the width / height of an image)
    TRANSLATIONAL_EQUIVARIANCE = 2
    # Dimension whose size varies from step to step (e.g. entity lists)
    VARIABLE_SIZE = 4


@dataclass(frozen=True, slots=True)
class ObservationSpec:
    """Shape and type metadata of one observation channel.

    Parameters
    ----------
    shape : tuple[int, ...]
        Size of each dimension, batch axis excluded.  Every entry must be
        a positive integer.
    dimension_property : tuple[DimensionProperty, ...]
        One flag per dimension.  Defaults to UNSPECIFIED everywhere.
    observation_type : ObservationType
    name : str | None
        Optional sensor name.
    """

    shape: tuple[int, ...]
    dimension_property: tuple[DimensionProperty, ...] = ()
    observation_type: ObservationType = ObservationType.DEFAULT
    name: str | None = None

    def __post_init__(self) -> None:
        shape = tuple(self.shape)
        if not shape:
            raise ValueError("shape must have at least one dimension")
        for dim in shape:
            if isinstance(dim, bool) or not isinstance(dim, numbers.Integral) or dim < 1:
                raise ValueError(
                    f"shape entries must be positive integers, got {shape}"
                )
        object.__setattr__(self, "shape", tuple(int(dim) for dim in shape))

        props = tuple(self.dimension_property)
        if not props:
            props = (DimensionProperty.UNSPECIFIED,) * len(shape)
        if len(props) != len(shape):
            raise ValueError(
                "dimension_property must have one entry per dimension "
                f"({len(props)} != {len(shape)})"
            )
        object.__setattr__(
            self, "dimension_property", tuple(DimensionProperty(p) for p in props)
        )

        if not isinstance(self.observation_type, ObservationType):
            raise ValueError(
                f"observation_type must be an ObservationType, got {self.observation_type!r}"
            )


@dataclass(frozen=True, slots=True)
class BehaviorSpec:
    """Observation and action spaces of a group of agents.

    The order of ``observation_specs`` is the order of the observations
    each agent sends.
    """

    observation_specs: tuple[ObservationSpec, ...]
    action_spec: ActionSpec = field(default_factory=ActionSpec)

    def __post_init__(self) -> None:
        specs = tuple(self.observation_specs)
        for spec in specs:
            if not isinstance(spec, ObservationSpec):
                raise ValueError(f"expected ObservationSpec, got {spec!r}")
        object.__setattr__(self, "observation_specs", specs)


class BehaviorMapping(Mapping):
    """Read-only mapping of behavior name to BehaviorSpec."""

    def __init__(self, specs: dict[BehaviorName, BehaviorSpec]) -> None:
        self._dict = dict(specs)

    def __len__(self) -> int:
        return len(self._dict)

    def __getitem__(self, behavior: BehaviorName) -> BehaviorSpec:
        try:
            return self._dict[behavior]
        except KeyError:
            raise KeyError(f"Unknown behavior name {behavior}") from None

    def __iter__(self) -> Iterator[BehaviorName]:
        yield from self._dict
