"""Core data model of the environment API."""

from agentenv.core.actions import ActionSpec, ActionTuple
from agentenv.core.base_env import BaseEnv
from agentenv.core.steps import (
    AgentNotFoundError,
    DecisionStep,
    DecisionSteps,
    TerminalStep,
    TerminalSteps,
)
from agentenv.core.types import (
    AgentId,
    BehaviorMapping,
    BehaviorName,
    BehaviorSpec,
    DimensionProperty,
    ObservationSpec,
    ObservationType,
)

__all__ = [
    "ActionSpec",
    "ActionTuple",
    "AgentId",
    "AgentNotFoundError",
    "BaseEnv",
    "BehaviorMapping",
    "BehaviorName",
    "BehaviorSpec",
    "DecisionStep",
    "DecisionSteps",
    "DimensionProperty",
    "ObservationSpec",
    "ObservationType",
    "TerminalStep",
    "TerminalSteps",
]
