"""Abstract environment contract.

Every transport connecting to a running simulation must implement this
interface.  Agents are grouped by behavior name; each group shares one
BehaviorSpec and its data is exchanged in batches:

  1. Specs     — behavior_specs describes every behavior
  2. Actions   — set_actions / set_action_for_agent queue actions
  3. Step      — step() moves the simulation to the next decision point
  4. Steps     — get_steps() returns the resulting DecisionSteps / TerminalSteps
  5. Lifecycle — reset() and close()
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from agentenv.core.actions import ActionTuple
from agentenv.core.steps import DecisionSteps, TerminalSteps
from agentenv.core.types import AgentId, BehaviorMapping, BehaviorName


class BaseEnv(ABC):
    """Abstract environment contract.  Transport-agnostic."""

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @abstractmethod
    def step(self) -> None:
        """Advance the simulation until at least one agent needs a decision."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset the simulation and start a new episode for every agent."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the connection to the simulation."""
        ...

    # ------------------------------------------------------------------
    # Specs
    # ------------------------------------------------------------------

    @property
    @abstractmethod
    def behavior_specs(self) -> BehaviorMapping:
        """Mapping of behavior name to BehaviorSpec.

        New behaviors may appear after a step(); known ones never change.
        """
        ...

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    @abstractmethod
    def set_actions(self, behavior_name: BehaviorName, action: ActionTuple) -> None:
        """Queue actions for every agent of the last DecisionSteps of a behavior.

        Rows follow the order of that DecisionSteps.
        """
        ...

    @abstractmethod
    def set_action_for_agent(
        self, behavior_name: BehaviorName, agent_id: AgentId, action: ActionTuple
    ) -> None:
        """Queue the action of a single agent (batch size 1)."""
        ...

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @abstractmethod
    def get_steps(
        self, behavior_name: BehaviorName
    ) -> tuple[DecisionSteps, TerminalSteps]:
        """Return the agents of a behavior that need a decision and those
        whose episode ended since the last step().
        """
        ...
