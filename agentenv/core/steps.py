"""Batched per-step data exchanged with the simulation.

A simulation step moves the simulation forward until at least one agent
sends its observations again.  Agents that need a decision show up in a
DecisionSteps batch, agents whose episode ended show up in a
TerminalSteps batch.  The number and order of agents in a batch is not
stable across steps; agents are tracked by their agent id only.

Batches are immutable once constructed: arrays are exposed as read-only
views and per-agent items are independent copies.  This keeps the lazily
built agent-id index valid for the whole lifetime of a batch.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import numpy as np

from agentenv.core.types import AgentId, BehaviorSpec


class AgentNotFoundError(KeyError):
    """Raised when an agent id is not part of a batch."""

    def __init__(self, agent_id: Any, container: str = "DecisionSteps") -> None:
        self.agent_id = agent_id
        self.container = container
        super().__init__(f"agent_id {agent_id} is not present in the {container}")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


# ---------------------------------------------------------------------------
# Array helpers
# ---------------------------------------------------------------------------

_ID_INFO = np.iinfo(np.int32)


def _readonly(arr: np.ndarray) -> np.ndarray:
    view = arr.view()
    view.flags.writeable = False
    return view


def _agent_ids(agent_id: Any) -> np.ndarray:
    arr = np.asarray(agent_id)
    if arr.ndim != 1:
        raise ValueError(f"agent_id must be one-dimensional, got shape {arr.shape}")
    if arr.size and not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"agent_id must hold integers, got dtype {arr.dtype}")
    if arr.size and (arr.min() < _ID_INFO.min or arr.max() > _ID_INFO.max):
        raise ValueError(
            f"agent_id values must fit in int32 [{_ID_INFO.min}, {_ID_INFO.max}], "
            f"got range [{arr.min()}, {arr.max()}]"
        )
    return _readonly(np.array(arr, dtype=np.int32, copy=True))


def _batched(value: Any, batch_size: int, label: str, dtype: Any = None) -> np.ndarray:
    # Copied so later writes to the caller's buffer cannot reach the batch
    arr = np.array(value, dtype=dtype, copy=True)
    if arr.ndim == 0 or arr.shape[0] != batch_size:
        raise ValueError(
            f"{label} must have leading dimension {batch_size}, got shape {arr.shape}"
        )
    return _readonly(arr)


def _empty_obs(spec: BehaviorSpec) -> list[np.ndarray]:
    return [
        np.zeros((0,) + obs_spec.shape, dtype=np.float32)
        for obs_spec in spec.observation_specs
    ]


# ---------------------------------------------------------------------------
# Single-agent views
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DecisionStep:
    """Data one agent collected since the last simulation step.

    Parameters
    ----------
    obs : list[np.ndarray]
        One array per observation, batch axis removed.
    reward : float
        Reward collected since the last simulation step.
    agent_id : int
    action_mask : list[np.ndarray] | None
        One bool array per discrete branch; True marks an action that is
        unavailable this step.  None when the behavior sends no mask.
    group_id : int
    group_reward : float
    """

    obs: list[np.ndarray]
    reward: float
    agent_id: AgentId
    action_mask: list[np.ndarray] | None
    group_id: int
    group_reward: float


@dataclass(frozen=True, slots=True)
class TerminalStep:
    """Data one agent collected in the step its episode ended.

    ``interrupted`` is True when the episode was cut short (e.g. by a step
    limit) rather than reaching a terminal state.
    """

    obs: list[np.ndarray]
    reward: float
    interrupted: bool
    agent_id: AgentId
    group_id: int
    group_reward: float


# ---------------------------------------------------------------------------
# Batches
# ---------------------------------------------------------------------------

class _BatchedSteps:
    """Shared storage and agent-id indexing of DecisionSteps / TerminalSteps."""

    def __init__(
        self,
        obs: Sequence[Any],
        reward: Any,
        agent_id: Any,
        group_id: Any,
        group_reward: Any,
    ) -> None:
        self.agent_id = _agent_ids(agent_id)
        n = self.agent_id.shape[0]
        self.obs: tuple[np.ndarray, ...] = tuple(
            _batched(o, n, f"obs[{i}]", np.float32) for i, o in enumerate(obs)
        )
        self.reward = _batched(reward, n, "reward", np.float32)
        self.group_id = _batched(group_id, n, "group_id", np.int32)
        self.group_reward = _batched(group_reward, n, "group_reward", np.float32)
        # None until the first index request, then the built mapping
        self._agent_id_to_index: Mapping[AgentId, int] | None = None

    # ------------------------------------------------------------------
    # Index
    # ------------------------------------------------------------------

    @property
    def index_built(self) -> bool:
        return self._agent_id_to_index is not None

    @property
    def agent_id_to_index(self) -> Mapping[AgentId, int]:
        """Read-only mapping of agent id to its row in this batch.

        Built on first access and cached for the lifetime of the batch.
        """
        if self._agent_id_to_index is None:
            self._agent_id_to_index = self._build_index()
        return self._agent_id_to_index

    def _build_index(self) -> Mapping[AgentId, int]:
        index: dict[AgentId, int] = {}
        for row, aid in enumerate(self.agent_id.tolist()):
            # A repeated id keeps its last row
            index[aid] = row
        return MappingProxyType(index)

    def _row(self, agent_id: AgentId) -> int:
        """Row of ``agent_id`` in the already built index.

        Lookups never build the index; read ``agent_id_to_index`` first.
        Non-integral keys (e.g. 5.0) are not agent ids.
        """
        index = self._agent_id_to_index
        if (
            index is None
            or isinstance(agent_id, bool)
            or not isinstance(agent_id, numbers.Integral)
            or int(agent_id) not in index
        ):
            raise AgentNotFoundError(agent_id, type(self).__name__)
        return index[int(agent_id)]

    def _obs_row(self, row: int) -> list[np.ndarray]:
        return [batched[row].copy() for batched in self.obs]

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self.agent_id.shape[0]

    def __iter__(self) -> Iterator[AgentId]:
        yield from self.agent_id.tolist()

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self.agent_id_to_index


class DecisionSteps(_BatchedSteps):
    """Data a batch of agents of one behavior collected since the last step.

    Each ``obs`` array has one more dimension than in DecisionStep: the
    leading dimension is the batch size.  ``action_mask`` is either None
    or a list with one (batch, branch_size) bool array per discrete
    branch.
    """

    def __init__(
        self,
        obs: Sequence[Any],
        reward: Any,
        agent_id: Any,
        action_mask: Sequence[Any] | None,
        group_id: Any,
        group_reward: Any,
    ) -> None:
        super().__init__(obs, reward, agent_id, group_id, group_reward)
        self.action_mask: tuple[np.ndarray, ...] | None = None
        if action_mask is not None:
            n = len(self)
            masks = []
            for i, mask in enumerate(action_mask):
                arr = _batched(mask, n, f"action_mask[{i}]", bool)
                if arr.ndim != 2:
                    raise ValueError(
                        f"action_mask[{i}] must be 2-D (batch, branch_size), got shape {arr.shape}"
                    )
                masks.append(arr)
            self.action_mask = tuple(masks)

    def __getitem__(self, agent_id: AgentId) -> DecisionStep:
        """Return the DecisionStep of ``agent_id``.

        The index must have been built through ``agent_id_to_index``.
        Raises AgentNotFoundError if it was not, or if the agent is not in
        this batch.
        """
        row = self._row(agent_id)
        mask = None
        if self.action_mask is not None:
            mask = [branch[row].copy() for branch in self.action_mask]
        return DecisionStep(
            obs=self._obs_row(row),
            reward=float(self.reward[row]),
            agent_id=int(agent_id),
            action_mask=mask,
            group_id=int(self.group_id[row]),
            group_reward=float(self.group_reward[row]),
        )

    @staticmethod
    def empty(spec: BehaviorSpec) -> DecisionSteps:
        """Return an empty DecisionSteps sized from ``spec``."""
        return DecisionSteps(
            obs=_empty_obs(spec),
            reward=np.zeros(0, dtype=np.float32),
            agent_id=np.zeros(0, dtype=np.int32),
            action_mask=None,
            group_id=np.zeros(0, dtype=np.int32),
            group_reward=np.zeros(0, dtype=np.float32),
        )


class TerminalSteps(_BatchedSteps):
    """Data a batch of agents collected in the step their episode ended.

    ``interrupted`` is a bool vector of length batch size.
    """

    def __init__(
        self,
        obs: Sequence[Any],
        reward: Any,
        interrupted: Any,
        agent_id: Any,
        group_id: Any,
        group_reward: Any,
    ) -> None:
        super().__init__(obs, reward, agent_id, group_id, group_reward)
        self.interrupted = _batched(interrupted, len(self), "interrupted", bool)

    def __getitem__(self, agent_id: AgentId) -> TerminalStep:
        """Return the TerminalStep of ``agent_id``.

        The index must have been built through ``agent_id_to_index``.
        Raises AgentNotFoundError if it was not, or if the agent is not in
        this batch.
        """
        row = self._row(agent_id)
        return TerminalStep(
            obs=self._obs_row(row),
            reward=float(self.reward[row]),
            interrupted=bool(self.interrupted[row]),
            agent_id=int(agent_id),
            group_id=int(self.group_id[row]),
            group_reward=float(self.group_reward[row]),
        )

    @staticmethod
    def empty(spec: BehaviorSpec) -> TerminalSteps:
        """Return an empty TerminalSteps sized from ``spec``."""
        return TerminalSteps(
            obs=_empty_obs(spec),
            reward=np.zeros(0, dtype=np.float32),
            interrupted=np.zeros(0, dtype=bool),
            agent_id=np.zeros(0, dtype=np.int32),
            group_id=np.zeros(0, dtype=np.int32),
            group_reward=np.zeros(0, dtype=np.float32),
        )
