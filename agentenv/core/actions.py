"""Action descriptors.

V1 action model:
  - continuous part: float32 array of shape (n_agents, continuous_size)
  - discrete part: int32 array of shape (n_agents, num_branches), one
    chosen index per branch
Applying actions to a running simulation is the transport's job.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass

import numpy as np

from agentenv.core.seeding import make_rng


class ActionTuple:
    """Batched actions for every agent of one behavior.

    Either part may be omitted; it then defaults to an empty array with
    the batch size of the other part.
    """

    def __init__(
        self,
        continuous: np.ndarray | list | None = None,
        discrete: np.ndarray | list | None = None,
    ) -> None:
        self._continuous: np.ndarray | None = None
        self._discrete: np.ndarray | None = None
        if continuous is not None:
            self.add_continuous(continuous)
        if discrete is not None:
            self.add_discrete(discrete)

    @property
    def continuous(self) -> np.ndarray:
        if self._continuous is None:
            return np.zeros((self._batch_size(), 0), dtype=np.float32)
        return self._continuous

    @property
    def discrete(self) -> np.ndarray:
        if self._discrete is None:
            return np.zeros((self._batch_size(), 0), dtype=np.int32)
        return self._discrete

    def add_continuous(self, continuous: np.ndarray | list) -> None:
        arr = np.asarray(continuous, dtype=np.float32)
        if arr.ndim != 2:
            raise ValueError(
                f"continuous actions must be 2-D (n_agents, size), got shape {arr.shape}"
            )
        self._continuous = arr

    def add_discrete(self, discrete: np.ndarray | list) -> None:
        arr = np.asarray(discrete)
        if arr.size and not np.issubdtype(arr.dtype, np.integer):
            raise ValueError(f"discrete actions must be integers, got dtype {arr.dtype}")
        arr = arr.astype(np.int32, copy=False)
        if arr.ndim != 2:
            raise ValueError(
                f"discrete actions must be 2-D (n_agents, branches), got shape {arr.shape}"
            )
        self._discrete = arr

    def _batch_size(self) -> int:
        for part in (self._continuous, self._discrete):
            if part is not None:
                return part.shape[0]
        return 0


@dataclass(frozen=True, slots=True)
class ActionSpec:
    """Action space of a behavior.

    Parameters
    ----------
    continuous_size : int
        Number of continuous actions.
    discrete_branches : tuple[int, ...]
        Number of choices of each discrete branch.
    """

    continuous_size: int = 0
    discrete_branches: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        size = self.continuous_size
        if isinstance(size, bool) or not isinstance(size, numbers.Integral) or size < 0:
            raise ValueError(f"continuous_size must be an integer >= 0, got {size!r}")
        object.__setattr__(self, "continuous_size", int(size))
        branches = tuple(self.discrete_branches)
        if any(
            isinstance(b, bool) or not isinstance(b, numbers.Integral) or b < 1
            for b in branches
        ):
            raise ValueError(f"discrete branch sizes must be >= 1, got {branches}")
        object.__setattr__(self, "discrete_branches", tuple(int(b) for b in branches))

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def create_continuous(cls, continuous_size: int) -> ActionSpec:
        return cls(continuous_size=continuous_size)

    @classmethod
    def create_discrete(cls, discrete_branches: tuple[int, ...]) -> ActionSpec:
        return cls(discrete_branches=tuple(discrete_branches))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_continuous(self) -> bool:
        """True if the spec has continuous actions only."""
        return self.continuous_size > 0 and self.discrete_size == 0

    def is_discrete(self) -> bool:
        """True if the spec has discrete actions only."""
        return self.discrete_size > 0 and self.continuous_size == 0

    @property
    def discrete_size(self) -> int:
        """Number of discrete branches."""
        return len(self.discrete_branches)

    # ------------------------------------------------------------------
    # Action helpers
    # ------------------------------------------------------------------

    def empty_action(self, n_agents: int) -> ActionTuple:
        """Zero-filled actions for ``n_agents`` agents."""
        return ActionTuple(
            continuous=np.zeros((n_agents, self.continuous_size), dtype=np.float32),
            discrete=np.zeros((n_agents, self.discrete_size), dtype=np.int32),
        )

    def random_action(
        self, n_agents: int, seed: int | np.random.Generator | None = None
    ) -> ActionTuple:
        """Uniformly random actions, deterministic given ``seed``.

        Continuous values are drawn in [-1, 1], each discrete branch in
        [0, branch_size).
        """
        rng = make_rng(seed)
        continuous = rng.uniform(
            low=-1.0, high=1.0, size=(n_agents, self.continuous_size)
        ).astype(np.float32)
        discrete = np.zeros((n_agents, self.discrete_size), dtype=np.int32)
        for j, branch_size in enumerate(self.discrete_branches):
            discrete[:, j] = rng.integers(0, branch_size, size=n_agents)
        return ActionTuple(continuous=continuous, discrete=discrete)

    def validate_action(self, actions: ActionTuple, n_agents: int) -> ActionTuple:
        """Check that ``actions`` fits this spec for ``n_agents`` agents.

        A part the spec does not declare is only checked for being empty.
        """
        parts = (
            ("continuous", actions.continuous, self.continuous_size),
            ("discrete", actions.discrete, self.discrete_size),
        )
        for label, part, width in parts:
            if width == 0:
                if part.shape[1] != 0:
                    raise ValueError(
                        f"{label} action given but the spec declares none: "
                        f"received shape {part.shape}"
                    )
                continue
            expected = (n_agents, width)
            if part.shape != expected:
                raise ValueError(
                    f"{label} action has invalid shape: expected "
                    f"{expected}, received {part.shape}"
                )
        for j, branch_size in enumerate(self.discrete_branches):
            column = actions.discrete[:, j]
            if column.size and (column.min() < 0 or column.max() >= branch_size):
                raise ValueError(
                    f"discrete branch {j} values must be in [0, {branch_size})"
                )
        return actions
