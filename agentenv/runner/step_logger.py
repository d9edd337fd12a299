"""Step artifact logger — writes structured files into {base_dir}/{run_id}/.

Produces:
  - behavior_specs.json   Snapshot of every behavior spec (written once)
  - decision_steps.jsonl  One record per agent per DecisionSteps batch (append)
  - terminal_steps.jsonl  One record per agent per TerminalSteps batch (append)

Uses only stdlib (json, pathlib, datetime). No database dependency.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from agentenv.core.steps import DecisionSteps, TerminalSteps
from agentenv.core.types import BehaviorName, BehaviorSpec


def behavior_spec_to_dict(spec: BehaviorSpec) -> dict[str, Any]:
    """JSON-friendly view of a BehaviorSpec."""
    return {
        "observation_specs": [
            {
                "shape": list(o.shape),
                "dimension_property": [int(p) for p in o.dimension_property],
                "observation_type": o.observation_type.name.lower(),
                "name": o.name,
            }
            for o in spec.observation_specs
        ],
        "action_spec": {
            "continuous_size": spec.action_spec.continuous_size,
            "discrete_branches": list(spec.action_spec.discrete_branches),
        },
    }


class StepLogger:
    """Writes batch artifacts to a run directory."""

    def __init__(self, base_dir: str | Path, run_id: str) -> None:
        self._run_dir = Path(base_dir) / run_id
        self._run_dir.mkdir(parents=True, exist_ok=True)
        self._decision_path = self._run_dir / "decision_steps.jsonl"
        self._terminal_path = self._run_dir / "terminal_steps.jsonl"

    @property
    def run_dir(self) -> Path:
        return self._run_dir

    # ------------------------------------------------------------------
    # Spec snapshot
    # ------------------------------------------------------------------

    def write_behavior_specs(self, specs: Mapping[BehaviorName, BehaviorSpec]) -> Path:
        """Write every behavior spec as behavior_specs.json."""
        payload = {
            "written_at": datetime.now(timezone.utc).isoformat(),
            "behaviors": {name: behavior_spec_to_dict(s) for name, s in specs.items()},
        }
        path = self._run_dir / "behavior_specs.json"
        path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")
        return path

    # ------------------------------------------------------------------
    # Batches (append)
    # ------------------------------------------------------------------

    def log_decision_steps(
        self, step: int, behavior_name: BehaviorName, steps: DecisionSteps
    ) -> None:
        """Append one record per agent of ``steps`` to decision_steps.jsonl."""
        self._append(self._decision_path, self._records(step, behavior_name, steps))

    def log_terminal_steps(
        self, step: int, behavior_name: BehaviorName, steps: TerminalSteps
    ) -> None:
        """Append one record per agent of ``steps`` to terminal_steps.jsonl."""
        records = self._records(step, behavior_name, steps)
        for rec, interrupted in zip(records, steps.interrupted.tolist()):
            rec["interrupted"] = interrupted
        self._append(self._terminal_path, records)

    @staticmethod
    def _records(
        step: int, behavior_name: BehaviorName, steps: DecisionSteps | TerminalSteps
    ) -> list[dict[str, Any]]:
        return [
            {
                "step": step,
                "behavior_name": behavior_name,
                "agent_id": aid,
                "reward": reward,
                "group_id": gid,
                "group_reward": greward,
            }
            for aid, reward, gid, greward in zip(
                steps.agent_id.tolist(),
                steps.reward.tolist(),
                steps.group_id.tolist(),
                steps.group_reward.tolist(),
            )
        ]

    @staticmethod
    def _append(path: Path, records: list[dict[str, Any]]) -> None:
        if not records:
            return
        with path.open("a", encoding="utf-8") as f:
            for rec in records:
                f.write(json.dumps(rec, default=str) + "\n")
