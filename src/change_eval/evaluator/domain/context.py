"""EvaluationContext — the read-only view every evaluator receives."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from change_eval.agent.domain.log import StandardLog


class EvaluationContext(BaseModel, frozen=True):
    """Built once after the agent finishes and shared by reference.

    ``base_commit`` is the commit the modified tree was materialized at, the
    natural base for diffs even if the agent committed its work.

    The directories are not to be written by evaluators, with the exception
    of ``evaluator_artifacts_dir`` which holds per-evaluator outputs.
    """

    modified_dir: Path
    expected_dir: Path | None = None
    artifacts_dir: Path
    evaluator_artifacts_dir: Path
    base_commit: str | None = None
    agent_log: StandardLog
    evaluator_configs: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @property
    def has_expected(self) -> bool:
        return self.expected_dir is not None

    def config_for(self, evaluator_name: str) -> dict[str, Any]:
        return self.evaluator_configs.get(evaluator_name, {})
