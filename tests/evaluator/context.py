"""Builds EvaluationContext instances over real directories for evaluator tests."""

from pathlib import Path
from typing import Any

from change_eval.evaluator.domain.context import EvaluationContext
from tests.agent.fake_agent import make_standard_log


def make_context(
    tmp_path: Path,
    modified_dir: Path | None = None,
    expected_dir: Path | None = None,
    base_commit: str | None = None,
    configs: dict[str, dict[str, Any]] | None = None,
    prompt: str = "Add a greeting function.",
) -> EvaluationContext:
    artifacts_dir = tmp_path / "artifacts"
    evaluator_artifacts_dir = artifacts_dir / "evaluators"
    evaluator_artifacts_dir.mkdir(parents=True, exist_ok=True)
    return EvaluationContext(
        modified_dir=modified_dir or tmp_path / "src-modified",
        expected_dir=expected_dir,
        artifacts_dir=artifacts_dir,
        evaluator_artifacts_dir=evaluator_artifacts_dir,
        base_commit=base_commit,
        agent_log=make_standard_log(prompt),
        evaluator_configs=configs or {},
    )
