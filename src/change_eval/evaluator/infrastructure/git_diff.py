"""GitDiffEvaluator — change-scope metrics and entropy with threshold assertions."""

import asyncio

from pydantic import BaseModel, ConfigDict, Field

from change_eval.diff.domain.metrics import (
    ChangeMetrics,
    GitDiffAssertions,
    check_assertions,
    compute_metrics,
)
from change_eval.diff.infrastructure.git_diff import collect_change_set
from change_eval.evaluator.domain.context import EvaluationContext
from change_eval.evaluator.domain.result import (
    EvaluationArtifact,
    EvaluationResult,
    EvaluationStatus,
)
from change_eval.evaluator.infrastructure.config import parse_evaluator_config
from change_eval.evaluator.infrastructure.errors import EvaluationError
from change_eval.workspace.infrastructure.errors import GitCommandError
from change_eval.workspace.infrastructure.git import is_work_tree

GIT_DIFF_EVALUATOR_NAME = "git-diff"
_PATCH_FILE_NAME = "git-diff.patch"


class GitDiffConfig(BaseModel, frozen=True):
    model_config = ConfigDict(extra="forbid")

    base_ref: str | None = Field(default=None, min_length=1)
    assertions: GitDiffAssertions = Field(default_factory=GitDiffAssertions)


class GitDiffEvaluator:
    """Scores how large and how spread out the agent's change is."""

    def __init__(self, name: str = GIT_DIFF_EVALUATOR_NAME) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return "Change-scope metrics and change entropy of the modified tree"

    @property
    def requires_expected_reference(self) -> bool:
        return False

    @property
    def precondition_message(self) -> str:
        return "modified directory is not a git work tree"

    async def check_preconditions(self, context: EvaluationContext) -> bool:
        return await is_work_tree(context.modified_dir)

    async def evaluate(self, context: EvaluationContext) -> EvaluationResult:
        """
        Raises:
            EvaluatorConfigError: if the evaluator config is invalid.
            EvaluationError: if git cannot produce the change set.
        """
        cfg = parse_evaluator_config(
            self._name, GitDiffConfig, context.config_for(self._name)
        )
        try:
            change_set = await collect_change_set(
                context.modified_dir, cfg.base_ref or context.base_commit or "HEAD"
            )
        except GitCommandError as exc:
            raise EvaluationError(self._name, str(exc)) from exc

        metrics = compute_metrics(change_set.files)
        violations = check_assertions(metrics, cfg.assertions)

        artifacts: list[EvaluationArtifact] = []
        if change_set.patch:
            patch_path = context.evaluator_artifacts_dir / _PATCH_FILE_NAME
            await asyncio.to_thread(
                patch_path.write_text, change_set.patch, encoding="utf-8"
            )
            artifacts.append(
                EvaluationArtifact(
                    type="diff",
                    path=patch_path.relative_to(context.artifacts_dir).as_posix(),
                    description=f"Unified diff against {change_set.base_ref}",
                )
            )

        if violations:
            status = EvaluationStatus.FAILED
        elif cfg.assertions.is_empty and metrics.files_changed == 0:
            status = EvaluationStatus.SKIPPED
        else:
            status = EvaluationStatus.PASSED

        return EvaluationResult(
            evaluator=self._name,
            status=status,
            metrics={
                "files_changed": metrics.files_changed,
                "lines_added": metrics.lines_added,
                "lines_removed": metrics.lines_removed,
                "total_changes": metrics.total_changes,
                "change_entropy": round(metrics.change_entropy, 4),
                "changed_files": [f.path for f in metrics.files],
                "base_ref": change_set.base_ref,
                "current_commit": change_set.head_commit,
            },
            message=_message(metrics, violations, status),
            assertions=cfg.assertions.model_dump(exclude_none=True) or None,
            artifacts=artifacts or None,
        )


def _message(
    metrics: ChangeMetrics, violations: list[str], status: EvaluationStatus
) -> str:
    if status is EvaluationStatus.SKIPPED:
        return "No changes detected and no assertions configured"
    summary = (
        f"{metrics.files_changed} changed files"
        f" (+{metrics.lines_added}/-{metrics.lines_removed} lines)"
    )
    if violations:
        return f"{summary} | Violations: {'; '.join(violations)}"
    return summary
