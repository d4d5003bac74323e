"""ExpectedDiffEvaluator — similarity of the modified tree to an expected reference tree."""

import asyncio
import json

from pydantic import BaseModel, ConfigDict, Field

from change_eval.diff.domain.similarity import SimilarityReport
from change_eval.diff.infrastructure.tree import compare_trees
from change_eval.evaluator.domain.context import EvaluationContext
from change_eval.evaluator.domain.result import (
    EvaluationArtifact,
    EvaluationResult,
    EvaluationStatus,
)
from change_eval.evaluator.infrastructure.config import parse_evaluator_config

EXPECTED_DIFF_EVALUATOR_NAME = "expected-diff"
_REPORT_FILE_NAME = "expected-diff-report.json"


class ExpectedDiffConfig(BaseModel, frozen=True):
    model_config = ConfigDict(extra="forbid")

    threshold: float = Field(default=0.80, ge=0.0, le=1.0)


class ExpectedDiffEvaluator:
    """Passes when aggregate similarity to the expected tree meets the threshold."""

    def __init__(self, name: str = EXPECTED_DIFF_EVALUATOR_NAME) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return "Line-based similarity between the modified and expected trees"

    @property
    def requires_expected_reference(self) -> bool:
        return True

    @property
    def precondition_message(self) -> str:
        return "expected reference tree is not available"

    async def check_preconditions(self, context: EvaluationContext) -> bool:
        return (
            context.expected_dir is not None
            and context.expected_dir.is_dir()
            and context.modified_dir.is_dir()
        )

    async def evaluate(self, context: EvaluationContext) -> EvaluationResult:
        """
        Raises:
            EvaluatorConfigError: if the threshold is outside [0, 1].
        """
        cfg = parse_evaluator_config(
            self._name, ExpectedDiffConfig, context.config_for(self._name)
        )
        assert context.expected_dir is not None  # guaranteed by check_preconditions
        report = await asyncio.to_thread(
            compare_trees, context.modified_dir, context.expected_dir
        )

        report_path = context.evaluator_artifacts_dir / _REPORT_FILE_NAME
        await asyncio.to_thread(
            report_path.write_text,
            json.dumps(
                {"threshold": cfg.threshold, **report.model_dump(mode="json")},
                indent=2,
            ),
            encoding="utf-8",
        )

        passed = report.aggregate_similarity >= cfg.threshold
        return EvaluationResult(
            evaluator=self._name,
            status=EvaluationStatus.PASSED if passed else EvaluationStatus.FAILED,
            metrics={
                "aggregate_similarity": report.aggregate_similarity,
                "threshold": cfg.threshold,
                "files_matched": report.files_matched,
                "files_changed": report.files_changed,
                "files_added": report.files_added,
                "files_removed": report.files_removed,
                "total_files": report.total_files,
            },
            message=_message(report, cfg.threshold),
            assertions={"threshold": cfg.threshold},
            artifacts=[
                EvaluationArtifact(
                    type="report",
                    path=report_path.relative_to(context.artifacts_dir).as_posix(),
                    description="Per-file similarity against the expected tree",
                )
            ],
        )


def _message(report: SimilarityReport, threshold: float) -> str:
    return (
        f"Similarity: {report.aggregate_similarity:.1%} (threshold: {threshold:.1%})"
        f" | Files: {report.files_matched} matched, {report.files_changed} changed,"
        f" {report.files_added} added, {report.files_removed} removed"
    )
