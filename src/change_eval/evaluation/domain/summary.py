"""Result summary — status counts and the overall verdict for a run."""

from enum import StrEnum

from pydantic import BaseModel, Field

from change_eval.evaluator.domain.result import EvaluationResult, EvaluationStatus


class OverallStatus(StrEnum):
    PASSED = "passed"
    FAILED = "failed"
    PARTIAL = "partial"


class ResultSummary(BaseModel, frozen=True):
    total: int = Field(ge=0)
    passed: int = Field(ge=0)
    failed: int = Field(ge=0)
    skipped: int = Field(ge=0)
    overall_status: OverallStatus


def summarize(results: list[EvaluationResult]) -> ResultSummary:
    """Count statuses and derive the verdict.

    Any failed result fails the run. Otherwise any skipped result makes it
    partial, since a skipped evaluator neither confirms nor refutes the change.
    An empty result list passes.
    """
    passed = sum(1 for r in results if r.status is EvaluationStatus.PASSED)
    failed = sum(1 for r in results if r.status is EvaluationStatus.FAILED)
    skipped = sum(1 for r in results if r.status is EvaluationStatus.SKIPPED)

    if failed:
        overall = OverallStatus.FAILED
    elif skipped:
        overall = OverallStatus.PARTIAL
    else:
        overall = OverallStatus.PASSED

    return ResultSummary(
        total=len(results),
        passed=passed,
        failed=failed,
        skipped=skipped,
        overall_status=overall,
    )
