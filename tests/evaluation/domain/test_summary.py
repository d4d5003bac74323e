"""Tests for result summarization and the overall verdict."""

import pytest

from change_eval.evaluation.domain.summary import OverallStatus, summarize
from change_eval.evaluator.domain.result import EvaluationResult, EvaluationStatus


def _results(*statuses: EvaluationStatus) -> list[EvaluationResult]:
    return [
        EvaluationResult(evaluator=f"e{i}", status=status, message="")
        for i, status in enumerate(statuses)
    ]


P, F, S = EvaluationStatus.PASSED, EvaluationStatus.FAILED, EvaluationStatus.SKIPPED


class TestSummarize:
    @pytest.mark.parametrize(
        ("statuses", "expected"),
        [
            ((P, P), OverallStatus.PASSED),
            ((P, F), OverallStatus.FAILED),
            ((P, S), OverallStatus.PARTIAL),
            ((F, S), OverallStatus.FAILED),
            ((S, S), OverallStatus.PARTIAL),
            ((), OverallStatus.PASSED),
        ],
    )
    def test_overall_status(
        self, statuses: tuple[EvaluationStatus, ...], expected: OverallStatus
    ) -> None:
        assert summarize(_results(*statuses)).overall_status is expected

    def test_counts(self) -> None:
        summary = summarize(_results(P, S, P))

        assert (summary.total, summary.passed, summary.failed, summary.skipped) == (
            3,
            2,
            0,
            1,
        )
