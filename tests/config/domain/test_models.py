"""Tests for config domain models."""

import pytest
from pydantic import ValidationError

from change_eval.config.domain.agent import AgentConfig
from change_eval.config.domain.config import EvalConfig
from change_eval.config.domain.evaluator import EvaluatorSpec, is_judge_evaluator


def _make_config(**overrides: object) -> EvalConfig:
    fields: dict[str, object] = {
        "name": "demo",
        "repo": "/tmp/repo",
        "agent": AgentConfig(type="claude_code_sdk", prompt="do it"),
        "evaluators": [EvaluatorSpec(name="git-diff")],
    }
    fields.update(overrides)
    return EvalConfig.model_validate(fields)


class TestEvalConfig:
    def test_expected_reference_from_branch_or_commit(self) -> None:
        assert _make_config().has_expected_reference is False
        assert _make_config(expected="solution").has_expected_reference is True
        assert _make_config(expected_commit="abc123").has_expected_reference is True

    def test_is_frozen(self) -> None:
        config = _make_config()

        with pytest.raises(ValidationError):
            config.name = "other"  # type: ignore[misc]

    def test_evaluator_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            EvaluatorSpec(name="git-diff", timeout_seconds=0)


class TestIsJudgeEvaluator:
    @pytest.mark.parametrize(
        "name",
        ["agentic-judge", "agentic-judge-security", "agentic-judge:style"],
    )
    def test_judge_names(self, name: str) -> None:
        assert is_judge_evaluator(name) is True

    @pytest.mark.parametrize(
        "name",
        ["git-diff", "agentic-judge-", "agentic-judgement", "my-agentic-judge"],
    )
    def test_non_judge_names(self, name: str) -> None:
        assert is_judge_evaluator(name) is False
