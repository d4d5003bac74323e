"""Tests for agent log and results bundle storage."""

from pathlib import Path

from change_eval.config.domain.agent import AgentConfig
from change_eval.config.domain.config import EvalConfig
from change_eval.config.domain.evaluator import EvaluatorSpec
from change_eval.evaluation.infrastructure.storage import (
    config_hash,
    list_evaluator_artifacts,
    save_agent_log,
)
from tests.agent.fake_agent import make_standard_log


def _make_config(prompt: str = "do it") -> EvalConfig:
    return EvalConfig(
        name="demo",
        repo="/tmp/repo",
        agent=AgentConfig(type="claude_code_sdk", prompt=prompt),
        evaluators=[EvaluatorSpec(name="git-diff")],
    )


class TestConfigHash:
    def test_is_stable_and_short(self) -> None:
        assert config_hash(_make_config()) == config_hash(_make_config())
        assert len(config_hash(_make_config())) == 16

    def test_changes_with_config(self) -> None:
        assert config_hash(_make_config("a")) != config_hash(_make_config("b"))


class TestArtifacts:
    def test_agent_log_round_trips(self, tmp_path: Path) -> None:
        log = make_standard_log()

        path = save_agent_log(tmp_path, log)

        assert path.name == "agent-log.json"
        assert type(log).model_validate_json(path.read_text()) == log

    def test_lists_evaluator_artifacts_only(self, tmp_path: Path) -> None:
        (tmp_path / "evaluators").mkdir()
        (tmp_path / "evaluators" / "git-diff.patch").write_text("diff")
        (tmp_path / "agent-log.json").write_text("{}")
        (tmp_path / "results.json").write_text("{}")

        assert list_evaluator_artifacts(tmp_path) == ["evaluators/git-diff.patch"]
