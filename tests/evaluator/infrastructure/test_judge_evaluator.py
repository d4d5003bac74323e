"""Tests for JudgeEvaluator, the evaluator variant backed by an injected Judge."""

from pathlib import Path

import pytest

from change_eval.evaluator.domain.result import EvaluationStatus
from change_eval.evaluator.infrastructure.judge import JudgeEvaluator
from change_eval.judge.infrastructure.errors import JudgeInvocationError
from tests.evaluator.context import make_context
from tests.git_repo import init_repo, requires_git, write_files
from tests.judge.fake_judge import FakeJudge

_ASSERTIONS = {
    "defines_greet": "The change defines a function named greet",
    "has_tests": "The change adds a unit test",
}


def _changed_repo(tmp_path: Path) -> Path:
    repo = tmp_path / "src-modified"
    init_repo(repo, {"greeting.py": "\n"})
    write_files(repo, {"greeting.py": "def greet(name):\n    return f'hi {name}'\n"})
    return repo


@requires_git
class TestJudgeEvaluator:
    async def test_all_assertions_pass(self, tmp_path: Path) -> None:
        judge = FakeJudge()
        context = make_context(
            tmp_path,
            modified_dir=_changed_repo(tmp_path),
            configs={"agentic-judge": {"assertions": _ASSERTIONS}},
            prompt="Add greet()",
        )

        result = await JudgeEvaluator(name="agentic-judge", judge=judge).evaluate(
            context
        )

        assert result.status is EvaluationStatus.PASSED
        assert result.metrics["assertions_passed"] == 2
        assert result.metrics["assertions_total"] == 2
        assert result.metrics["defines_greet"] == 1
        request = judge.requests[0]
        assert request.agent_prompt == "Add greet()"
        assert request.changed_files == ["greeting.py"]
        assert "+def greet(name):" in request.diff

    async def test_new_files_reach_the_judge(self, tmp_path: Path) -> None:
        repo = tmp_path / "src-modified"
        init_repo(repo, {"README.md": "# demo\n"})
        write_files(repo, {"greeting.py": "def greet(name):\n    return name\n"})
        judge = FakeJudge()
        context = make_context(
            tmp_path,
            modified_dir=repo,
            configs={"agentic-judge": {"assertions": _ASSERTIONS}},
        )

        await JudgeEvaluator(name="agentic-judge", judge=judge).evaluate(context)

        request = judge.requests[0]
        assert request.changed_files == ["greeting.py"]
        assert "+def greet(name):" in request.diff

    async def test_one_failing_assertion_fails(self, tmp_path: Path) -> None:
        context = make_context(
            tmp_path,
            modified_dir=_changed_repo(tmp_path),
            configs={"agentic-judge-quality": {"assertions": _ASSERTIONS}},
        )
        evaluator = JudgeEvaluator(
            name="agentic-judge-quality", judge=FakeJudge(failing={"has_tests"})
        )

        result = await evaluator.evaluate(context)

        assert result.status is EvaluationStatus.FAILED
        assert result.metrics["has_tests"] == 0
        assert result.metrics["assertions_passed"] == 1
        assert result.assertions is not None
        assert result.assertions["has_tests"]["passed"] is False

    async def test_long_diff_is_truncated(self, tmp_path: Path) -> None:
        judge = FakeJudge()
        context = make_context(
            tmp_path,
            modified_dir=_changed_repo(tmp_path),
            configs={
                "agentic-judge": {"assertions": _ASSERTIONS, "max_diff_chars": 20}
            },
        )

        await JudgeEvaluator(name="agentic-judge", judge=judge).evaluate(context)

        diff = judge.requests[0].diff
        assert diff.endswith("[diff truncated]")
        assert len(diff) < 60

    async def test_judge_errors_propagate(self, tmp_path: Path) -> None:
        context = make_context(
            tmp_path,
            modified_dir=_changed_repo(tmp_path),
            configs={"agentic-judge": {"assertions": _ASSERTIONS}},
        )
        evaluator = JudgeEvaluator(
            name="agentic-judge",
            judge=FakeJudge(error=JudgeInvocationError(reason="rate limited")),
        )

        with pytest.raises(JudgeInvocationError):
            await evaluator.evaluate(context)


class TestJudgeEvaluatorPreconditions:
    async def test_requires_assertions(self, tmp_path: Path) -> None:
        evaluator = JudgeEvaluator(name="agentic-judge", judge=FakeJudge())

        assert await evaluator.check_preconditions(make_context(tmp_path)) is False
        assert (
            await evaluator.check_preconditions(
                make_context(
                    tmp_path, configs={"agentic-judge": {"assertions": _ASSERTIONS}}
                )
            )
            is True
        )
