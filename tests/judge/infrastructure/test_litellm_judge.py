"""Tests for LiteLLMJudge infrastructure implementation."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from change_eval.config.domain.judge import JudgeConfig
from change_eval.judge.domain.verdict import JudgeRequest, JudgeVerdict
from change_eval.judge.infrastructure.errors import JudgeInvocationError
from change_eval.judge.infrastructure.litellm import LiteLLMJudge
from tests.judge.fake_observer import FakeJudgeObserver

_ACOMPLETION = "change_eval.judge.infrastructure.litellm.litellm.acompletion"


def _make_judge(
    temperature: float = 0.0, observer: FakeJudgeObserver | None = None
) -> tuple[LiteLLMJudge, FakeJudgeObserver]:
    obs = observer if observer is not None else FakeJudgeObserver()
    judge = LiteLLMJudge(
        config=JudgeConfig(model="gpt-4o", temperature=temperature), observer=obs
    )
    return judge, obs


def _make_request() -> JudgeRequest:
    return JudgeRequest(
        evaluator="agentic-judge",
        assertions={
            "defines_greet": "The change defines greet()",
            "has_tests": "The change adds a test",
        },
        agent_prompt="Add greet()",
        diff="+def greet(name):\n+    return name\n",
        changed_files=["greeting.py"],
    )


def _make_verdict_json(failing: set[str] | None = None, omit: str | None = None) -> str:
    failing = failing or set()
    assertions = {
        name: {"passed": name not in failing, "reasoning": f"{name} checked"}
        for name in ("defines_greet", "has_tests")
        if name != omit
    }
    return json.dumps(
        {
            "status": "failed" if failing else "passed",
            "assertions": assertions,
            "summary": "Looks fine.",
        }
    )


def _make_acompletion_response(content: str) -> MagicMock:
    """Build a mock litellm response object with the given message content."""
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


class TestConstruction:
    """LiteLLMJudge warns when temperature > 0.0."""

    def test_zero_temperature_emits_no_warning(self) -> None:
        _, observer = _make_judge(temperature=0.0)

        assert observer.high_temperature == []

    def test_positive_temperature_warns(self) -> None:
        _, observer = _make_judge(temperature=0.5)

        assert observer.high_temperature[0].temperature == 0.5


class TestJudgeSuccess:
    async def test_returns_parsed_verdict(self) -> None:
        judge, observer = _make_judge()
        response = _make_acompletion_response(_make_verdict_json(failing={"has_tests"}))

        with patch(_ACOMPLETION, new=AsyncMock(return_value=response)):
            verdict = await judge.judge(_make_request())

        assert verdict.status == "failed"
        assert verdict.assertions["defines_greet"].passed is True
        assert verdict.assertions["has_tests"].passed is False
        assert observer.started == ["agentic-judge"]
        assert observer.completed[0].status == "failed"

    async def test_requests_structured_output_with_diff(self) -> None:
        judge, _ = _make_judge()
        mock = AsyncMock(return_value=_make_acompletion_response(_make_verdict_json()))

        with patch(_ACOMPLETION, new=mock):
            await judge.judge(_make_request())

        kwargs = mock.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["temperature"] == 0.0
        assert kwargs["response_format"] is JudgeVerdict
        user_message = kwargs["messages"][1]["content"]
        assert "Add greet()" in user_message
        assert "- defines_greet: The change defines greet()" in user_message
        assert "+def greet(name):" in user_message


class TestJudgeFailure:
    async def test_llm_error_is_retriable_invocation_error(self) -> None:
        judge, observer = _make_judge()

        with patch(_ACOMPLETION, new=AsyncMock(side_effect=RuntimeError("429"))):
            with pytest.raises(JudgeInvocationError) as exc_info:
                await judge.judge(_make_request())

        assert exc_info.value.retriable is True
        assert observer.failed[0].reason == "429"

    async def test_unparseable_response_raises(self) -> None:
        judge, observer = _make_judge()
        response = _make_acompletion_response("not json")

        with patch(_ACOMPLETION, new=AsyncMock(return_value=response)):
            with pytest.raises(JudgeInvocationError, match="parse"):
                await judge.judge(_make_request())

        assert len(observer.failed) == 1

    async def test_missing_assertion_raises(self) -> None:
        judge, _ = _make_judge()
        response = _make_acompletion_response(_make_verdict_json(omit="has_tests"))

        with patch(_ACOMPLETION, new=AsyncMock(return_value=response)):
            with pytest.raises(JudgeInvocationError, match="has_tests"):
                await judge.judge(_make_request())
