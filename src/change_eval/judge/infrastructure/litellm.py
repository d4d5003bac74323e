"""LiteLLMJudge — judge implementation using LiteLLM structured output."""

import time

import litellm

from change_eval.config.domain.judge import JudgeConfig
from change_eval.judge.domain.observer import JudgeObserver
from change_eval.judge.domain.verdict import JudgeRequest, JudgeVerdict
from change_eval.judge.infrastructure.errors import JudgeInvocationError

_SYSTEM_PROMPT = """\
You are an expert code reviewer judging whether an automated code change \
satisfies a list of named assertions. You are given the task the coding agent \
was asked to perform, the list of changed files, and the unified diff of its \
change against the starting commit.

For every assertion, decide independently whether the change satisfies it, and \
give a short reasoning grounded in the diff. Do not reward changes that are \
unrelated to the task. If the diff is truncated, judge only what is visible and \
say so in your reasoning.

## Output Format

Respond with a JSON object containing:
- status: "passed" if every assertion passed, otherwise "failed"
- assertions: an object keyed by assertion name, each value an object with
  - passed: boolean
  - reasoning: brief explanation
- summary: one or two sentences summarizing the verdict
"""


class LiteLLMJudge:
    """Judge implementation that delegates to an LLM via LiteLLM.

    One instance serves every judge evaluator in a run; the evaluator name
    travels in the request so observer events carry it.
    """

    def __init__(self, config: JudgeConfig, observer: JudgeObserver) -> None:
        self._config = config
        self._observer = observer

        if config.temperature > 0.0:
            self._observer.judge_high_temperature_warned(
                model=config.model, temperature=config.temperature
            )

    async def judge(self, request: JudgeRequest) -> JudgeVerdict:
        """Invoke the LLM judge and return a validated JudgeVerdict.

        Raises:
            JudgeInvocationError: if the LLM call fails, the response cannot be
                parsed, or the verdict omits a requested assertion.
        """
        self._observer.judge_started(
            evaluator=request.evaluator,
            model=self._config.model,
            num_assertions=len(request.assertions),
        )

        start = time.monotonic()
        try:
            response = await litellm.acompletion(
                model=self._config.model,
                temperature=self._config.temperature,
                response_format=JudgeVerdict,
                messages=[
                    {"role": "system", "content": _SYSTEM_PROMPT},
                    {"role": "user", "content": _build_user_message(request)},
                ],
            )
        except Exception as exc:
            reason = str(exc)
            self._observer.judge_failed(evaluator=request.evaluator, reason=reason)
            raise JudgeInvocationError(reason=reason, retriable=True) from exc

        raw_content: str = response.choices[0].message.content
        try:
            verdict = JudgeVerdict.model_validate_json(raw_content)
        except Exception as exc:
            reason = f"Failed to parse judge response: {exc}"
            self._observer.judge_failed(evaluator=request.evaluator, reason=reason)
            raise JudgeInvocationError(reason=reason) from exc

        missing = sorted(set(request.assertions) - set(verdict.assertions))
        if missing:
            reason = f"verdict is missing assertions: {', '.join(missing)}"
            self._observer.judge_failed(evaluator=request.evaluator, reason=reason)
            raise JudgeInvocationError(reason=reason)

        self._observer.judge_completed(
            evaluator=request.evaluator,
            status=verdict.status,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        return verdict


def _build_user_message(request: JudgeRequest) -> str:
    assertion_lines = "\n".join(
        f"- {name}: {description}" for name, description in request.assertions.items()
    )
    changed = "\n".join(f"- {path}" for path in request.changed_files) or "(none)"
    return (
        f"## Task Given to the Agent\n{request.agent_prompt}\n\n"
        f"## Assertions\n{assertion_lines}\n\n"
        f"## Changed Files\n{changed}\n\n"
        f"## Diff\n```diff\n{request.diff}\n```"
    )
