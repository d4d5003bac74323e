"""JudgeEvaluator — evaluator variant that delegates scoring to an injected Judge."""

from pydantic import BaseModel, ConfigDict, Field

from change_eval.diff.infrastructure.git_diff import collect_change_set
from change_eval.evaluator.domain.context import EvaluationContext
from change_eval.evaluator.domain.result import EvaluationResult, EvaluationStatus
from change_eval.evaluator.infrastructure.config import parse_evaluator_config
from change_eval.evaluator.infrastructure.errors import EvaluationError
from change_eval.judge.domain.judge import Judge
from change_eval.judge.domain.verdict import JudgeRequest
from change_eval.workspace.infrastructure.errors import GitCommandError

_TRUNCATION_MARKER = "\n... [diff truncated]"


class JudgeEvaluatorConfig(BaseModel, frozen=True):
    model_config = ConfigDict(extra="forbid")

    assertions: dict[str, str] = Field(default_factory=dict)
    base_ref: str | None = Field(default=None, min_length=1)
    max_diff_chars: int = Field(default=60_000, ge=1)


class JudgeEvaluator:
    """Asks a Judge whether the change satisfies each configured assertion.

    The evaluator passes only when every assertion passes, whatever overall
    status the judge itself reports.
    """

    def __init__(self, name: str, judge: Judge) -> None:
        self._name = name
        self._judge = judge

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return "AI judge assessment of named assertions over the change"

    @property
    def requires_expected_reference(self) -> bool:
        return False

    @property
    def precondition_message(self) -> str:
        return "no assertions configured for the judge"

    async def check_preconditions(self, context: EvaluationContext) -> bool:
        return bool(context.config_for(self._name).get("assertions"))

    async def evaluate(self, context: EvaluationContext) -> EvaluationResult:
        """
        Raises:
            EvaluatorConfigError: if the evaluator config is invalid.
            EvaluationError: if the diff cannot be collected.
            JudgeInvocationError: if the judge fails to return a verdict.
        """
        cfg = parse_evaluator_config(
            self._name, JudgeEvaluatorConfig, context.config_for(self._name)
        )
        try:
            change_set = await collect_change_set(
                context.modified_dir, cfg.base_ref or context.base_commit or "HEAD"
            )
        except GitCommandError as exc:
            raise EvaluationError(self._name, str(exc)) from exc

        diff = change_set.patch
        if len(diff) > cfg.max_diff_chars:
            diff = diff[: cfg.max_diff_chars] + _TRUNCATION_MARKER

        verdict = await self._judge.judge(
            JudgeRequest(
                evaluator=self._name,
                assertions=cfg.assertions,
                agent_prompt=_agent_prompt(context),
                diff=diff,
                changed_files=[f.path for f in change_set.files],
            )
        )

        requested = {
            name: verdict.assertions[name]
            for name in cfg.assertions
            if name in verdict.assertions
        }
        passed_count = sum(1 for v in requested.values() if v.passed)
        all_passed = passed_count == len(cfg.assertions)

        metrics: dict[str, int | float | str] = {
            name: 1 if v.passed else 0 for name, v in requested.items()
        }
        metrics["assertions_passed"] = passed_count
        metrics["assertions_total"] = len(cfg.assertions)

        return EvaluationResult(
            evaluator=self._name,
            status=EvaluationStatus.PASSED if all_passed else EvaluationStatus.FAILED,
            metrics=metrics,
            message=verdict.summary,
            assertions={name: v.model_dump() for name, v in requested.items()},
        )


def _agent_prompt(context: EvaluationContext) -> str:
    for message in context.agent_log.messages:
        if message.role == "user":
            return message.content
    return "(prompt not recorded)"
