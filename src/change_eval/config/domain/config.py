"""Top-level EvalConfig aggregate — the root configuration object."""

from pydantic import BaseModel, Field

from change_eval.config.domain.agent import AgentConfig
from change_eval.config.domain.evaluator import EvaluatorSpec
from change_eval.config.domain.execution import ExecutionConfig
from change_eval.config.domain.hooks import HooksConfig
from change_eval.config.domain.judge import JudgeConfig


class EvalConfig(BaseModel, frozen=True):
    """Root configuration aggregate for one change-eval run."""

    name: str = Field(min_length=1)
    description: str | None = None
    repo: str = Field(min_length=1)
    branch: str | None = None
    commit: str | None = None
    expected: str | None = None
    expected_commit: str | None = None
    agent: AgentConfig
    judge: JudgeConfig | None = None
    evaluators: list[EvaluatorSpec] = Field(min_length=1)
    hooks: HooksConfig = Field(default_factory=HooksConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)

    @property
    def has_expected_reference(self) -> bool:
        return self.expected is not None or self.expected_commit is not None
