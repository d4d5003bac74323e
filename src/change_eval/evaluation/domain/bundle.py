"""ResultsBundle — the run's single durable artifact."""

from pydantic import BaseModel, Field

from change_eval.agent.domain.log import ExecutionStatus
from change_eval.evaluation.domain.summary import ResultSummary
from change_eval.evaluator.domain.result import EvaluationResult

RESULTS_BUNDLE_VERSION = "1.0.0"


class RunEnvironment(BaseModel, frozen=True):
    os: str
    python_version: str
    workspace_dir: str


class RunMetadata(BaseModel, frozen=True):
    run_id: str
    name: str
    description: str | None = None
    config_file: str | None = None
    config_hash: str
    repo: str
    branch: str | None = None
    commit: str | None = None
    expected_branch: str | None = None
    expected_commit: str | None = None
    started_at: str
    completed_at: str
    duration_ms: int = Field(ge=0)
    tool_version: str
    environment: RunEnvironment


class AgentOutcome(BaseModel, frozen=True):
    type: str
    status: ExecutionStatus
    exit_code: int
    duration_ms: int = Field(ge=0)
    log_path: str


class BundleArtifacts(BaseModel, frozen=True):
    """Paths relative to the run's artifacts directory."""

    agent_log: str
    evaluator_artifacts: list[str] = Field(default_factory=list)


class ResultsBundle(BaseModel, frozen=True):
    version: str = RESULTS_BUNDLE_VERSION
    run: RunMetadata
    agent: AgentOutcome
    evaluators: list[EvaluationResult]
    summary: ResultSummary
    artifacts: BundleArtifacts
