"""AgentExecutionResult and the context an agent adapter runs in."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from change_eval.agent.domain.log import ExecutionStatus


class AgentExecutionContext(BaseModel, frozen=True):
    """Everything an adapter needs to run the agent against the modified tree.

    ``env`` is the complete environment for any subprocess the adapter starts.
    """

    workspace_dir: Path
    repo_dir: Path
    artifacts_dir: Path
    prompt: str
    model: str | None = None
    timeout_seconds: float = Field(gt=0)
    env: dict[str, str] = Field(default_factory=dict)


class AgentExecutionResult(BaseModel, frozen=True):
    status: ExecutionStatus
    exit_code: int
    output: str
    started_at: str
    completed_at: str
    duration_ms: int = Field(ge=0)
    errors: list[str] = Field(default_factory=list)
    details: dict[str, Any] = Field(default_factory=dict)
