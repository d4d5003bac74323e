"""StandardLog — the agent-independent record of one agent execution."""

from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, Field

STANDARD_LOG_VERSION = "1.0.0"

ExecutionStatus: TypeAlias = Literal["success", "failed", "timeout"]


class AgentInfo(BaseModel, frozen=True):
    name: str
    version: str
    adapter_version: str


class ModelInfo(BaseModel, frozen=True):
    name: str
    provider: str
    parameters: dict[str, Any] = Field(default_factory=dict)


class ExecutionInfo(BaseModel, frozen=True):
    started_at: str
    completed_at: str
    duration_ms: int = Field(ge=0)
    exit_code: int
    status: ExecutionStatus


class LogMessage(BaseModel, frozen=True):
    role: Literal["user", "assistant", "system", "tool"]
    content: str
    timestamp: str


class UsageInfo(BaseModel, frozen=True):
    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)
    estimated_cost_usd: float | None = None


class LogError(BaseModel, frozen=True):
    message: str
    timestamp: str


class EnvironmentInfo(BaseModel, frozen=True):
    os: str
    python_version: str
    tool_version: str
    working_directory: str


class StandardLog(BaseModel, frozen=True):
    version: str = STANDARD_LOG_VERSION
    agent: AgentInfo
    model: ModelInfo
    execution: ExecutionInfo
    messages: list[LogMessage] = Field(default_factory=list)
    usage: UsageInfo = Field(default_factory=UsageInfo)
    errors: list[LogError] = Field(default_factory=list)
    environment: EnvironmentInfo
