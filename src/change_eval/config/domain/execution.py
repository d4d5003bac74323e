"""Execution configuration model."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class ExecutionConfig(BaseModel, frozen=True):
    max_concurrent_evaluators: int = Field(default=4, ge=1)
    evaluator_timeout_seconds: float = Field(default=300.0, gt=0)
    run_timeout_seconds: float | None = Field(default=None, gt=0)
    clone_timeout_seconds: float = Field(default=300.0, gt=0)
    agent_timeout_seconds: float = Field(default=1800.0, gt=0)
    keep_workspace: bool = True
    workspace_root: Path = Path(".change-eval-workspace")
    timeout_status: Literal["skipped", "failed"] = "skipped"
