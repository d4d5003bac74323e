"""Lifecycle hook protocol — named extension points around agent execution."""

from enum import StrEnum
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel


class HookPhase(StrEnum):
    PRE_EXECUTION = "pre_execution"
    POST_EVALUATION = "post_evaluation"


class HookContext(BaseModel, frozen=True):
    run_id: str
    phase: HookPhase
    modified_dir: Path
    artifacts_dir: Path
    results_path: Path | None = None


class HookOutcome(BaseModel, frozen=True):
    name: str
    phase: HookPhase
    success: bool
    exit_code: int | None = None
    duration_ms: int = 0
    error: str | None = None


class Hook(Protocol):
    @property
    def name(self) -> str: ...

    async def run(self, context: HookContext) -> HookOutcome:
        """
        Raises:
            HookError: if the hook fails.
        """
        ...
