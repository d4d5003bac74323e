"""Judge request and verdict — the strict schema the judge must answer in."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class JudgeRequest(BaseModel, frozen=True):
    """What the judge is asked to assess: named assertions over a code change."""

    evaluator: str
    assertions: dict[str, str] = Field(min_length=1)
    agent_prompt: str
    diff: str
    changed_files: list[str] = Field(default_factory=list)


class AssertionVerdict(BaseModel, frozen=True):
    model_config = ConfigDict(extra="forbid")

    passed: bool
    reasoning: str


class JudgeVerdict(BaseModel, frozen=True):
    model_config = ConfigDict(extra="forbid")

    status: Literal["passed", "failed"]
    assertions: dict[str, AssertionVerdict]
    summary: str
