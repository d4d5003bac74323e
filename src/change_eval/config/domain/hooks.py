"""Lifecycle hook configuration models."""

from pydantic import BaseModel, Field


class HookConfig(BaseModel, frozen=True):
    name: str = Field(min_length=1)
    command: str = Field(min_length=1)
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    timeout_seconds: float = Field(default=300.0, gt=0)


class HooksConfig(BaseModel, frozen=True):
    pre_execution: list[HookConfig] = Field(default_factory=list)
    post_evaluation: list[HookConfig] = Field(default_factory=list)
