"""Judge configuration model."""

from pydantic import BaseModel, Field


class JudgeConfig(BaseModel, frozen=True):
    model: str = Field(min_length=1)
    temperature: float = Field(default=0.0, ge=0.0)
