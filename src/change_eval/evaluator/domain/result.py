"""EvaluationResult — the single, immutable verdict one evaluator produces per run."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, TypeAlias

from pydantic import BaseModel, Field


class EvaluationStatus(StrEnum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class EvaluationArtifact(BaseModel, frozen=True):
    type: str
    path: str
    description: str | None = None


class EvaluationErrorDetail(BaseModel, frozen=True):
    """Captured failure inside an evaluator; ``error_type`` is the exception class or 'timeout'."""

    message: str
    error_type: str
    stack_trace: str | None = None


MetricValue: TypeAlias = int | float | str | bool | None | list[Any] | dict[str, Any]


class EvaluationResult(BaseModel, frozen=True):
    evaluator: str = Field(min_length=1)
    status: EvaluationStatus
    metrics: dict[str, MetricValue] = Field(default_factory=dict)
    message: str
    duration_ms: int = Field(default=0, ge=0)
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    assertions: dict[str, Any] | None = None
    artifacts: list[EvaluationArtifact] | None = None
    error: EvaluationErrorDetail | None = None
