"""Evaluator specification model — one entry per configured evaluator."""

from typing import Any

from pydantic import BaseModel, Field


class EvaluatorSpec(BaseModel, frozen=True):
    """A configured evaluator: registry name, its own config, optional timeout.

    ``config`` is opaque here; each evaluator validates its own section when
    it runs.
    """

    name: str = Field(min_length=1)
    config: dict[str, Any] = Field(default_factory=dict)
    timeout_seconds: float | None = Field(default=None, gt=0)


JUDGE_EVALUATOR_NAME = "agentic-judge"


def is_judge_evaluator(name: str) -> bool:
    """True for ``agentic-judge`` and its named variants (``agentic-judge-x``, ``agentic-judge:x``)."""
    return name == JUDGE_EVALUATOR_NAME or (
        name.startswith(JUDGE_EVALUATOR_NAME)
        and name[len(JUDGE_EVALUATOR_NAME)] in "-:"
        and len(name) > len(JUDGE_EVALUATOR_NAME) + 1
    )
