"""Evaluator protocol — a pluggable scoring unit over a finished change."""

from typing import Protocol

from change_eval.evaluator.domain.context import EvaluationContext
from change_eval.evaluator.domain.result import EvaluationResult


class Evaluator(Protocol):
    """Inspects the modified tree and returns exactly one EvaluationResult.

    ``evaluate`` may raise; the runner converts exceptions into results.
    """

    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def requires_expected_reference(self) -> bool: ...

    @property
    def precondition_message(self) -> str: ...

    async def check_preconditions(self, context: EvaluationContext) -> bool: ...

    async def evaluate(self, context: EvaluationContext) -> EvaluationResult: ...
