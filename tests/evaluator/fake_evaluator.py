"""FakeEvaluator — in-memory Evaluator implementation for use in tests."""

import asyncio

from change_eval.evaluator.domain.context import EvaluationContext
from change_eval.evaluator.domain.result import EvaluationResult, EvaluationStatus


class FakeEvaluator:
    """Satisfies the Evaluator protocol.

    Returns ``status`` unless ``error`` is set, in which case ``evaluate``
    raises it. ``delay_seconds`` sleeps before answering, for timeout and
    concurrency tests.
    """

    def __init__(
        self,
        name: str,
        status: EvaluationStatus = EvaluationStatus.PASSED,
        error: Exception | None = None,
        delay_seconds: float = 0.0,
        preconditions_met: bool = True,
        requires_expected_reference: bool = False,
    ) -> None:
        self._name = name
        self._status = status
        self._error = error
        self._delay_seconds = delay_seconds
        self._preconditions_met = preconditions_met
        self._requires_expected_reference = requires_expected_reference
        self._calls = 0
        self._active = 0
        self._peak_active = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return f"fake evaluator {self._name}"

    @property
    def requires_expected_reference(self) -> bool:
        return self._requires_expected_reference

    @property
    def precondition_message(self) -> str:
        return "fake precondition unmet"

    @property
    def calls(self) -> int:
        return self._calls

    @property
    def peak_active(self) -> int:
        return self._peak_active

    async def check_preconditions(self, context: EvaluationContext) -> bool:
        return self._preconditions_met

    async def evaluate(self, context: EvaluationContext) -> EvaluationResult:
        self._calls += 1
        self._active += 1
        self._peak_active = max(self._peak_active, self._active)
        try:
            if self._delay_seconds:
                await asyncio.sleep(self._delay_seconds)
            if self._error is not None:
                raise self._error
            return EvaluationResult(
                evaluator=self._name,
                status=self._status,
                metrics={"calls": self._calls},
                message=f"{self._name} {self._status.value}",
            )
        finally:
            self._active -= 1


class SharedCounter:
    """Tracks how many evaluators sharing it are running at the same time."""

    def __init__(self) -> None:
        self.active = 0
        self.peak = 0


class CountingEvaluator(FakeEvaluator):
    def __init__(self, name: str, counter: SharedCounter, delay_seconds: float) -> None:
        super().__init__(name=name, delay_seconds=delay_seconds)
        self._counter = counter

    async def evaluate(self, context: EvaluationContext) -> EvaluationResult:
        self._counter.active += 1
        self._counter.peak = max(self._counter.peak, self._counter.active)
        try:
            return await super().evaluate(context)
        finally:
            self._counter.active -= 1
