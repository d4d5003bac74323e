"""Observer port for the judge domain — defines events in domain language."""

from typing import Protocol


class JudgeObserver(Protocol):
    def judge_started(self, evaluator: str, model: str, num_assertions: int) -> None: ...

    def judge_completed(
        self, evaluator: str, status: str, duration_ms: int
    ) -> None: ...

    def judge_failed(self, evaluator: str, reason: str) -> None: ...

    def judge_high_temperature_warned(self, model: str, temperature: float) -> None: ...
