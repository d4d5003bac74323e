"""StructlogJudgeObserver — production observer that delegates to structlog."""

import structlog


class StructlogJudgeObserver:
    """Logs judge domain events to structlog."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def judge_started(self, evaluator: str, model: str, num_assertions: int) -> None:
        self._log.info(
            "judge.started",
            evaluator=evaluator,
            model=model,
            num_assertions=num_assertions,
        )

    def judge_completed(self, evaluator: str, status: str, duration_ms: int) -> None:
        self._log.info(
            "judge.completed",
            evaluator=evaluator,
            status=status,
            duration_ms=duration_ms,
        )

    def judge_failed(self, evaluator: str, reason: str) -> None:
        self._log.error("judge.failed", evaluator=evaluator, reason=reason)

    def judge_high_temperature_warned(self, model: str, temperature: float) -> None:
        self._log.warning(
            "judge.high_temperature",
            model=model,
            temperature=temperature,
        )
