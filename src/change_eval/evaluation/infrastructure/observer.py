"""StructlogEvaluationObserver — production observer that delegates to structlog."""

import structlog


class StructlogEvaluationObserver:
    """Logs evaluation domain events to structlog.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def run_started(self, run_id: str, name: str, evaluator_names: list[str]) -> None:
        self._log.info(
            "run.started", run_id=run_id, name=name, evaluators=evaluator_names
        )

    def run_completed(
        self, run_id: str, overall_status: str, elapsed_seconds: float
    ) -> None:
        self._log.info(
            "run.completed",
            run_id=run_id,
            overall_status=overall_status,
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def run_failed(self, run_id: str, reason: str) -> None:
        self._log.error("run.failed", run_id=run_id, reason=reason)

    def agent_finished(
        self, run_id: str, agent_type: str, status: str, duration_ms: int
    ) -> None:
        self._log.info(
            "run.agent_finished",
            run_id=run_id,
            agent_type=agent_type,
            status=status,
            duration_ms=duration_ms,
        )

    def evaluators_started(self, run_id: str, total: int, max_concurrent: int) -> None:
        self._log.info(
            "evaluation.started",
            run_id=run_id,
            total=total,
            max_concurrent=max_concurrent,
        )

    def evaluators_completed(
        self, run_id: str, total: int, elapsed_seconds: float
    ) -> None:
        self._log.info(
            "evaluation.completed",
            run_id=run_id,
            total=total,
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def evaluator_started(self, run_id: str, evaluator: str) -> None:
        self._log.debug("evaluator.started", run_id=run_id, evaluator=evaluator)

    def evaluator_completed(
        self, run_id: str, evaluator: str, status: str, duration_ms: int
    ) -> None:
        self._log.info(
            "evaluator.completed",
            run_id=run_id,
            evaluator=evaluator,
            status=status,
            duration_ms=duration_ms,
        )

    def evaluator_skipped(self, run_id: str, evaluator: str, reason: str) -> None:
        self._log.warning(
            "evaluator.skipped", run_id=run_id, evaluator=evaluator, reason=reason
        )

    def evaluator_errored(
        self, run_id: str, evaluator: str, error_type: str, reason: str
    ) -> None:
        self._log.error(
            "evaluator.errored",
            run_id=run_id,
            evaluator=evaluator,
            error_type=error_type,
            reason=reason,
        )

    def evaluator_timed_out(
        self, run_id: str, evaluator: str, timeout_seconds: float
    ) -> None:
        self._log.warning(
            "evaluator.timed_out",
            run_id=run_id,
            evaluator=evaluator,
            timeout_seconds=timeout_seconds,
        )

    def bundle_saved(self, run_id: str, path: str) -> None:
        self._log.info("run.bundle_saved", run_id=run_id, path=path)
