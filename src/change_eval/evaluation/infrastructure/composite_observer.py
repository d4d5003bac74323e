"""CompositeEvaluationObserver — fans out all events to a list of observers."""

from change_eval.evaluation.domain.observer import EvaluationObserver


class CompositeEvaluationObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[EvaluationObserver]) -> None:
        self._observers = observers

    def run_started(self, run_id: str, name: str, evaluator_names: list[str]) -> None:
        for obs in self._observers:
            obs.run_started(run_id=run_id, name=name, evaluator_names=evaluator_names)

    def run_completed(
        self, run_id: str, overall_status: str, elapsed_seconds: float
    ) -> None:
        for obs in self._observers:
            obs.run_completed(
                run_id=run_id,
                overall_status=overall_status,
                elapsed_seconds=elapsed_seconds,
            )

    def run_failed(self, run_id: str, reason: str) -> None:
        for obs in self._observers:
            obs.run_failed(run_id=run_id, reason=reason)

    def agent_finished(
        self, run_id: str, agent_type: str, status: str, duration_ms: int
    ) -> None:
        for obs in self._observers:
            obs.agent_finished(
                run_id=run_id,
                agent_type=agent_type,
                status=status,
                duration_ms=duration_ms,
            )

    def evaluators_started(self, run_id: str, total: int, max_concurrent: int) -> None:
        for obs in self._observers:
            obs.evaluators_started(
                run_id=run_id, total=total, max_concurrent=max_concurrent
            )

    def evaluators_completed(
        self, run_id: str, total: int, elapsed_seconds: float
    ) -> None:
        for obs in self._observers:
            obs.evaluators_completed(
                run_id=run_id, total=total, elapsed_seconds=elapsed_seconds
            )

    def evaluator_started(self, run_id: str, evaluator: str) -> None:
        for obs in self._observers:
            obs.evaluator_started(run_id=run_id, evaluator=evaluator)

    def evaluator_completed(
        self, run_id: str, evaluator: str, status: str, duration_ms: int
    ) -> None:
        for obs in self._observers:
            obs.evaluator_completed(
                run_id=run_id,
                evaluator=evaluator,
                status=status,
                duration_ms=duration_ms,
            )

    def evaluator_skipped(self, run_id: str, evaluator: str, reason: str) -> None:
        for obs in self._observers:
            obs.evaluator_skipped(run_id=run_id, evaluator=evaluator, reason=reason)

    def evaluator_errored(
        self, run_id: str, evaluator: str, error_type: str, reason: str
    ) -> None:
        for obs in self._observers:
            obs.evaluator_errored(
                run_id=run_id,
                evaluator=evaluator,
                error_type=error_type,
                reason=reason,
            )

    def evaluator_timed_out(
        self, run_id: str, evaluator: str, timeout_seconds: float
    ) -> None:
        for obs in self._observers:
            obs.evaluator_timed_out(
                run_id=run_id, evaluator=evaluator, timeout_seconds=timeout_seconds
            )

    def bundle_saved(self, run_id: str, path: str) -> None:
        for obs in self._observers:
            obs.bundle_saved(run_id=run_id, path=path)
