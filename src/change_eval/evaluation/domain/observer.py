"""Observer port for the evaluation domain — defines events in domain language."""

from typing import Protocol


class EvaluationObserver(Protocol):
    """Observer port emitting structured events during a run.

    Implementations may log to structlog, render progress, or record for tests.
    """

    def run_started(self, run_id: str, name: str, evaluator_names: list[str]) -> None: ...

    def run_completed(
        self, run_id: str, overall_status: str, elapsed_seconds: float
    ) -> None: ...

    def run_failed(self, run_id: str, reason: str) -> None: ...

    def agent_finished(
        self, run_id: str, agent_type: str, status: str, duration_ms: int
    ) -> None: ...

    def evaluators_started(
        self, run_id: str, total: int, max_concurrent: int
    ) -> None: ...

    def evaluators_completed(
        self, run_id: str, total: int, elapsed_seconds: float
    ) -> None: ...

    def evaluator_started(self, run_id: str, evaluator: str) -> None: ...

    def evaluator_completed(
        self, run_id: str, evaluator: str, status: str, duration_ms: int
    ) -> None: ...

    def evaluator_skipped(self, run_id: str, evaluator: str, reason: str) -> None: ...

    def evaluator_errored(
        self, run_id: str, evaluator: str, error_type: str, reason: str
    ) -> None: ...

    def evaluator_timed_out(
        self, run_id: str, evaluator: str, timeout_seconds: float
    ) -> None: ...

    def bundle_saved(self, run_id: str, path: str) -> None: ...
