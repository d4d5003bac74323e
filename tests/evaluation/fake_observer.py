"""FakeEvaluationObserver — records evaluation domain events for assertion in tests."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RunStartedEvent:
    run_id: str
    name: str
    evaluator_names: list[str]


@dataclass(frozen=True)
class RunCompletedEvent:
    run_id: str
    overall_status: str
    elapsed_seconds: float


@dataclass(frozen=True)
class RunFailedEvent:
    run_id: str
    reason: str


@dataclass(frozen=True)
class AgentFinishedEvent:
    run_id: str
    agent_type: str
    status: str
    duration_ms: int


@dataclass(frozen=True)
class EvaluatorCompletedEvent:
    run_id: str
    evaluator: str
    status: str
    duration_ms: int


@dataclass(frozen=True)
class EvaluatorSkippedEvent:
    run_id: str
    evaluator: str
    reason: str


@dataclass(frozen=True)
class EvaluatorErroredEvent:
    run_id: str
    evaluator: str
    error_type: str
    reason: str


@dataclass(frozen=True)
class EvaluatorTimedOutEvent:
    run_id: str
    evaluator: str
    timeout_seconds: float


class FakeEvaluationObserver:
    """Records all emitted evaluation events as typed frozen dataclasses.

    Event lists use a leading underscore + public property pattern to avoid
    name collision between the list attributes and the Protocol method names.
    """

    def __init__(self) -> None:
        self._run_started: list[RunStartedEvent] = []
        self._run_completed: list[RunCompletedEvent] = []
        self._run_failed: list[RunFailedEvent] = []
        self._agent_finished: list[AgentFinishedEvent] = []
        self._evaluators_started: list[tuple[str, int, int]] = []
        self._evaluators_completed: list[tuple[str, int]] = []
        self._evaluator_started: list[str] = []
        self._evaluator_completed: list[EvaluatorCompletedEvent] = []
        self._evaluator_skipped: list[EvaluatorSkippedEvent] = []
        self._evaluator_errored: list[EvaluatorErroredEvent] = []
        self._evaluator_timed_out: list[EvaluatorTimedOutEvent] = []
        self._bundles_saved: list[str] = []

    @property
    def runs_started(self) -> list[RunStartedEvent]:
        return self._run_started

    @property
    def runs_completed(self) -> list[RunCompletedEvent]:
        return self._run_completed

    @property
    def runs_failed(self) -> list[RunFailedEvent]:
        return self._run_failed

    @property
    def agents_finished(self) -> list[AgentFinishedEvent]:
        return self._agent_finished

    @property
    def batches_started(self) -> list[tuple[str, int, int]]:
        return self._evaluators_started

    @property
    def batches_completed(self) -> list[tuple[str, int]]:
        return self._evaluators_completed

    @property
    def started(self) -> list[str]:
        return self._evaluator_started

    @property
    def completed(self) -> list[EvaluatorCompletedEvent]:
        return self._evaluator_completed

    @property
    def skipped(self) -> list[EvaluatorSkippedEvent]:
        return self._evaluator_skipped

    @property
    def errored(self) -> list[EvaluatorErroredEvent]:
        return self._evaluator_errored

    @property
    def timed_out(self) -> list[EvaluatorTimedOutEvent]:
        return self._evaluator_timed_out

    @property
    def bundles_saved(self) -> list[str]:
        return self._bundles_saved

    def run_started(self, run_id: str, name: str, evaluator_names: list[str]) -> None:
        self._run_started.append(
            RunStartedEvent(run_id=run_id, name=name, evaluator_names=evaluator_names)
        )

    def run_completed(
        self, run_id: str, overall_status: str, elapsed_seconds: float
    ) -> None:
        self._run_completed.append(
            RunCompletedEvent(
                run_id=run_id,
                overall_status=overall_status,
                elapsed_seconds=elapsed_seconds,
            )
        )

    def run_failed(self, run_id: str, reason: str) -> None:
        self._run_failed.append(RunFailedEvent(run_id=run_id, reason=reason))

    def agent_finished(
        self, run_id: str, agent_type: str, status: str, duration_ms: int
    ) -> None:
        self._agent_finished.append(
            AgentFinishedEvent(
                run_id=run_id,
                agent_type=agent_type,
                status=status,
                duration_ms=duration_ms,
            )
        )

    def evaluators_started(self, run_id: str, total: int, max_concurrent: int) -> None:
        self._evaluators_started.append((run_id, total, max_concurrent))

    def evaluators_completed(
        self, run_id: str, total: int, elapsed_seconds: float
    ) -> None:
        self._evaluators_completed.append((run_id, total))

    def evaluator_started(self, run_id: str, evaluator: str) -> None:
        self._evaluator_started.append(evaluator)

    def evaluator_completed(
        self, run_id: str, evaluator: str, status: str, duration_ms: int
    ) -> None:
        self._evaluator_completed.append(
            EvaluatorCompletedEvent(
                run_id=run_id,
                evaluator=evaluator,
                status=status,
                duration_ms=duration_ms,
            )
        )

    def evaluator_skipped(self, run_id: str, evaluator: str, reason: str) -> None:
        self._evaluator_skipped.append(
            EvaluatorSkippedEvent(run_id=run_id, evaluator=evaluator, reason=reason)
        )

    def evaluator_errored(
        self, run_id: str, evaluator: str, error_type: str, reason: str
    ) -> None:
        self._evaluator_errored.append(
            EvaluatorErroredEvent(
                run_id=run_id,
                evaluator=evaluator,
                error_type=error_type,
                reason=reason,
            )
        )

    def evaluator_timed_out(
        self, run_id: str, evaluator: str, timeout_seconds: float
    ) -> None:
        self._evaluator_timed_out.append(
            EvaluatorTimedOutEvent(
                run_id=run_id, evaluator=evaluator, timeout_seconds=timeout_seconds
            )
        )

    def bundle_saved(self, run_id: str, path: str) -> None:
        self._bundles_saved.append(path)
