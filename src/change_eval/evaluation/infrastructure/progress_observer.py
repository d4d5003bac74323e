"""ProgressEvaluationObserver — renders evaluator progress as a Rich bar on stderr."""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    Progress,
    ProgressColumn,
    Task,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

_STATUS_STYLES: dict[str, str] = {
    "passed": "bright_green",
    "failed": "red",
    "skipped": "yellow",
}


class _ThreeSegmentBarColumn(ProgressColumn):
    """Renders three segments: settled, running, waiting."""

    def __init__(self, bar_width: int = 30) -> None:
        super().__init__()
        self.bar_width = bar_width

    def render(self, task: Task) -> Text:
        total = task.total or 0
        if total > 0:
            done_cells = int(task.completed / total * self.bar_width)
            running = int(task.fields.get("running", 0))
            running_cells = min(
                int(running / total * self.bar_width), self.bar_width - done_cells
            )
        else:
            done_cells = 0
            running_cells = 0
        result = Text()
        result.append("█" * done_cells, style="bright_green")
        result.append("▒" * running_cells, style="grey50")
        result.append("░" * (self.bar_width - done_cells - running_cells), style="dim white")
        return result


class ProgressEvaluationObserver:
    """Shows settled/running/waiting evaluators and prints one line per verdict.

    Only evaluator events produce output; run-level events are no-ops.
    Pass ``disabled=True`` to suppress all terminal output (useful in tests).

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self._running = 0
        self._done = 0
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None

    @property
    def done(self) -> int:
        return self._done

    @property
    def running(self) -> int:
        return self._running

    def _refresh(self) -> None:
        if self._progress is not None and self._task_id is not None:
            self._progress.update(
                self._task_id, completed=self._done, running=self._running
            )

    def run_started(self, run_id: str, name: str, evaluator_names: list[str]) -> None:
        pass

    def run_completed(
        self, run_id: str, overall_status: str, elapsed_seconds: float
    ) -> None:
        pass

    def run_failed(self, run_id: str, reason: str) -> None:
        self._stop()

    def agent_finished(
        self, run_id: str, agent_type: str, status: str, duration_ms: int
    ) -> None:
        pass

    def evaluators_started(self, run_id: str, total: int, max_concurrent: int) -> None:
        self._running = 0
        self._done = 0
        if self._disabled:
            return
        self._progress = Progress(
            TextColumn("[bold]Evaluators[/bold]"),
            _ThreeSegmentBarColumn(),
            TextColumn("{task.completed:.0f}/{task.total:.0f}"),
            TimeElapsedColumn(),
            console=Console(stderr=True),
            transient=False,
        )
        self._task_id = self._progress.add_task("evaluators", total=float(total), running=0)
        self._progress.start()

    def evaluators_completed(
        self, run_id: str, total: int, elapsed_seconds: float
    ) -> None:
        self._stop()

    def evaluator_started(self, run_id: str, evaluator: str) -> None:
        self._running += 1
        self._refresh()

    def evaluator_completed(
        self, run_id: str, evaluator: str, status: str, duration_ms: int
    ) -> None:
        self._running = max(0, self._running - 1)
        self._done += 1
        if self._progress is not None:
            style = _STATUS_STYLES.get(status, "default")
            self._progress.console.print(
                Text.assemble(
                    "  ",
                    (f"{status:<8}", style),
                    f"{evaluator}  ",
                    (f"{duration_ms / 1000:.1f}s", "dim"),
                )
            )
        self._refresh()

    def evaluator_skipped(self, run_id: str, evaluator: str, reason: str) -> None:
        pass

    def evaluator_errored(
        self, run_id: str, evaluator: str, error_type: str, reason: str
    ) -> None:
        pass

    def evaluator_timed_out(
        self, run_id: str, evaluator: str, timeout_seconds: float
    ) -> None:
        pass

    def bundle_saved(self, run_id: str, path: str) -> None:
        pass

    def _stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task_id = None
