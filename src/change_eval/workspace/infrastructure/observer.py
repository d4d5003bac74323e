"""StructlogWorkspaceObserver — production observer that delegates to structlog."""

from pathlib import Path

import structlog


class StructlogWorkspaceObserver:
    """Logs workspace lifecycle events to structlog."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def workspace_created(self, run_id: str, run_dir: Path) -> None:
        self._log.info("workspace.created", run_id=run_id, run_dir=str(run_dir))

    def workspace_lock_acquired(self, lock_file: Path, pid: int) -> None:
        self._log.debug("workspace.lock.acquired", lock_file=str(lock_file), pid=pid)

    def workspace_lock_stale_removed(
        self, lock_file: Path, stale_pid: int | None
    ) -> None:
        self._log.warning(
            "workspace.lock.stale_removed",
            lock_file=str(lock_file),
            stale_pid=stale_pid,
        )

    def workspace_lock_released(self, lock_file: Path) -> None:
        self._log.debug("workspace.lock.released", lock_file=str(lock_file))

    def workspace_materialize_started(
        self, target_dir: Path, repo: str, branch: str | None, commit: str | None
    ) -> None:
        self._log.info(
            "workspace.materialize.started",
            target_dir=str(target_dir),
            repo=repo,
            branch=branch,
            commit=commit,
        )

    def workspace_materialize_completed(
        self, target_dir: Path, head_commit: str, duration_ms: int
    ) -> None:
        self._log.info(
            "workspace.materialize.completed",
            target_dir=str(target_dir),
            head_commit=head_commit,
            duration_ms=duration_ms,
        )

    def workspace_materialize_failed(self, target_dir: Path, reason: str) -> None:
        self._log.error(
            "workspace.materialize.failed", target_dir=str(target_dir), reason=reason
        )

    def workspace_cleaned(self, run_dir: Path, kept: bool) -> None:
        self._log.info("workspace.cleaned", run_dir=str(run_dir), kept=kept)

    def workspace_cleanup_failed(self, run_dir: Path, reason: str) -> None:
        self._log.warning(
            "workspace.cleanup.failed", run_dir=str(run_dir), reason=reason
        )
