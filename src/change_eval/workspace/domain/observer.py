"""Observer port for the workspace domain."""

from pathlib import Path
from typing import Protocol


class WorkspaceObserver(Protocol):
    """Observer port emitting structured events across a workspace's lifecycle."""

    def workspace_created(self, run_id: str, run_dir: Path) -> None: ...

    def workspace_lock_acquired(self, lock_file: Path, pid: int) -> None: ...

    def workspace_lock_stale_removed(
        self, lock_file: Path, stale_pid: int | None
    ) -> None: ...

    def workspace_lock_released(self, lock_file: Path) -> None: ...

    def workspace_materialize_started(
        self, target_dir: Path, repo: str, branch: str | None, commit: str | None
    ) -> None: ...

    def workspace_materialize_completed(
        self, target_dir: Path, head_commit: str, duration_ms: int
    ) -> None: ...

    def workspace_materialize_failed(self, target_dir: Path, reason: str) -> None: ...

    def workspace_cleaned(self, run_dir: Path, kept: bool) -> None: ...

    def workspace_cleanup_failed(self, run_dir: Path, reason: str) -> None: ...
