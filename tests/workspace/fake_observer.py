"""FakeWorkspaceObserver — records workspace lifecycle events for assertion in tests."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LockStaleRemovedEvent:
    lock_file: Path
    stale_pid: int | None


@dataclass(frozen=True)
class MaterializeFailedEvent:
    target_dir: Path
    reason: str


@dataclass(frozen=True)
class CleanedEvent:
    run_dir: Path
    kept: bool


class FakeWorkspaceObserver:
    def __init__(self) -> None:
        self._created: list[str] = []
        self._locks_acquired: list[int] = []
        self._stale_removed: list[LockStaleRemovedEvent] = []
        self._locks_released: list[Path] = []
        self._materialized: list[str] = []
        self._materialize_failed: list[MaterializeFailedEvent] = []
        self._cleaned: list[CleanedEvent] = []
        self._cleanup_failed: list[str] = []

    @property
    def created(self) -> list[str]:
        return self._created

    @property
    def locks_acquired(self) -> list[int]:
        return self._locks_acquired

    @property
    def stale_removed(self) -> list[LockStaleRemovedEvent]:
        return self._stale_removed

    @property
    def locks_released(self) -> list[Path]:
        return self._locks_released

    @property
    def materialized(self) -> list[str]:
        return self._materialized

    @property
    def materialize_failed(self) -> list[MaterializeFailedEvent]:
        return self._materialize_failed

    @property
    def cleaned(self) -> list[CleanedEvent]:
        return self._cleaned

    @property
    def cleanup_failed(self) -> list[str]:
        return self._cleanup_failed

    def workspace_created(self, run_id: str, run_dir: Path) -> None:
        self._created.append(run_id)

    def workspace_lock_acquired(self, lock_file: Path, pid: int) -> None:
        self._locks_acquired.append(pid)

    def workspace_lock_stale_removed(
        self, lock_file: Path, stale_pid: int | None
    ) -> None:
        self._stale_removed.append(
            LockStaleRemovedEvent(lock_file=lock_file, stale_pid=stale_pid)
        )

    def workspace_lock_released(self, lock_file: Path) -> None:
        self._locks_released.append(lock_file)

    def workspace_materialize_started(
        self, target_dir: Path, repo: str, branch: str | None, commit: str | None
    ) -> None:
        pass

    def workspace_materialize_completed(
        self, target_dir: Path, head_commit: str, duration_ms: int
    ) -> None:
        self._materialized.append(head_commit)

    def workspace_materialize_failed(self, target_dir: Path, reason: str) -> None:
        self._materialize_failed.append(
            MaterializeFailedEvent(target_dir=target_dir, reason=reason)
        )

    def workspace_cleaned(self, run_dir: Path, kept: bool) -> None:
        self._cleaned.append(CleanedEvent(run_dir=run_dir, kept=kept))

    def workspace_cleanup_failed(self, run_dir: Path, reason: str) -> None:
        self._cleanup_failed.append(reason)
