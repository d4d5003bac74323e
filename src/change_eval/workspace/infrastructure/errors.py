"""Error types raised by workspace infrastructure."""

from pathlib import Path

from change_eval.core.errors import ChangeEvalError


class SetupError(ChangeEvalError):
    """Raised when a run directory, clone, checkout, or lock cannot be set up.

    Fatal for the run: the orchestrator aborts and cleans up.
    """

    def __init__(self, reason: str, retriable: bool = False) -> None:
        super().__init__(f"Failed to set up workspace: {reason}", retriable=retriable)


class WorkspaceLockedError(SetupError):
    """Raised when another live process holds the workspace lock."""

    def __init__(self, lock_file: Path, owner_pid: int) -> None:
        self.lock_file = lock_file
        self.owner_pid = owner_pid
        super().__init__(
            f"workspace is locked by running process {owner_pid} ({lock_file})",
            retriable=True,
        )


class MaterializeError(SetupError):
    """Raised when a repository state cannot be cloned or checked out."""

    def __init__(self, target_dir: Path, reason: str) -> None:
        self.target_dir = target_dir
        super().__init__(f"could not materialize {target_dir.name}: {reason}")


class LockStaleError(ChangeEvalError):
    """Raised internally when an existing lock's owner is gone; healed by the manager."""

    def __init__(self, lock_file: Path, stale_pid: int | None) -> None:
        self.lock_file = lock_file
        self.stale_pid = stale_pid
        super().__init__(
            f"Failed to acquire lock: stale lock at {lock_file} (pid {stale_pid})"
        )


class GitCommandError(ChangeEvalError):
    """Raised when a git subprocess exits non-zero or times out."""

    def __init__(self, args: list[str], reason: str) -> None:
        self.git_args = args
        super().__init__(f"Failed to run git {' '.join(args)}: {reason}")
