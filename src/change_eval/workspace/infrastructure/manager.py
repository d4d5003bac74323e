"""WorkspaceManager — allocates, locks, materializes and cleans up run directories."""

import os
import shutil
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

from change_eval.workspace.domain.observer import WorkspaceObserver
from change_eval.workspace.domain.run_id import make_run_id
from change_eval.workspace.domain.workspace import RepoRef, Workspace, WorkspacePaths
from change_eval.workspace.infrastructure import git, lock
from change_eval.workspace.infrastructure.errors import (
    GitCommandError,
    LockStaleError,
    MaterializeError,
    SetupError,
)


class WorkspaceManager:
    """Owns the on-disk lifecycle of run workspaces under a single root.

    Use ``lease()`` to get a locked workspace that is released and cleaned up
    on every exit path, including cancellation.
    """

    def __init__(self, root: Path, observer: WorkspaceObserver) -> None:
        self._root = root
        self._observer = observer

    def create_workspace(
        self,
        name: str | None = None,
        run_id: str | None = None,
        repo: str | None = None,
    ) -> Workspace:
        """Allocate a fresh run directory with its artifacts subtree.

        Raises:
            SetupError: if the directories cannot be created or the run id is taken.
        """
        resolved_id = run_id or make_run_id(name)
        paths = WorkspacePaths.for_run(root=self._root.resolve(), run_id=resolved_id)
        try:
            paths.root.mkdir(parents=True, exist_ok=True)
            paths.run_dir.mkdir(exist_ok=run_id is not None)
            paths.evaluator_artifacts_dir.mkdir(parents=True, exist_ok=True)
        except FileExistsError as exc:
            raise SetupError(f"run directory already exists: {paths.run_dir}") from exc
        except OSError as exc:
            raise SetupError(f"cannot create {paths.run_dir}: {exc}") from exc

        self._observer.workspace_created(run_id=resolved_id, run_dir=paths.run_dir)
        return Workspace(
            run_id=resolved_id,
            paths=paths,
            created_at=datetime.now(UTC).isoformat(),
            repo=repo,
        )

    def acquire_lock(self, lock_file: Path, repo: str | None = None) -> None:
        """Take the lock at ``lock_file``, healing a stale lock once.

        Raises:
            WorkspaceLockedError: if a live process holds the lock.
            SetupError: if the lock cannot be written.
        """
        info = lock.new_lock_info(repo=repo)
        try:
            lock.try_create_lock(lock_file, info)
        except LockStaleError as stale:
            if lock.remove_stale_lock(lock_file):
                self._observer.workspace_lock_stale_removed(
                    lock_file=lock_file, stale_pid=stale.stale_pid
                )
            try:
                lock.try_create_lock(lock_file, info)
            except LockStaleError as again:
                raise SetupError(
                    f"lock at {lock_file} stayed stale after removal"
                ) from again
        self._observer.workspace_lock_acquired(lock_file=lock_file, pid=info.pid)

    def release_lock(self, lock_file: Path) -> None:
        if lock.remove_lock(lock_file, only_if_pid=os.getpid()):
            self._observer.workspace_lock_released(lock_file=lock_file)

    async def materialize(
        self, repo_ref: RepoRef, target_dir: Path, timeout: float
    ) -> str:
        """Clone ``repo_ref`` into ``target_dir`` and return the resolved HEAD SHA.

        Raises:
            MaterializeError: if the clone or checkout fails or times out.
        """
        self._observer.workspace_materialize_started(
            target_dir=target_dir,
            repo=repo_ref.repo,
            branch=repo_ref.branch,
            commit=repo_ref.commit,
        )
        start = time.monotonic()
        try:
            if target_dir.exists():
                # Left over from an earlier run that reused this run id.
                shutil.rmtree(target_dir)
            head = await git.clone(
                repo=repo_ref.repo,
                target_dir=target_dir,
                branch=repo_ref.branch,
                commit=repo_ref.commit,
                timeout=timeout,
            )
        except (GitCommandError, OSError) as exc:
            self._observer.workspace_materialize_failed(
                target_dir=target_dir, reason=str(exc)
            )
            raise MaterializeError(target_dir=target_dir, reason=str(exc)) from exc

        self._observer.workspace_materialize_completed(
            target_dir=target_dir,
            head_commit=head,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        return head

    async def materialize_modified(
        self, workspace: Workspace, repo_ref: RepoRef, timeout: float
    ) -> Workspace:
        head = await self.materialize(repo_ref, workspace.paths.modified_dir, timeout)
        return workspace.model_copy(
            update={"branch": repo_ref.branch, "modified_commit": head}
        )

    async def materialize_expected(
        self, workspace: Workspace, repo_ref: RepoRef, timeout: float
    ) -> Workspace:
        head = await self.materialize(repo_ref, workspace.paths.expected_dir, timeout)
        return workspace.model_copy(
            update={
                "expected_branch": repo_ref.branch,
                "expected_commit": head,
                "has_expected": True,
            }
        )

    def cleanup(self, workspace: Workspace, keep: bool) -> None:
        """Release the lock and, unless ``keep``, delete the run directory.

        Never raises; failures are reported to the observer.
        """
        try:
            self.release_lock(workspace.paths.lock_file)
        except OSError as exc:
            self._observer.workspace_cleanup_failed(
                run_dir=workspace.paths.run_dir, reason=f"lock release: {exc}"
            )

        if not keep:
            try:
                shutil.rmtree(workspace.paths.run_dir)
            except FileNotFoundError:
                pass
            except OSError as exc:
                self._observer.workspace_cleanup_failed(
                    run_dir=workspace.paths.run_dir, reason=str(exc)
                )
                return
        self._observer.workspace_cleaned(run_dir=workspace.paths.run_dir, kept=keep)

    @asynccontextmanager
    async def lease(
        self,
        name: str | None = None,
        run_id: str | None = None,
        repo: str | None = None,
        keep: bool = True,
    ) -> AsyncIterator[Workspace]:
        """Create and lock a workspace; release and clean it up on exit.

        A generated run directory is removed again if it cannot be locked; an
        explicit ``run_id`` may name a directory kept from an earlier run, so
        it is left in place.

        Raises:
            SetupError: if the workspace cannot be created or locked.
        """
        workspace = self.create_workspace(name=name, run_id=run_id, repo=repo)
        try:
            self.acquire_lock(workspace.paths.lock_file, repo=repo)
        except SetupError:
            if run_id is None:
                self.cleanup(workspace, keep=False)
            raise
        try:
            yield workspace
        finally:
            self.cleanup(workspace, keep)
