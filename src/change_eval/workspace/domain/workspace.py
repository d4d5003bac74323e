"""Workspace value objects — on-disk layout and lock record for one run."""

from pathlib import Path

from pydantic import BaseModel, Field

MODIFIED_DIR_NAME = "src-modified"
EXPECTED_DIR_NAME = "src-expected"
ARTIFACTS_DIR_NAME = "artifacts"
EVALUATOR_ARTIFACTS_DIR_NAME = "evaluators"
LOCK_FILE_NAME = ".lock"


class WorkspacePaths(BaseModel, frozen=True):
    """Every path a run touches, derived from the workspace root and run id."""

    root: Path
    run_dir: Path
    modified_dir: Path
    expected_dir: Path
    artifacts_dir: Path
    evaluator_artifacts_dir: Path
    lock_file: Path

    @classmethod
    def for_run(cls, root: Path, run_id: str) -> "WorkspacePaths":
        run_dir = root / run_id
        artifacts_dir = run_dir / ARTIFACTS_DIR_NAME
        return cls(
            root=root,
            run_dir=run_dir,
            modified_dir=run_dir / MODIFIED_DIR_NAME,
            expected_dir=run_dir / EXPECTED_DIR_NAME,
            artifacts_dir=artifacts_dir,
            evaluator_artifacts_dir=artifacts_dir / EVALUATOR_ARTIFACTS_DIR_NAME,
            lock_file=run_dir / LOCK_FILE_NAME,
        )


class LockInfo(BaseModel, frozen=True):
    """Contents of a workspace lock file."""

    pid: int = Field(gt=0)
    created_at: str
    repo: str | None = None


class RepoRef(BaseModel, frozen=True):
    """A repository state to materialize: URL or local path, plus optional branch/commit."""

    repo: str = Field(min_length=1)
    branch: str | None = None
    commit: str | None = None


class Workspace(BaseModel, frozen=True):
    """An allocated, locked run directory.

    ``modified_commit`` and ``expected_commit`` are filled in by materialization;
    use ``model_copy(update=...)`` to derive the updated workspace.
    """

    run_id: str = Field(min_length=1)
    paths: WorkspacePaths
    created_at: str
    repo: str | None = None
    branch: str | None = None
    modified_commit: str | None = None
    expected_branch: str | None = None
    expected_commit: str | None = None
    has_expected: bool = False

    @property
    def modified_dir(self) -> Path:
        return self.paths.modified_dir

    @property
    def expected_dir(self) -> Path | None:
        return self.paths.expected_dir if self.has_expected else None

    @property
    def artifacts_dir(self) -> Path:
        return self.paths.artifacts_dir
