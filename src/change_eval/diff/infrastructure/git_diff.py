"""Collects a working tree's change set from git without touching the index."""

from pathlib import Path

from pydantic import BaseModel

from change_eval.diff.domain.metrics import FileChange
from change_eval.workspace.infrastructure.git import head_commit, run_git


class ChangeSet(BaseModel, frozen=True):
    base_ref: str
    head_commit: str
    files: list[FileChange]
    patch: str


async def collect_change_set(repo_dir: Path, base_ref: str = "HEAD") -> ChangeSet:
    """Tracked changes against ``base_ref`` plus untracked files.

    Untracked text files count every line as added; untracked binaries count
    as changed with no lines. The patch carries a new-file section for each
    untracked path, rendered with ``--no-index`` so the index is never touched.

    Raises:
        GitCommandError: if any git invocation fails.
    """
    numstat = await run_git(["diff", "--numstat", base_ref], cwd=repo_dir)
    files = parse_numstat(numstat)

    untracked = await run_git(
        ["ls-files", "--others", "--exclude-standard", "-z"], cwd=repo_dir
    )
    untracked_paths = [p for p in untracked.split("\0") if p]
    files.extend(_untracked_change(repo_dir, rel) for rel in untracked_paths)

    sections = [await run_git(["diff", base_ref], cwd=repo_dir)]
    for rel in untracked_paths:
        # --no-index exits 1 when the inputs differ, which a new file always does
        sections.append(
            await run_git(
                ["diff", "--no-index", "--", "/dev/null", rel],
                cwd=repo_dir,
                ok_exit_codes=(0, 1),
            )
        )
    patch = "".join(sections)
    return ChangeSet(
        base_ref=base_ref,
        head_commit=await head_commit(repo_dir),
        files=files,
        patch=patch,
    )


def parse_numstat(output: str) -> list[FileChange]:
    """Parse ``git diff --numstat`` output; ``-`` counts mark binary files."""
    files: list[FileChange] = []
    for line in output.splitlines():
        parts = line.split("\t", 2)
        if len(parts) != 3:
            continue
        added, removed, path = parts
        if added == "-" or removed == "-":
            files.append(
                FileChange(path=path, lines_added=0, lines_removed=0, binary=True)
            )
        else:
            files.append(
                FileChange(path=path, lines_added=int(added), lines_removed=int(removed))
            )
    return files


def _untracked_change(repo_dir: Path, rel: str) -> FileChange:
    data = (repo_dir / rel).read_bytes()
    if b"\0" in data[:8192]:
        return FileChange(path=rel, lines_added=0, lines_removed=0, binary=True)
    return FileChange(
        path=rel,
        lines_added=len(data.decode("utf-8", errors="replace").splitlines()),
        lines_removed=0,
    )
