"""Thin async wrapper around the git CLI."""

import asyncio
from collections.abc import Mapping
from pathlib import Path

from change_eval.core.env import git_env
from change_eval.workspace.infrastructure.errors import GitCommandError

_DEFAULT_TIMEOUT_SECONDS = 120.0


async def run_git(
    args: list[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float = _DEFAULT_TIMEOUT_SECONDS,
    ok_exit_codes: tuple[int, ...] = (0,),
) -> str:
    """Run ``git <args>`` and return stdout.

    The child gets ``env`` (default: the filtered git environment), never the
    full host environment.

    Raises:
        GitCommandError: if git is missing, exits outside ``ok_exit_codes``, or
            exceeds ``timeout``.
    """
    full_args = ["git", *([] if cwd is None else ["-C", str(cwd)]), *args]
    try:
        proc = await asyncio.create_subprocess_exec(
            *full_args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            stdin=asyncio.subprocess.DEVNULL,
            env=dict(env) if env is not None else git_env(),
        )
    except FileNotFoundError as exc:
        raise GitCommandError(args, "git executable not found") from exc

    try:
        async with asyncio.timeout(timeout):
            stdout, stderr = await proc.communicate()
    except TimeoutError as exc:
        proc.kill()
        await proc.wait()
        raise GitCommandError(args, f"timed out after {timeout:.0f}s") from exc
    except asyncio.CancelledError:
        if proc.returncode is None:
            proc.kill()
            await proc.wait()
        raise

    if proc.returncode not in ok_exit_codes:
        detail = stderr.decode("utf-8", errors="replace").strip()
        raise GitCommandError(args, f"exit code {proc.returncode}: {detail}")
    return stdout.decode("utf-8", errors="replace")


async def clone(
    repo: str,
    target_dir: Path,
    branch: str | None,
    commit: str | None,
    timeout: float,
) -> str:
    """Clone ``repo`` into ``target_dir`` and return the checked-out HEAD SHA.

    Shallow when no commit is pinned; a pinned commit fetches full history
    first so the checkout can find it.

    Raises:
        GitCommandError: on any failing git step.
    """
    clone_args = ["clone"]
    if branch:
        clone_args += ["--branch", branch, "--single-branch"]
    if commit is None:
        clone_args += ["--depth", "1"]
    clone_args += [repo, str(target_dir)]
    await run_git(clone_args, timeout=timeout)

    if commit is not None:
        await checkout(target_dir, commit, timeout=timeout)
    return await head_commit(target_dir)


async def checkout(repo_dir: Path, commit: str, timeout: float) -> None:
    is_shallow = (
        await run_git(["rev-parse", "--is-shallow-repository"], cwd=repo_dir)
    ).strip() == "true"
    if is_shallow:
        await run_git(["fetch", "--unshallow"], cwd=repo_dir, timeout=timeout)
    await run_git(["checkout", "--quiet", commit], cwd=repo_dir, timeout=timeout)


async def head_commit(repo_dir: Path) -> str:
    return (await run_git(["rev-parse", "HEAD"], cwd=repo_dir)).strip()


async def is_work_tree(path: Path) -> bool:
    if not path.is_dir():
        return False
    try:
        out = await run_git(["rev-parse", "--is-inside-work-tree"], cwd=path)
    except GitCommandError:
        return False
    return out.strip() == "true"
