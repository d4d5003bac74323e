"""PID lock files — exclusive creation with liveness-checked staleness."""

import errno
import os
import uuid
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from change_eval.workspace.domain.workspace import LockInfo
from change_eval.workspace.infrastructure.errors import (
    LockStaleError,
    SetupError,
    WorkspaceLockedError,
)


def is_process_alive(pid: int) -> bool:
    """Check whether ``pid`` names a running process using signal 0."""
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists but owned by someone else.
        return True
    except OSError as exc:
        return exc.errno != errno.ESRCH
    return True


def read_lock(lock_file: Path) -> LockInfo | None:
    """Return the parsed lock, or None if it is missing or unreadable."""
    try:
        return LockInfo.model_validate_json(lock_file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, ValueError, ValidationError):
        return None


def try_create_lock(lock_file: Path, info: LockInfo) -> None:
    """Create ``lock_file`` exclusively with ``info`` as its content.

    Raises:
        WorkspaceLockedError: if the lock exists and its owner is alive.
        LockStaleError: if the lock exists and its owner is gone or unreadable.
        SetupError: on any other I/O failure.
    """
    # Written aside and hard-linked into place, so the lock never exists empty.
    pending = lock_file.with_name(
        f"{lock_file.name}.{os.getpid()}-{uuid.uuid4().hex[:8]}"
    )
    try:
        pending.write_text(info.model_dump_json(indent=2), encoding="utf-8")
        os.link(pending, lock_file)
    except FileExistsError:
        existing = read_lock(lock_file)
        if existing is not None and is_process_alive(existing.pid):
            raise WorkspaceLockedError(lock_file=lock_file, owner_pid=existing.pid)
        raise LockStaleError(
            lock_file=lock_file,
            stale_pid=existing.pid if existing is not None else None,
        )
    except OSError as exc:
        raise SetupError(f"cannot create lock file {lock_file}: {exc}") from exc
    finally:
        pending.unlink(missing_ok=True)


def new_lock_info(repo: str | None = None) -> LockInfo:
    return LockInfo(
        pid=os.getpid(),
        created_at=datetime.now(UTC).isoformat(),
        repo=repo,
    )


def remove_lock(lock_file: Path, only_if_pid: int | None = None) -> bool:
    """Delete the lock file. With ``only_if_pid``, only when that pid owns it.

    Returns True if a file was removed.
    """
    if only_if_pid is not None:
        current = read_lock(lock_file)
        if current is None or current.pid != only_if_pid:
            return False
    try:
        lock_file.unlink()
    except FileNotFoundError:
        return False
    return True


def remove_stale_lock(lock_file: Path) -> bool:
    """Claim a stale lock by renaming it to a unique tombstone, then delete it.

    The rename is atomic, so racing healers never remove the same file twice.
    If the claimed file turns out to be a live lock, written by a healer that
    got there first, it is put back.

    Returns True if this call removed a stale lock, False if another healer
    already had.

    Raises:
        WorkspaceLockedError: if the claimed file belongs to a live process.
    """
    tombstone = lock_file.with_name(
        f"{lock_file.name}.stale-{os.getpid()}-{uuid.uuid4().hex[:8]}"
    )
    try:
        os.rename(lock_file, tombstone)
    except FileNotFoundError:
        return False

    claimed = read_lock(tombstone)
    if claimed is not None and is_process_alive(claimed.pid):
        try:
            os.link(tombstone, lock_file)
        except FileExistsError:
            pass
        finally:
            tombstone.unlink(missing_ok=True)
        raise WorkspaceLockedError(lock_file=lock_file, owner_pid=claimed.pid)

    tombstone.unlink(missing_ok=True)
    return True
